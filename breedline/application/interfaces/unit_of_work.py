from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from breedline.application.interfaces.repositories.animal_types import AnimalTypeRepository
from breedline.application.interfaces.repositories.animals import AnimalRepository
from breedline.application.interfaces.repositories.birth_events import BirthEventsRepository
from breedline.application.interfaces.repositories.farms import FarmRepository
from breedline.application.interfaces.repositories.genetic_profiles import (
    GeneticProfilesRepository,
)
from breedline.application.interfaces.repositories.mating_events import MatingEventsRepository
from breedline.application.interfaces.repositories.offspring_tracking import (
    OffspringTrackingRepository,
)
from breedline.application.interfaces.repositories.pregnancies import PregnanciesRepository


class UnitOfWork(Protocol):
    farms: FarmRepository
    animals: AnimalRepository
    animal_types: AnimalTypeRepository
    mating_events: MatingEventsRepository
    pregnancies: PregnanciesRepository
    birth_events: BirthEventsRepository
    offspring_tracking: OffspringTrackingRepository
    genetic_profiles: GeneticProfilesRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Nested transaction; rolling it back keeps the outer one usable.
    def savepoint(self) -> AbstractAsyncContextManager[object]: ...
