from __future__ import annotations

import copy
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID, uuid4

import pytest

from breedline.application.errors import AlreadyPregnant, ConflictError
from breedline.domain.models.animal import Animal
from breedline.domain.models.animal_type import AnimalType, GeneticsSettings
from breedline.domain.models.farm import Farm
from breedline.domain.models.genetic_profile import Eligibility
from breedline.domain.models.pregnancy import ACTIVE_STATUSES


def _page(items, limit, offset):
    end = offset + limit if limit is not None else None
    return items[offset:end]


class InMemoryFarms:
    def __init__(self) -> None:
        self.rows: dict[UUID, Farm] = {}

    async def get(self, farm_id):
        return copy.deepcopy(self.rows.get(farm_id))

    async def is_owned_by(self, farm_id, user_id):
        farm = self.rows.get(farm_id)
        return bool(farm and farm.is_owned_by(user_id))

    async def add(self, farm):
        self.rows[farm.id] = copy.deepcopy(farm)
        return farm


class InMemoryAnimalTypes:
    def __init__(self) -> None:
        self.rows: dict[UUID, AnimalType] = {}

    async def get(self, animal_type_id):
        return copy.deepcopy(self.rows.get(animal_type_id))

    async def add(self, animal_type):
        self.rows[animal_type.id] = copy.deepcopy(animal_type)
        return animal_type


class InMemoryAnimals:
    def __init__(self) -> None:
        self.rows: dict[UUID, Animal] = {}

    async def get(self, animal_id):
        return copy.deepcopy(self.rows.get(animal_id))

    async def add(self, animal):
        for other in self.rows.values():
            if other.farm_id == animal.farm_id and other.tag == animal.tag:
                raise ConflictError(f"Tag {animal.tag} already exists")
        self.rows[animal.id] = copy.deepcopy(animal)
        return copy.deepcopy(animal)

    async def update(self, animal):
        self.rows[animal.id] = copy.deepcopy(animal)
        return copy.deepcopy(animal)

    async def list_by_farm(
        self, farm_id, gender=None, animal_type_id=None, status=None, active_only=True
    ):
        items = [
            a
            for a in self.rows.values()
            if a.farm_id == farm_id
            and (gender is None or a.gender == gender)
            and (animal_type_id is None or a.animal_type_id == animal_type_id)
            and (status is None or a.status == status)
            and (not active_only or a.is_active)
        ]
        return copy.deepcopy(sorted(items, key=lambda a: a.tag))

    async def list_kin(self, animal):
        if animal.sire_id is None and animal.dam_id is None:
            return []
        return copy.deepcopy(
            [
                a
                for a in self.rows.values()
                if a.id != animal.id
                and (
                    (animal.sire_id is not None and a.sire_id == animal.sire_id)
                    or (animal.dam_id is not None and a.dam_id == animal.dam_id)
                )
            ]
        )

    async def list_offspring(self, parent_id):
        return copy.deepcopy(
            [a for a in self.rows.values() if parent_id in (a.sire_id, a.dam_id)]
        )

    async def list_tags_born_in_year(self, farm_id, year, prefix):
        return [
            a.tag
            for a in self.rows.values()
            if a.farm_id == farm_id
            and a.birth_date is not None
            and a.birth_date.year == year
            and a.tag.startswith(prefix)
        ]


class InMemoryMatingEvents:
    def __init__(self, animals: InMemoryAnimals) -> None:
        self.rows: dict = {}
        self._animals = animals

    async def add(self, event):
        self.rows[event.id] = copy.deepcopy(event)
        return copy.deepcopy(event)

    async def update(self, event):
        self.rows[event.id] = copy.deepcopy(event)
        return copy.deepcopy(event)

    async def get(self, event_id):
        event = self.rows.get(event_id)
        return copy.deepcopy(event) if event and event.is_active else None

    def _filtered(self, farm_id, animal_id, role, status, date_from, date_to):
        events = [
            e
            for e in self.rows.values()
            if e.farm_id == farm_id
            and e.is_active
            and (not status or e.status == status)
            and (not date_from or e.mating_date >= date_from)
            and (not date_to or e.mating_date <= date_to)
        ]
        if animal_id and role == "sire":
            events = [e for e in events if e.sire_id == animal_id]
        elif animal_id and role == "dam":
            events = [e for e in events if animal_id in e.dam_ids]
        elif animal_id:
            events = [e for e in events if e.sire_id == animal_id or animal_id in e.dam_ids]
        return copy.deepcopy(sorted(events, key=lambda e: e.mating_date, reverse=True))

    async def list(
        self,
        farm_id,
        animal_id=None,
        role=None,
        status=None,
        date_from=None,
        date_to=None,
        limit=None,
        offset=0,
    ):
        events = self._filtered(farm_id, animal_id, role, status, date_from, date_to)
        return _page(events, limit, offset)

    async def count(
        self, farm_id, animal_id=None, role=None, status=None, date_from=None, date_to=None
    ):
        return len(self._filtered(farm_id, animal_id, role, status, date_from, date_to))

    async def list_for_animal(self, animal_id):
        animal = self._animals.rows.get(animal_id)
        if animal is None:
            return []
        return self._filtered(animal.farm_id, animal_id, None, None, None, None)


class InMemoryPregnancies:
    def __init__(self) -> None:
        self.rows: dict = {}

    def _active_for(self, dam_id):
        for p in self.rows.values():
            if p.dam_id == dam_id and p.is_active and p.status in ACTIVE_STATUSES:
                return p
        return None

    async def add(self, pregnancy):
        if self._active_for(pregnancy.dam_id) is not None:
            raise AlreadyPregnant("Dam already has an active pregnancy")
        self.rows[pregnancy.id] = copy.deepcopy(pregnancy)
        return copy.deepcopy(pregnancy)

    async def update(self, pregnancy):
        self.rows[pregnancy.id] = copy.deepcopy(pregnancy)
        return copy.deepcopy(pregnancy)

    async def get(self, pregnancy_id):
        return copy.deepcopy(self.rows.get(pregnancy_id))

    async def get_active_for_dam(self, dam_id):
        return copy.deepcopy(self._active_for(dam_id))

    async def list_by_mating_event(self, mating_event_id):
        return copy.deepcopy(
            [
                p
                for p in self.rows.values()
                if p.mating_event_id == mating_event_id and p.is_active
            ]
        )

    def _filtered(self, farm_id, dam_id, sire_id, status):
        return [
            p
            for p in self.rows.values()
            if p.farm_id == farm_id
            and p.is_active
            and (dam_id is None or p.dam_id == dam_id)
            and (sire_id is None or p.sire_id == sire_id)
            and (status is None or p.status == status)
        ]

    async def list(self, farm_id, dam_id=None, sire_id=None, status=None, limit=None, offset=0):
        items = sorted(
            self._filtered(farm_id, dam_id, sire_id, status),
            key=lambda p: p.expected_delivery_date,
        )
        return copy.deepcopy(_page(items, limit, offset))

    async def count(self, farm_id, dam_id=None, sire_id=None, status=None):
        return len(self._filtered(farm_id, dam_id, sire_id, status))

    async def list_for_parent(self, animal_id):
        return copy.deepcopy(
            [p for p in self.rows.values() if animal_id in (p.dam_id, p.sire_id)]
        )


class InMemoryBirthEvents:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def add(self, event):
        if any(e.pregnancy_id == event.pregnancy_id for e in self.rows.values()):
            raise ConflictError("A birth has already been recorded for this pregnancy")
        self.rows[event.id] = copy.deepcopy(event)
        return copy.deepcopy(event)

    async def update(self, event):
        self.rows[event.id] = copy.deepcopy(event)
        return copy.deepcopy(event)

    async def get(self, event_id):
        event = self.rows.get(event_id)
        return copy.deepcopy(event) if event and event.is_active else None

    async def get_by_pregnancy(self, pregnancy_id):
        for event in self.rows.values():
            if event.pregnancy_id == pregnancy_id:
                return copy.deepcopy(event)
        return None

    def _filtered(self, farm_id, dam_id, sire_id, date_from, date_to):
        return [
            e
            for e in self.rows.values()
            if e.farm_id == farm_id
            and e.is_active
            and (dam_id is None or e.dam_id == dam_id)
            and (sire_id is None or e.sire_id == sire_id)
            and (date_from is None or e.birth_date >= date_from)
            and (date_to is None or e.birth_date <= date_to)
        ]

    async def list(
        self,
        farm_id,
        dam_id=None,
        sire_id=None,
        date_from=None,
        date_to=None,
        limit=None,
        offset=0,
    ):
        items = sorted(
            self._filtered(farm_id, dam_id, sire_id, date_from, date_to),
            key=lambda e: e.birth_date,
            reverse=True,
        )
        return copy.deepcopy(_page(items, limit, offset))

    async def count(self, farm_id, dam_id=None, sire_id=None, date_from=None, date_to=None):
        return len(self._filtered(farm_id, dam_id, sire_id, date_from, date_to))

    async def list_for_parent(self, animal_id):
        return copy.deepcopy(
            [e for e in self.rows.values() if animal_id in (e.dam_id, e.sire_id)]
        )


class InMemoryOffspringTracking:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def add(self, tracking):
        self.rows[tracking.id] = copy.deepcopy(tracking)
        return copy.deepcopy(tracking)

    async def update(self, tracking):
        self.rows[tracking.id] = copy.deepcopy(tracking)
        return copy.deepcopy(tracking)

    async def get_by_offspring(self, offspring_id):
        for tracking in self.rows.values():
            if tracking.offspring_id == offspring_id and tracking.is_active:
                return copy.deepcopy(tracking)
        return None

    def _filtered(self, farm_id, dam_id, sire_id, status):
        return [
            t
            for t in self.rows.values()
            if t.farm_id == farm_id
            and t.is_active
            and (dam_id is None or t.dam_id == dam_id)
            and (sire_id is None or t.sire_id == sire_id)
            and (status is None or t.status == status)
        ]

    async def list(self, farm_id, dam_id=None, sire_id=None, status=None, limit=None, offset=0):
        items = sorted(
            self._filtered(farm_id, dam_id, sire_id, status),
            key=lambda t: t.created_at,
            reverse=True,
        )
        return copy.deepcopy(_page(items, limit, offset))

    async def count(self, farm_id, dam_id=None, sire_id=None, status=None):
        return len(self._filtered(farm_id, dam_id, sire_id, status))


class InMemoryGeneticProfiles:
    def __init__(self) -> None:
        self.rows: dict = {}
        self.saves = 0

    async def get_by_animal(self, animal_id):
        return copy.deepcopy(self.rows.get(animal_id))

    async def save(self, profile):
        self.saves += 1
        self.rows[profile.animal_id] = copy.deepcopy(profile)
        return copy.deepcopy(profile)

    async def list_by_farm(self, farm_id, eligible_breeders_only=False):
        items = [p for p in self.rows.values() if p.farm_id == farm_id]
        if eligible_breeders_only:
            items = [
                p
                for p in items
                if p.is_breeder and p.breeding_profile.eligibility == Eligibility.ELIGIBLE.value
            ]
        return copy.deepcopy(items)


class FakeUnitOfWork:
    def __init__(self) -> None:
        self.farms = InMemoryFarms()
        self.animal_types = InMemoryAnimalTypes()
        self.animals = InMemoryAnimals()
        self.mating_events = InMemoryMatingEvents(self.animals)
        self.pregnancies = InMemoryPregnancies()
        self.birth_events = InMemoryBirthEvents()
        self.offspring_tracking = InMemoryOffspringTracking()
        self.genetic_profiles = InMemoryGeneticProfiles()
        self.commits = 0
        self.rollbacks = 0
        self.savepoints = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            await self.rollback()

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    @asynccontextmanager
    async def savepoint(self):
        self.savepoints += 1
        yield self

    def seed_animal(self, farm_id: UUID, animal_type_id: UUID, gender: str, **kwargs) -> Animal:
        kwargs.setdefault("tag", f"T-{len(self.animals.rows) + 1:03d}")
        kwargs.setdefault("birth_date", date(2022, 1, 1))
        animal = Animal.create(
            farm_id=farm_id, animal_type_id=animal_type_id, gender=gender, **kwargs
        )
        self.animals.rows[animal.id] = animal
        return animal


@pytest.fixture()
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture()
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture()
def farm(uow: FakeUnitOfWork, owner_id: UUID) -> Farm:
    farm = Farm(id=uuid4(), owner_id=owner_id, name="Warren")
    uow.farms.rows[farm.id] = farm
    return farm


@pytest.fixture()
def rabbit_type(uow: FakeUnitOfWork) -> AnimalType:
    animal_type = AnimalType(
        id=uuid4(),
        name="Rabbit",
        reproduction_enabled=True,
        genetics_breeding_enabled=True,
        gestation_days=31,
        genetics=GeneticsSettings(
            enable_genetics=True,
            maturity_age_days=120,
            min_breeding_age_days=150,
            max_breeding_age_days=2000,
        ),
    )
    uow.animal_types.rows[animal_type.id] = animal_type
    return animal_type


@pytest.fixture()
def breeding_trio(uow: FakeUnitOfWork, farm: Farm, rabbit_type: AnimalType):
    sire = uow.seed_animal(farm.id, rabbit_type.id, "male", tag="BUCK-1", breed="Rex")
    dam_a = uow.seed_animal(farm.id, rabbit_type.id, "female", tag="DOE-1", breed="Rex")
    dam_b = uow.seed_animal(farm.id, rabbit_type.id, "female", tag="DOE-2", breed="Rex")
    return sire, dam_a, dam_b
