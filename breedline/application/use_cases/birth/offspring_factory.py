"""Materialize registry animals and tracking records for the live births of a litter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.domain.models.animal import Animal, Gender, HealthStatus, ReproductiveStatus
from breedline.domain.models.birth_event import BirthEvent
from breedline.domain.models.offspring_tracking import OffspringSnapshot, OffspringTracking
from breedline.domain.services.tagging import format_tag, species_code, tag_pattern, tag_prefix

logger = logging.getLogger(__name__)

UNKNOWN_SPECIES = "UNK"


@dataclass(slots=True)
class CreatedOffspring:
    animal: Animal
    tracking: OffspringTracking


async def generate_offspring_tag_number(
    uow: UnitOfWork, farm_id: UUID, code: str, birth_date: date
) -> str:
    """Next `{code}{YY}{seq:03d}` tag for animals of `farm_id` born in `birth_date`'s year."""
    pattern = tag_pattern(code, birth_date)
    tags = await uow.animals.list_tags_born_in_year(
        farm_id, birth_date.year, tag_prefix(code, birth_date)
    )
    existing = sum(1 for tag in tags if pattern.match(tag))
    return format_tag(code, birth_date, existing + 1)


def offspring_gender(index: int, male_offspring: int) -> str:
    # Litters record counts, not per-individual sex: the first `male_offspring`
    # positions are male and every remaining live birth is female.
    return Gender.MALE.value if index < male_offspring else Gender.FEMALE.value


async def create_offspring(
    uow: UnitOfWork,
    event: BirthEvent,
    dam: Animal,
    sire: Animal,
    *,
    birth_weight_kg: float | None = None,
) -> list[CreatedOffspring]:
    """Create one animal and one tracking record per live birth of `event`.

    The new animal ids are appended to `event.offspring_ids`; persisting the
    event is left to the caller.
    """
    if event.live_births <= 0:
        return []

    animal_type_id = dam.animal_type_id or sire.animal_type_id
    animal_type = await uow.animal_types.get(animal_type_id)
    species_name = animal_type.name if animal_type else UNKNOWN_SPECIES
    code = species_code(species_name)
    born_on = event.birth_date.date()

    created: list[CreatedOffspring] = []
    for index in range(event.live_births):
        tag = await generate_offspring_tag_number(uow, event.farm_id, code, born_on)
        animal = Animal.create(
            farm_id=event.farm_id,
            animal_type_id=animal_type_id,
            tag=tag,
            gender=offspring_gender(index, event.male_offspring),
            name=f"{species_name} Offspring {index + 1}",
            breed=dam.breed or sire.breed or species_name,
            birth_date=born_on,
            reproductive_status=ReproductiveStatus.IMMATURE.value,
            health_status=HealthStatus.GOOD.value,
            weight_kg=birth_weight_kg,
            sire_id=sire.id,
            dam_id=dam.id,
            birth_event_id=event.id,
        )
        animal = await uow.animals.add(animal)

        tracking = OffspringTracking.create(
            farm_id=event.farm_id,
            birth_event_id=event.id,
            dam_id=dam.id,
            sire_id=sire.id,
            offspring_id=animal.id,
            snapshot=OffspringSnapshot(
                tag=animal.tag,
                name=animal.name,
                gender=animal.gender,
                breed=animal.breed,
                birth_date=animal.birth_date,
            ),
            birth_weight_kg=birth_weight_kg,
        )
        tracking = await uow.offspring_tracking.add(tracking)

        event.add_offspring(animal.id)
        created.append(CreatedOffspring(animal=animal, tracking=tracking))

    logger.info(
        "Created %d offspring for birth event %s (species code %s)",
        len(created),
        event.id,
        code,
    )
    return created
