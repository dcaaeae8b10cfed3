"""Lookups and checks shared by the reproduction and genetics use cases."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from breedline.application.errors import (
    AlreadyPregnant,
    FeatureDisabled,
    ImmutableFieldChange,
    InvalidSex,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.domain.models.animal import Animal
from breedline.domain.value_objects.capabilities import Capabilities


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def ensure_choice(value: str, allowed: Iterable[str], field_name: str) -> None:
    allowed = list(allowed)
    if value not in allowed:
        raise ValidationError(
            f"Invalid {field_name}. Must be one of: {', '.join(allowed)}",
            details={"field": field_name, "value": value},
        )


async def ensure_farm_access(uow: UnitOfWork, farm_id: UUID, user_id: UUID) -> None:
    if not await uow.farms.is_owned_by(farm_id, user_id):
        raise PermissionDenied("Farm not found or you do not have permission to access it")


async def load_animal(uow: UnitOfWork, animal_id: UUID, label: str = "Animal") -> Animal:
    animal = await uow.animals.get(animal_id)
    if not animal:
        raise NotFound(f"{label} {animal_id} not found")
    return animal


async def load_owned_animal(uow: UnitOfWork, user_id: UUID, animal_id: UUID) -> Animal:
    animal = await load_animal(uow, animal_id)
    await ensure_farm_access(uow, animal.farm_id, user_id)
    return animal


async def capabilities_for(uow: UnitOfWork, animal: Animal) -> Capabilities:
    return Capabilities.of(await uow.animal_types.get(animal.animal_type_id))


@dataclass(slots=True)
class BreedingParties:
    sire: Animal
    dams: list[Animal]
    sire_caps: Capabilities
    dam_caps: dict[UUID, Capabilities]


async def resolve_breeding_parties(
    uow: UnitOfWork,
    farm_id: UUID,
    sire_id: UUID,
    dam_ids: list[UUID],
) -> BreedingParties:
    """Resolve and validate a sire and its dams.

    Checks run in a fixed order: existence, farm, sex, then reproduction feature.
    """
    if not dam_ids:
        raise ValidationError("At least one dam is required")

    sire = await load_animal(uow, sire_id, "Sire")
    dams = [await load_animal(uow, dam_id, "Dam") for dam_id in dict.fromkeys(dam_ids)]

    for party in (sire, *dams):
        if party.farm_id != farm_id:
            raise ValidationError(
                f"Animal {party.id} does not belong to farm {farm_id}",
                details={"animal_id": str(party.id)},
            )

    if not sire.is_male:
        raise InvalidSex(f"Sire {sire.id} must be male", details={"animal_id": str(sire.id)})
    for dam in dams:
        if not dam.is_female:
            raise InvalidSex(f"Dam {dam.id} must be female", details={"animal_id": str(dam.id)})

    sire_caps = await capabilities_for(uow, sire)
    if not sire_caps.reproduction_enabled:
        raise FeatureDisabled(f"Reproduction is not enabled for the animal type of sire {sire.id}")
    dam_caps: dict[UUID, Capabilities] = {}
    for dam in dams:
        caps = await capabilities_for(uow, dam)
        if not caps.reproduction_enabled:
            raise FeatureDisabled(
                f"Reproduction is not enabled for the animal type of dam {dam.id}"
            )
        dam_caps[dam.id] = caps

    return BreedingParties(sire=sire, dams=dams, sire_caps=sire_caps, dam_caps=dam_caps)


async def ensure_not_pregnant(uow: UnitOfWork, dam: Animal) -> None:
    active = await uow.pregnancies.get_active_for_dam(dam.id)
    if active:
        raise AlreadyPregnant(
            f"Dam {dam.tag} already has an active pregnancy",
            details={"dam_id": str(dam.id), "pregnancy_id": str(active.id)},
        )


def resolve_gestation_days(
    dam_caps: Capabilities, sire_caps: Capabilities | None, default: int
) -> int:
    if dam_caps.gestation_days:
        return dam_caps.gestation_days
    if sire_caps is not None and sire_caps.gestation_days:
        return sire_caps.gestation_days
    return default


def reject_immutable_changes(existing: Any, payload: Any, fields: Iterable[str]) -> None:
    for field_name in fields:
        requested = getattr(payload, field_name, None)
        if requested is not None and requested != getattr(existing, field_name):
            raise ImmutableFieldChange(
                f"{field_name} cannot be changed", details={"field": field_name}
            )
