from __future__ import annotations

from dataclasses import dataclass

from breedline.domain.models.animal_type import AnimalType, GeneticsSettings


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Feature set an animal type grants to the reproduction and genetics flows."""

    reproduction_enabled: bool
    genetics_enabled: bool
    gestation_days: int | None
    genetics: GeneticsSettings

    @classmethod
    def of(cls, animal_type: AnimalType | None) -> Capabilities:
        if animal_type is None:
            return cls(
                reproduction_enabled=False,
                genetics_enabled=False,
                gestation_days=None,
                genetics=GeneticsSettings(),
            )
        return cls(
            reproduction_enabled=animal_type.reproduction_enabled,
            genetics_enabled=animal_type.genetics.enable_genetics,
            gestation_days=animal_type.resolved_gestation_days(),
            genetics=animal_type.genetics,
        )
