from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(slots=True)
class GeneticsSettings:
    enable_genetics: bool = False
    maturity_age_days: int = 365
    min_breeding_age_days: int = 180
    max_breeding_age_days: int = 3650
    breeding_season: str = "year-round"
    gestation_period_days: int | None = 30
    inbreeding_threshold: float = 0.25


@dataclass(slots=True)
class AnimalType:
    id: UUID
    name: str
    reproduction_enabled: bool = False
    genetics_breeding_enabled: bool = False
    # Reproduction config; preferred over the genetics default when set.
    gestation_days: int | None = None
    genetics: GeneticsSettings = field(default_factory=GeneticsSettings)

    def resolved_gestation_days(self) -> int | None:
        if self.gestation_days:
            return self.gestation_days
        return self.genetics.gestation_period_days or None
