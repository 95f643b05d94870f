"""
Pydantic models for reference data.

The reference dataset is read-only after load: measured tire diameters,
the catalog of commercially available axle ratios, use-case profiles, the
load index table and the vehicle suspension keyword lists.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tirecalc.models.inputs import IntendedUse


class GearPriority(str, Enum):
    """What a use case optimises the axle ratio for."""
    FUEL_ECONOMY = "fuel_economy"
    BALANCED = "balanced"
    TORQUE = "torque"
    POWER_BAND = "power_band"
    POWER = "power"


class UseCaseProfile(BaseModel):
    """Gearing targets for one intended use."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Display name, e.g. 'Rock Crawling'")
    priority: GearPriority
    target_rpm_at_65: float = Field(..., gt=0, description="Target engine RPM at 65 mph in top gear")
    crawl_ratio_min: Optional[float] = Field(
        default=None,
        gt=0,
        description="Minimum crawl ratio for torque-priority use cases",
    )
    description: str = ""


# Used when a dataset has no profile for the requested use or for weekend trail
DEFAULT_PROFILE = UseCaseProfile(
    name="Weekend Trail",
    priority=GearPriority.BALANCED,
    target_rpm_at_65=2400,
    description="Balanced for street driving with weekend off-road capability",
)


class GearRecommendationRow(BaseModel):
    """One community-verified build from the gear ratio CSV."""

    vehicle_type: str
    stock_tire_diameter: float = Field(..., gt=0)
    new_tire_diameter: float = Field(..., gt=0)
    stock_gear_ratio: float = Field(..., gt=0)
    recommended_gear_ratio: float = Field(..., gt=0)
    use_case: str = ""
    notes: str = ""


class PopularRatio(BaseModel):
    """How often a recommended ratio appears for a tire size."""

    ratio: float
    popularity: int
    use_cases: list[str]
    vehicles: list[str]
    notes: list[str]


class ReferenceData(BaseModel):
    """
    Process-wide read-only reference dataset.

    Built once from the built-in tables (optionally overridden by a JSON
    file) and injected into the engines that need it.
    """

    model_config = {"frozen": True}

    measured_diameters: dict[str, float] = Field(
        default_factory=dict,
        description="Size key '285/75R17' -> measured diameter in inches",
    )
    gear_ratios: tuple[float, ...] = Field(
        default=(),
        description="Commercially available axle ratios, ascending",
    )
    use_case_profiles: dict[IntendedUse, UseCaseProfile] = Field(default_factory=dict)
    load_index_table: dict[int, float] = Field(
        default_factory=dict,
        description="Load index -> capacity per tire in lbs",
    )
    ifs_vehicles: tuple[str, ...] = ()
    solid_axle_vehicles: tuple[str, ...] = ()

    @field_validator("gear_ratios")
    @classmethod
    def sort_ratios(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        """Keep the catalog ascending and free of duplicates."""
        if any(r <= 0 for r in v):
            raise ValueError("gear ratios must be positive")
        return tuple(sorted(set(v)))

    def measured_diameter(self, key: str) -> Optional[float]:
        return self.measured_diameters.get(key)

    def profile(self, use: IntendedUse) -> UseCaseProfile:
        """Profile for a use case, falling back to weekend trail."""
        if use in self.use_case_profiles:
            return self.use_case_profiles[use]
        return self.use_case_profiles.get(IntendedUse.WEEKEND_TRAIL, DEFAULT_PROFILE)

    def load_capacity(self, load_index: int) -> Optional[float]:
        return self.load_index_table.get(load_index)
