"""
Input models for tire comparison requests.

These models define the drivetrain configuration, optional tire
specifications and use-case context the calculation engine consumes.
Every numeric drivetrain value must be strictly positive and finite;
construction fails with InvalidConfigError otherwise.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from tirecalc.errors import InvalidConfigError


class IntendedUse(str, Enum):
    """How the vehicle is primarily driven."""
    DAILY_DRIVER = "daily_driver"
    WEEKEND_TRAIL = "weekend_trail"
    ROCK_CRAWLING = "rock_crawling"
    OVERLANDING = "overlanding"
    SAND_DESERT = "sand_desert"
    SNOW = "snow"

    @classmethod
    def _missing_(cls, value: object) -> Optional["IntendedUse"]:
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            aliases = {
                "overland": cls.OVERLANDING,
                "balanced": cls.WEEKEND_TRAIL,
            }
            if key in aliases:
                return aliases[key]
            for member in cls:
                if member.value == key:
                    return member
        return None


class SuspensionType(str, Enum):
    """Front suspension architecture."""
    IFS = "ifs"
    SOLID_AXLE = "solid_axle"

    @classmethod
    def _missing_(cls, value: object) -> Optional["SuspensionType"]:
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            if key in ("solid", "solidaxle", "solid_front_axle"):
                return cls.SOLID_AXLE
            if key in ("independent", "independent_front_suspension"):
                return cls.IFS
            for member in cls:
                if member.value == key:
                    return member
        return None


class BudgetLevel(str, Enum):
    """Parts tier used to price an upgrade path."""
    BUDGET = "budget"
    MID_RANGE = "mid_range"
    PREMIUM = "premium"

    @classmethod
    def _missing_(cls, value: object) -> Optional["BudgetLevel"]:
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            if key in ("mid", "midrange"):
                return cls.MID_RANGE
            for member in cls:
                if member.value == key:
                    return member
        return None


class PlanTimeline(str, Enum):
    """How an upgrade path is split into phases."""
    IMMEDIATE = "immediate"
    PHASED = "phased"
    EVENTUAL = "eventual"


class DrivetrainConfig(BaseModel):
    """
    Gear train of the vehicle.

    `axle_gear_ratio` is optional: without it every drivetrain-dependent
    output of a comparison is None. The remaining ratios carry typical
    defaults for a 4WD truck.
    """

    model_config = {"frozen": True}

    axle_gear_ratio: Optional[float] = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        description="Ring and pinion ratio, e.g. 3.73",
    )
    transmission_top_gear_ratio: float = Field(
        default=1.0,
        gt=0,
        allow_inf_nan=False,
        description="Top (cruising) gear ratio. 1.0 for direct drive, <1.0 for overdrive",
    )
    transfer_case_high_ratio: float = Field(
        default=1.0,
        gt=0,
        allow_inf_nan=False,
        description="Transfer case high range ratio",
    )
    transfer_case_low_ratio: float = Field(
        default=2.5,
        gt=0,
        allow_inf_nan=False,
        description="Transfer case low range ratio",
    )
    first_gear_ratio: float = Field(
        default=4.0,
        gt=0,
        allow_inf_nan=False,
        description="Transmission first gear ratio, used for crawl ratio",
    )

    @classmethod
    def build(
        cls,
        config: Union["DrivetrainConfig", Mapping[str, Any], None] = None,
        **values: Any,
    ) -> "DrivetrainConfig":
        """
        Construct a config from another config, a mapping or keyword values.

        Raises:
            InvalidConfigError: if any ratio is non-positive, NaN or infinite
        """
        if isinstance(config, DrivetrainConfig) and not values:
            return config
        data: dict[str, Any] = {}
        if isinstance(config, DrivetrainConfig):
            data.update(config.model_dump())
        elif config is not None:
            data.update(config)
        data.update(values)
        try:
            return cls(**data)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid drivetrain configuration: {e}") from e

    @property
    def has_axle_ratio(self) -> bool:
        return self.axle_gear_ratio is not None

    @property
    def crawl_ratio(self) -> Optional[float]:
        """Total low-range reduction: axle x transfer low x first gear."""
        if self.axle_gear_ratio is None:
            return None
        return self.axle_gear_ratio * self.transfer_case_low_ratio * self.first_gear_ratio


class TireSpecOverrides(BaseModel):
    """
    Optional manufacturer data for the two tires.

    Weights replace the size-based estimate. Load indexes enable the
    load capacity analysis only when both are given.
    """

    model_config = {"frozen": True}

    current_tire_weight_lbs: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    new_tire_weight_lbs: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    current_load_index: Optional[int] = Field(default=None, ge=0)
    new_load_index: Optional[int] = Field(default=None, ge=0)

    @property
    def has_weights(self) -> bool:
        return self.current_tire_weight_lbs is not None and self.new_tire_weight_lbs is not None


class StressParams(BaseModel):
    """Inputs to the drivetrain stress score."""

    model_config = {"frozen": True}

    diameter_change_pct: float = Field(..., allow_inf_nan=False)
    weight_change_pct: float = Field(default=0.0, allow_inf_nan=False)
    rotational_impact_factor: Optional[float] = Field(
        default=None,
        allow_inf_nan=False,
        description="Preferred over weight_change_pct when non-zero",
    )
    effective_ratio_change_pct: Optional[float] = Field(
        default=None,
        allow_inf_nan=False,
        description="None when no gearing data exists",
    )
    vehicle_weight_lbs: float = Field(default=4500.0, gt=0, allow_inf_nan=False)
    intended_use: IntendedUse = Field(default=IntendedUse.WEEKEND_TRAIL)

    @field_validator("intended_use", mode="before")
    @classmethod
    def coerce_use(cls, v: Any) -> Any:
        if v is None:
            return IntendedUse.WEEKEND_TRAIL
        return v

    @classmethod
    def build(cls, **values: Any) -> "StressParams":
        try:
            return cls(**values)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid stress parameters: {e}") from e


class ClearanceParams(BaseModel):
    """Inputs to the clearance probability estimate."""

    model_config = {"frozen": True}

    suspension_type: SuspensionType = Field(default=SuspensionType.IFS)
    lift_height_in: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    diameter_increase_in: float = Field(..., allow_inf_nan=False)
    width_increase_in: float = Field(default=0.0, allow_inf_nan=False)
    new_diameter_in: float = Field(..., gt=0, allow_inf_nan=False)

    @classmethod
    def build(cls, **values: Any) -> "ClearanceParams":
        try:
            return cls(**values)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid clearance parameters: {e}") from e


class UpgradeRequest(BaseModel):
    """
    A complete tire upgrade question, as read from a JSON request file.

    Only the two tire sizes are required; everything else enables an
    optional part of the report.
    """

    vehicle: Optional[str] = Field(default=None, description="Vehicle name, e.g. 'Toyota Tacoma'")
    current_tire: str = Field(..., description="Current tire size, e.g. '265/70R17'")
    new_tire: str = Field(..., description="New tire size, e.g. '285/75R17'")
    drivetrain: DrivetrainConfig = Field(default_factory=DrivetrainConfig)
    tire_specs: TireSpecOverrides = Field(default_factory=TireSpecOverrides)
    intended_use: IntendedUse = Field(default=IntendedUse.WEEKEND_TRAIL)
    vehicle_weight_lbs: Optional[float] = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        description="Curb weight; the configured default is used when omitted",
    )
    suspension_type: Optional[SuspensionType] = Field(
        default=None,
        description="Front suspension; looked up from the vehicle name when omitted",
    )
    lift_height_in: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    expedition_load_lbs: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    include_regear: bool = Field(default=False, description="Include re-gear candidates")
    budget_level: BudgetLevel = Field(default=BudgetLevel.MID_RANGE, description="Parts tier for the upgrade path")
    plan_timeline: PlanTimeline = Field(default=PlanTimeline.PHASED, description="Phasing of the upgrade path")
