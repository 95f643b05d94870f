"""
Output models for tire comparison, stress scoring, clearance and re-gear results.

Every result is a frozen pydantic model: constructed once per request,
never mutated afterwards and serialisable with ``model_dump_json()``.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from tirecalc.models.inputs import BudgetLevel, DrivetrainConfig, IntendedUse, PlanTimeline, SuspensionType


FROZEN = {"frozen": True}


class TireFormat(str, Enum):
    """Tire size notation."""
    P_METRIC = "P-metric"
    LT_METRIC = "LT-metric"
    FLOTATION = "Flotation"


class DiameterSource(str, Enum):
    """Where the resolved diameter came from."""
    MEASURED = "measured"
    FORMULA = "formula"


class ImpactLevel(str, Enum):
    """Three-tier classification shared by stress, clearance and rotational results."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class AdvisorySeverity(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    ADVISORY = "advisory"
    INFO = "info"


# =============================================================================
# Tire descriptors
# =============================================================================

class TireDescriptor(BaseModel):
    """
    A parsed tire size with its resolved diameter.

    For formula-sourced entries ``diameter_in == 2 * sidewall_height_in +
    wheel_diameter_in``. Measured entries carry a real-world diameter that
    may differ from the formula.
    """

    model_config = FROZEN

    format: TireFormat = Field(..., description="Size notation")
    section_width_mm: float = Field(..., gt=0, description="Section width in mm")
    aspect_ratio_pct: int = Field(..., description="Aspect ratio in percent (back-computed for flotation)")
    wheel_diameter_in: float = Field(..., gt=0, description="Wheel diameter in inches")
    sidewall_height_in: float = Field(..., description="Sidewall height in inches")
    sidewall_height_mm: float = Field(..., description="Sidewall height in mm")
    diameter_in: float = Field(..., gt=0, description="Resolved overall diameter in inches")
    diameter_mm: float = Field(..., gt=0, description="Resolved overall diameter in mm")
    is_load_range_lt: bool = Field(..., description="LT construction (always true for flotation)")
    diameter_source: DiameterSource = Field(..., description="Measured table or closed-form formula")
    raw_input: str = Field(..., description="Normalized input string")

    @property
    def section_width_in(self) -> float:
        return self.section_width_mm / 25.4

    @property
    def circumference_in(self) -> float:
        return self.diameter_in * math.pi

    @property
    def revolutions_per_mile(self) -> float:
        return 63360 / self.circumference_in

    @property
    def display(self) -> str:
        return self.raw_input


class TireMetrics(BaseModel):
    """A tire descriptor with its rolling characteristics."""

    model_config = FROZEN

    tire: TireDescriptor
    circumference_in: float
    circumference_mm: float
    revolutions_per_mile: float
    display: str

    @property
    def diameter_in(self) -> float:
        return self.tire.diameter_in

    @property
    def section_width_in(self) -> float:
        return self.tire.section_width_in


# =============================================================================
# Comparison components
# =============================================================================

class DimensionDelta(BaseModel):
    """Change of one dimension between the current and new tire."""

    model_config = FROZEN

    absolute: float = Field(..., description="new - current, in the dimension's native unit")
    percentage: float = Field(..., description="delta / current * 100")
    mm: Optional[float] = Field(default=None, description="Absolute change in mm for length dimensions")


class GroundClearanceDelta(BaseModel):
    model_config = FROZEN

    gain_in: float = Field(..., description="Half the diameter change")
    gain_mm: float


class Differences(BaseModel):
    model_config = FROZEN

    diameter: DimensionDelta
    width: DimensionDelta
    sidewall: DimensionDelta
    circumference: DimensionDelta
    ground_clearance: GroundClearanceDelta
    revolutions_per_mile: DimensionDelta


class SpeedReading(BaseModel):
    model_config = FROZEN

    indicated_mph: float
    actual_mph: float
    error_mph: float
    error_percentage: float
    correction: str


class SpeedometerError(BaseModel):
    model_config = FROZEN

    ratio: float = Field(..., description="new diameter / current diameter")
    summary: str
    readings: list[SpeedReading]

    def at(self, indicated_mph: float) -> Optional[SpeedReading]:
        """Reading for one of the test speeds, or None."""
        for reading in self.readings:
            if reading.indicated_mph == indicated_mph:
                return reading
        return None


class RatioChange(BaseModel):
    """Before/after value with its change."""

    model_config = FROZEN

    original: float
    new: float
    change: float
    change_percentage: float
    summary: str


class RpmChange(RatioChange):
    test_speed_mph: float


class CrawlSpeed(BaseModel):
    """Wheel speed in low range at a fixed engine RPM."""

    model_config = FROZEN

    engine_rpm: float
    original_mph: float
    new_mph: float
    change_percentage: float


class DrivetrainImpact(BaseModel):
    model_config = FROZEN

    effective_gear_ratio: RatioChange
    rpm: RpmChange
    crawl_ratio: RatioChange
    crawl_speed: CrawlSpeed


class ClearanceImpact(BaseModel):
    """Coarse lift guidance from the diameter increase alone."""

    model_config = FROZEN

    ground_clearance_gain_in: float
    estimated_lift_required_in: float
    lift_recommendation: str
    modifications_note: str
    fender_clearance_concern: bool
    fender_clearance_message: str
    wheel_offset_change_needed: bool
    wheel_offset_message: str
    bumpstop_modification: Optional[str] = None


class WeightAnalysis(BaseModel):
    model_config = FROZEN

    is_estimate: bool
    current_per_tire_lbs: float
    new_per_tire_lbs: float
    current_total_lbs: float
    new_total_lbs: float
    difference_per_tire_lbs: float
    difference_percentage: float
    difference_total_lbs: float
    severity: str = Field(..., description="low, medium or high; thresholds depend on intended use")
    acceleration: str
    suspension: str
    braking: str
    handling: str
    recommendations: list[str]


class LoadCapacityAnalysis(BaseModel):
    model_config = FROZEN

    current_load_index: int
    new_load_index: int
    current_capacity_lbs: float
    new_capacity_lbs: float
    current_total_capacity_lbs: float
    new_total_capacity_lbs: float
    load_index_change: int
    capacity_change_lbs: float
    capacity_change_percentage: float
    total_capacity_change_lbs: float
    severity: str = Field(..., description="critical, important, advisory or positive")
    suitability: list[str]
    warning: str
    recommendations: list[str]


class RotationalImpact(BaseModel):
    """Rotational inertia change from tire weight and diameter."""

    model_config = FROZEN

    current_weight_lbs: float
    new_weight_lbs: float
    weight_delta_lbs: float
    weight_delta_pct: float
    diameter_delta_in: float
    diameter_delta_pct: float
    impact_factor: float = Field(..., description="(weight% + 1.5 * diameter%) / 2")
    category: ImpactLevel
    category_description: str
    acceleration_impact_pct: float = Field(..., description="Negative means slower acceleration")
    acceleration_description: str
    braking_impact_pct: float
    braking_description: str
    unsprung_mass_increase_lbs: float
    confidence: str
    recommendations: list[str]
    summary: str


class Advisory(BaseModel):
    """A severity-tagged warning. Advisories never block a calculation."""

    model_config = FROZEN

    severity: AdvisorySeverity
    category: str
    message: str
    detail: str
    action: Optional[str] = None


class ComparisonResult(BaseModel):
    """Complete comparison of a current tire against a new tire."""

    model_config = FROZEN

    current: TireMetrics
    new: TireMetrics
    differences: Differences
    speedometer_error: SpeedometerError
    drivetrain_impact: Optional[DrivetrainImpact] = Field(
        default=None, description="None when no axle gear ratio was supplied"
    )
    clearance: ClearanceImpact
    weight_analysis: Optional[WeightAnalysis] = None
    load_capacity_analysis: Optional[LoadCapacityAnalysis] = None
    rotational_impact: Optional[RotationalImpact] = None
    advisories: list[Advisory] = Field(default_factory=list)
    intended_use: IntendedUse = IntendedUse.WEEKEND_TRAIL
    drivetrain: Optional[DrivetrainConfig] = None

    def advisories_by_severity(self, severity: AdvisorySeverity) -> list[Advisory]:
        return [a for a in self.advisories if a.severity == severity]


# =============================================================================
# Drivetrain stress
# =============================================================================

class StressComponent(BaseModel):
    model_config = FROZEN

    score: float = Field(..., description="Component score, capped at 100")
    weight: float = Field(..., description="Fraction of the composite")
    contribution: float


class StressBreakdown(BaseModel):
    model_config = FROZEN

    diameter: StressComponent
    weight: StressComponent
    gearing: StressComponent
    vehicle: StressComponent
    composite: float = Field(..., description="Weighted sum before use-case bias")
    use_case_multiplier: float


class SuggestedGearIncrease(BaseModel):
    model_config = FROZEN

    percent_increase: float
    reasoning: str
    example: str


class RegearingAdvice(BaseModel):
    model_config = FROZEN

    recommendation: str = Field(..., description="optional, recommended or essential")
    urgency: str = Field(..., description="eventually, soon or immediate")
    priority: str = Field(..., description="low, medium or high")
    suggested_increase: Optional[SuggestedGearIncrease] = None


class StressScoreResult(BaseModel):
    model_config = FROZEN

    score: int = Field(..., ge=0, le=100)
    classification: ImpactLevel
    severity: str
    breakdown: StressBreakdown
    regearing: RegearingAdvice
    recommendations: list[str]
    summary: str


class AdjustedStress(BaseModel):
    model_config = FROZEN

    base: int
    adjusted: int
    increase: int
    classification: ImpactLevel


class LoadCategory(BaseModel):
    model_config = FROZEN

    category: str
    description: str
    examples: list[str]


class LoadMultipliers(BaseModel):
    model_config = FROZEN

    stress: float
    fuel: float
    braking: float
    suspension: float


class FuelEconomyImpact(BaseModel):
    model_config = FROZEN

    base_loss_pct: float
    load_loss_pct: float
    total_loss_pct: float
    description: str


class BrakingImpact(BaseModel):
    model_config = FROZEN

    load_increase_pct: float
    tire_increase_pct: float
    total_increase_pct: float
    recommendation: str


class LoadWarning(BaseModel):
    model_config = FROZEN

    severity: str
    component: str
    message: str


class OverlandImpact(BaseModel):
    """Expedition load adjustments on top of a comparison."""

    model_config = FROZEN

    has_load: bool
    expedition_load_lbs: float = 0.0
    load_category: Optional[LoadCategory] = None
    multipliers: Optional[LoadMultipliers] = None
    adjusted_stress: Optional[AdjustedStress] = None
    fuel_economy: Optional[FuelEconomyImpact] = None
    braking: Optional[BrakingImpact] = None
    warnings: list[LoadWarning] = Field(default_factory=list)
    summary: Optional[str] = None


# =============================================================================
# Clearance
# =============================================================================

class ComponentWarning(BaseModel):
    model_config = FROZEN

    component: str
    risk: ImpactLevel
    description: str
    severity: str = Field(..., description="critical, moderate or minor")


class LiftRecommendation(BaseModel):
    model_config = FROZEN

    required: bool
    current_adequate: bool
    message: str
    additional_needed_in: Optional[float] = None
    recommended_total_in: Optional[float] = None


class TrimmingAssessment(BaseModel):
    model_config = FROZEN

    probability: int
    extent: str = Field(..., description="minimal, minor, moderate or extensive")
    areas: list[str]
    message: str


class ClearanceEstimate(BaseModel):
    model_config = FROZEN

    probability: int = Field(..., ge=0, le=95, description="Chance of rubbing in percent")
    risk_class: ImpactLevel
    primary_issue: Optional[str] = None
    suspension_type: SuspensionType
    notes: list[str]
    component_warnings: list[ComponentWarning]
    lift_recommendation: LiftRecommendation
    trimming_assessment: TrimmingAssessment
    summary: str


# =============================================================================
# Re-gear
# =============================================================================

class RegearNecessity(BaseModel):
    model_config = FROZEN

    level: str = Field(..., description="optional, consider, recommended or strongly_recommended")
    reason: str
    diameter_change_pct: float
    effective_ratio_change_pct: float


class IdealRatios(BaseModel):
    model_config = FROZEN

    restoration: float
    optimal: float


class RatioImpact(BaseModel):
    model_config = FROZEN

    rpm: int = Field(..., description="Engine RPM at 65 mph on the new tires")
    crawl_ratio: float
    restoration_percentage: float
    acceleration: str
    fuel_economy: str
    highway_comfort: str


class Verdict(BaseModel):
    model_config = FROZEN

    score: int
    pros: list[str]
    cons: list[str]
    recommendation: str


class RegearCandidate(BaseModel):
    model_config = FROZEN

    ratio: float
    type: str = Field(..., description="restoration or optimal")
    impact: RatioImpact
    verdict: Verdict


class CostRange(BaseModel):
    model_config = FROZEN

    min: int
    max: int


class RegearAnalysis(BaseModel):
    model_config = FROZEN

    gears_cost: CostRange
    installation_cost: CostRange
    total_cost: CostRange
    considerations: list[str]
    benefits: list[str]
    timeline: str


class RegearRecommendation(BaseModel):
    model_config = FROZEN

    necessity: RegearNecessity
    use_case: str
    current_ratio: float
    ideal_ratios: IdealRatios
    candidates: list[RegearCandidate]
    analysis: Optional[RegearAnalysis] = None

    @property
    def best(self) -> Optional[RegearCandidate]:
        return self.candidates[0] if self.candidates else None


class RegearingGuidance(BaseModel):
    """Community-derived, qualitative regearing guidance."""

    model_config = FROZEN

    scenario: str
    likelihood: str
    consensus: str
    reality_check: str
    why_regear: list[str]
    why_not_regear: list[str]
    cost_context: str
    recommendation: str
    transmission_note: str
    sources: str


# =============================================================================
# Upgrade path
# =============================================================================

class PlannedUpgrade(BaseModel):
    """One supporting modification in an upgrade path."""

    model_config = FROZEN

    priority: int = Field(..., ge=1, description="1 is done first")
    category: str = Field(..., description="Safety, Clearance, Performance, Fitment or Protection")
    upgrade: str
    necessity: str = Field(
        ..., description="essential, required, strongly recommended, recommended, likely needed or optional"
    )
    reason: str
    cost: CostRange
    timeline: str
    options: list[str]

    @property
    def is_essential(self) -> bool:
        return self.necessity in ("essential", "required")


class UpgradePhase(BaseModel):
    model_config = FROZEN

    phase: str
    upgrades: list[str]


class UpgradeSchedule(BaseModel):
    model_config = FROZEN

    type: PlanTimeline
    description: str
    phases: list[UpgradePhase]


class UpgradeCostEstimate(BaseModel):
    model_config = FROZEN

    essential: int = Field(..., description="Sum of range midpoints for essential and required upgrades")
    total: int = Field(..., description="Sum of range midpoints for every upgrade")
    cost_range: CostRange


class UpgradePath(BaseModel):
    """Prioritised supporting modifications for a tire upgrade."""

    model_config = FROZEN

    upgrades: list[PlannedUpgrade]
    total_upgrades: int
    essential_upgrades: int
    estimated_cost: UpgradeCostEstimate
    schedule: UpgradeSchedule
    budget_level: BudgetLevel
