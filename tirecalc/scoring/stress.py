"""
Drivetrain stress scoring.

Condenses a tire upgrade into a single 0-100 score: higher means more
drivetrain stress and a stronger case for re-gearing.

Weighting:
- Diameter change:      30% (biggest factor in effective gearing)
- Weight change:        25% (rotational inertia)
- Effective ratio loss: 35% (torque multiplication loss)
- Vehicle weight:       10% (heavier vehicles absorb upgrades better)

Bands:
- 0-30:   LOW      (re-gearing optional)
- 31-60:  MODERATE (re-gearing recommended)
- 61-100: HIGH     (re-gearing essential)
"""

from typing import Callable, Optional

from tirecalc.core.config import get_settings
from tirecalc.models.inputs import IntendedUse, StressParams
from tirecalc.models.outputs import (
    ComparisonResult,
    ImpactLevel,
    RegearingAdvice,
    StressBreakdown,
    StressComponent,
    StressScoreResult,
    SuggestedGearIncrease,
)
from tirecalc.physics.units import round_half_up

# Reference curb weight: typical midsize truck / SUV
REFERENCE_VEHICLE_WEIGHT_LBS = 4500.0


def _overlanding_bias(params: StressParams) -> float:
    # Reliability matters on long trips, but only large changes are penalized
    return 1.10 if params.diameter_change_pct > 8 else 1.0


# Use case -> multiplier applied to the composite score
USE_CASE_BIAS: dict[IntendedUse, Callable[[StressParams], float]] = {
    IntendedUse.DAILY_DRIVER: lambda params: 1.15,
    IntendedUse.ROCK_CRAWLING: lambda params: 0.85,
    IntendedUse.OVERLANDING: _overlanding_bias,
}


class DrivetrainStressScorer:
    """
    Scores drivetrain stress for a tire change.

    Scoring Philosophy:
    - Each component is scored 0 to 100 (capped)
    - The composite is a fixed weighted sum of the components
    - A use-case multiplier biases the composite, then it is clamped to [0, 100]
    """

    DIAMETER_WEIGHT = 0.30
    WEIGHT_WEIGHT = 0.25
    GEARING_WEIGHT = 0.35
    VEHICLE_WEIGHT = 0.10

    DIAMETER_SCALE = 8.0
    WEIGHT_SCALE = 6.0
    GEARING_SCALE = 7.0

    def __init__(self, use_case_bias: Optional[dict[IntendedUse, Callable[[StressParams], float]]] = None):
        """
        Initialize the scorer.

        Args:
            use_case_bias: Use case -> multiplier strategy (defaults to USE_CASE_BIAS)
        """
        self.use_case_bias = USE_CASE_BIAS if use_case_bias is None else use_case_bias

    def score(self, params: StressParams) -> StressScoreResult:
        """
        Score drivetrain stress.

        Args:
            params: Diameter, weight and effective ratio changes plus context

        Returns:
            StressScoreResult with breakdown, re-gearing advice and recommendations
        """
        breakdown = self.breakdown(params)
        biased = breakdown.composite * breakdown.use_case_multiplier
        score = int(round_half_up(max(0.0, min(100.0, biased))))

        if score >= 61:
            classification, severity = ImpactLevel.HIGH, "severe"
        elif score >= 31:
            classification, severity = ImpactLevel.MODERATE, "significant"
        else:
            classification, severity = ImpactLevel.LOW, "minimal"

        return StressScoreResult(
            score=score,
            classification=classification,
            severity=severity,
            breakdown=breakdown,
            regearing=self._regearing_advice(score, params),
            recommendations=self._recommendations(score, params),
            summary=self._summary(score, params),
        )

    def breakdown(self, params: StressParams) -> StressBreakdown:
        """Component scores, weighted composite and use-case multiplier."""
        diameter = min(abs(params.diameter_change_pct) * self.DIAMETER_SCALE, 100.0)

        # Rotational impact is the better metric when available
        if params.rotational_impact_factor:
            weight_metric = abs(params.rotational_impact_factor)
        else:
            weight_metric = abs(params.weight_change_pct)
        weight = min(weight_metric * self.WEIGHT_SCALE, 100.0)

        gearing = min(abs(params.effective_ratio_change_pct or 0.0) * self.GEARING_SCALE, 100.0)

        # Lighter than reference scores worse, heavier scores better
        vehicle_factor = REFERENCE_VEHICLE_WEIGHT_LBS / params.vehicle_weight_lbs
        vehicle = min((vehicle_factor - 1) * 200 + 50, 100.0)

        components = {
            "diameter": StressComponent(
                score=diameter, weight=self.DIAMETER_WEIGHT, contribution=diameter * self.DIAMETER_WEIGHT
            ),
            "weight": StressComponent(
                score=weight, weight=self.WEIGHT_WEIGHT, contribution=weight * self.WEIGHT_WEIGHT
            ),
            "gearing": StressComponent(
                score=gearing, weight=self.GEARING_WEIGHT, contribution=gearing * self.GEARING_WEIGHT
            ),
            "vehicle": StressComponent(
                score=vehicle, weight=self.VEHICLE_WEIGHT, contribution=vehicle * self.VEHICLE_WEIGHT
            ),
        }
        composite = sum(c.contribution for c in components.values())

        bias = self.use_case_bias.get(params.intended_use)
        multiplier = bias(params) if bias is not None else 1.0

        return StressBreakdown(**components, composite=composite, use_case_multiplier=multiplier)

    def _regearing_advice(self, score: int, params: StressParams) -> RegearingAdvice:
        if score >= 61:
            recommendation, priority = "essential", "high"
        elif score >= 31:
            recommendation, priority = "recommended", "medium"
        else:
            recommendation, priority = "optional", "low"

        if score >= 75:
            urgency = "immediate"
        elif score >= 50:
            urgency = "soon"
        else:
            urgency = "eventually"

        suggested = None
        if params.effective_ratio_change_pct:
            # N% larger tires need roughly N% numerically higher gears
            increase = abs(params.diameter_change_pct)
            suggested = SuggestedGearIncrease(
                percent_increase=round_half_up(increase, 1),
                reasoning="Increase gear ratio to compensate for larger tire diameter",
                example=(
                    "e.g., 3.73 -> 4.30 or 4.10 -> 4.56"
                    if increase > 8
                    else "e.g., 3.73 -> 4.10 or 4.10 -> 4.30"
                ),
            )

        return RegearingAdvice(
            recommendation=recommendation,
            urgency=urgency,
            priority=priority,
            suggested_increase=suggested,
        )

    def _recommendations(self, score: int, params: StressParams) -> list[str]:
        recs = []
        use = params.intended_use

        if score < 31:
            recs.append("Drivetrain stress is minimal - no immediate action required")
            recs.append("Vehicle will maintain close to stock performance characteristics")
            if abs(params.diameter_change_pct) < 3:
                recs.append("Tire size change is within acceptable tolerance for stock gearing")
        elif score < 61:
            recs.append("Drivetrain stress is noticeable - regearing recommended for best performance")
            recs.append("You may experience sluggish acceleration and transmission hunting")
            recs.append("Consider regearing if you frequently tow, off-road, or drive in mountains")
            if use == IntendedUse.DAILY_DRIVER:
                recs.append("Daily driving will feel less responsive - regearing strongly advised")
            if abs(params.effective_ratio_change_pct or 0.0) > 5:
                recs.append("Effective gear ratio loss is significant enough to impact driveability")
        else:
            recs.append("CRITICAL: Drivetrain stress is severe - regearing is essential")
            recs.append("Expect dramatically reduced acceleration and potential transmission issues")
            recs.append("Engine will struggle to move vehicle efficiently, increasing wear")
            recs.append("Fuel economy will suffer significantly due to inefficient power delivery")
            if score >= 75:
                recs.append("URGENT: This upgrade should not be driven without regearing")
                recs.append("Transmission may overheat or fail prematurely under normal use")
            if use == IntendedUse.DAILY_DRIVER:
                recs.append("Daily driving is not recommended without immediate regearing")
            if use == IntendedUse.ROCK_CRAWLING:
                recs.append("Even for rock crawling, this stress level requires lower gearing")

        if score >= 50:
            recs.append("Monitor transmission temperatures - consider auxiliary cooler")

        return recs

    def _summary(self, score: int, params: StressParams) -> str:
        if score < 20:
            return (
                f"Drivetrain stress is negligible ({score}/100). This tire upgrade will have "
                "minimal impact on performance and no regearing is necessary."
            )
        if score < 31:
            return (
                f"Drivetrain stress is LOW ({score}/100). Performance impact will be minor. "
                "Regearing is optional and only recommended for maximum performance."
            )
        if score < 50:
            tail = (
                ", especially for daily driving"
                if params.intended_use == IntendedUse.DAILY_DRIVER
                else " for best performance"
            )
            return (
                f"Drivetrain stress is MODERATE ({score}/100). You'll notice reduced acceleration "
                f"and possible transmission hunting. Regearing is recommended{tail}."
            )
        if score < 61:
            return (
                f"Drivetrain stress is MODERATE-HIGH ({score}/100). Expect noticeably sluggish "
                "performance and increased transmission wear. Regearing is strongly recommended."
            )
        if score < 75:
            return (
                f"Drivetrain stress is HIGH ({score}/100). Performance will suffer significantly "
                "without regearing. Engine will struggle, fuel economy will drop, and transmission "
                "may overheat. Regearing is essential."
            )
        return (
            f"CRITICAL: Drivetrain stress is SEVERE ({score}/100). This "
            f"{abs(params.diameter_change_pct):.1f}% tire upgrade creates dangerous stress levels. "
            "DO NOT drive without regearing - transmission failure is likely."
        )


def score_comparison(
    comparison: ComparisonResult,
    vehicle_weight_lbs: Optional[float] = None,
    intended_use: Optional[IntendedUse] = None,
    scorer: Optional[DrivetrainStressScorer] = None,
) -> Optional[StressScoreResult]:
    """
    Score drivetrain stress for a finished comparison.

    Args:
        comparison: Result of ComparisonEngine.compare
        vehicle_weight_lbs: Curb weight (defaults to the configured default)
        intended_use: Use case (defaults to the comparison's use case)
        scorer: Scorer to use (defaults to a new DrivetrainStressScorer)

    Returns:
        StressScoreResult, or None when the comparison has no drivetrain impact

    Raises:
        InvalidConfigError: If the vehicle weight is non-positive or not finite
    """
    if comparison.drivetrain_impact is None:
        return None

    if vehicle_weight_lbs is None:
        vehicle_weight_lbs = get_settings().default_vehicle_weight_lbs

    rotational = comparison.rotational_impact
    params = StressParams.build(
        diameter_change_pct=comparison.differences.diameter.percentage,
        weight_change_pct=rotational.weight_delta_pct if rotational else 0.0,
        rotational_impact_factor=rotational.impact_factor if rotational else None,
        effective_ratio_change_pct=comparison.drivetrain_impact.effective_gear_ratio.change_percentage,
        vehicle_weight_lbs=vehicle_weight_lbs,
        intended_use=intended_use or comparison.intended_use,
    )
    return (scorer or DrivetrainStressScorer()).score(params)
