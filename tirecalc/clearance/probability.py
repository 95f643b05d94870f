"""
Clearance probability estimation.

Predicts the likelihood of tire rubbing from suspension type, lift height
and tire growth, with component-specific warnings, a lift recommendation
and a trimming assessment.

ASSUMPTIONS:
- IFS (Tacoma, 4Runner, Tundra...) is more restrictive than a solid front
  axle (Wrangler, Gladiator...) because of the upper control arms.
- Full compression is the critical measurement point.
- Lifts under 1in are treated as stock height.
- Roughly 0.85in (IFS) / 0.75in (solid axle) of lift per inch of diameter
  increase clears the tire.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

from tirecalc.catalog.loader import get_reference
from tirecalc.catalog.models import ReferenceData
from tirecalc.models.inputs import ClearanceParams, SuspensionType
from tirecalc.models.outputs import (
    ClearanceEstimate,
    ComparisonResult,
    ComponentWarning,
    ImpactLevel,
    LiftRecommendation,
    TrimmingAssessment,
)

logger = logging.getLogger(__name__)

# Upper bound (exclusive) of each lift bracket, in inches; the last is open-ended
LIFT_BRACKETS = (1.0, 2.5, 3.5)

# Per lift bracket: ((max diameter increase, probability, primary issue), ...);
# the final entry applies above the last threshold
IFS_TREE = (
    ((1.0, 10, None), (2.0, 45, "UCA contact at full stuff"),
     (None, 85, "UCA contact, fender liner contact")),
    ((2.0, 15, None), (3.0, 50, "UCA contact at full compression"),
     (None, 80, "UCA contact, CMC removal required")),
    ((3.0, 20, None), (4.0, 55, "CMC trimming, possible UCA contact"),
     (None, 75, "Extensive trimming, UCA spacers, wheel offset changes")),
    ((4.0, 25, None), (5.0, 50, "Significant trimming required"),
     (None, 70, "Major modifications required")),
)
SOLID_AXLE_TREE = (
    ((1.5, 5, None), (3.0, 35, "Fender liner contact at full stuff"),
     (None, 75, "Fender contact, bump stops need trimming")),
    ((3.0, 10, None), (4.0, 40, "Minor fender trimming may be needed"),
     (None, 70, "Fender trimming required")),
    ((4.0, 15, None), (5.0, 45, "Fender trimming, possible flat fenders"),
     (None, 65, "Major trimming or flat fenders required")),
    ((5.0, 20, None), (6.0, 40, "Trimming likely needed"),
     (None, 60, "Flat fenders or major body modifications")),
)


@dataclass(frozen=True)
class SuspensionRules:
    """Decision-tree constants for one suspension architecture."""
    tree: tuple
    width_threshold_in: float
    width_penalty: int
    large_tire_in: float
    large_tire_floor: int
    large_tire_issue: str
    probability_cap: int
    lift_per_inch: float  # Lift per inch of diameter increase
    notes: tuple[str, ...]


SUSPENSION_RULES = {
    SuspensionType.IFS: SuspensionRules(
        tree=IFS_TREE,
        width_threshold_in=1.5,
        width_penalty=15,
        large_tire_in=37.0,
        large_tire_floor=65,
        large_tire_issue='37"+ tires require extensive modifications on IFS',
        probability_cap=95,
        lift_per_inch=0.85,
        notes=(
            "IFS vehicles have more restrictive clearance due to upper control arms",
            "Full compression (stuffing suspension) is the critical measurement point",
            "Dynamic clearance (flexing off-road) requires more space than static",
        ),
    ),
    SuspensionType.SOLID_AXLE: SuspensionRules(
        tree=SOLID_AXLE_TREE,
        width_threshold_in=2.0,
        width_penalty=10,
        large_tire_in=40.0,
        large_tire_floor=60,
        large_tire_issue='40"+ tires require significant modifications',
        probability_cap=90,
        lift_per_inch=0.75,
        notes=(
            "Solid axle vehicles have more clearance flexibility than IFS",
            "Check clearance at full droop and full compression",
            "Wheel offset and backspacing significantly affect clearance",
        ),
    ),
}


def risk_class(probability: float) -> ImpactLevel:
    """LOW below 30%, HIGH above 70%, MODERATE in between."""
    if probability < 30:
        return ImpactLevel.LOW
    if probability > 70:
        return ImpactLevel.HIGH
    return ImpactLevel.MODERATE


def lift_bracket(lift_height_in: float) -> int:
    for index, upper in enumerate(LIFT_BRACKETS):
        if lift_height_in < upper:
            return index
    return len(LIFT_BRACKETS)


def _round_up_half_inch(value: float) -> float:
    return math.ceil(value * 2) / 2


class ClearanceProbabilityEstimator:
    """
    Estimates the probability of tire rubbing.

    The base probability comes from a decision tree keyed by suspension
    type, lift bracket and diameter increase. Width and large-tire
    adjustments follow; the risk class is re-derived from the final
    probability.
    """

    def __init__(self, rules: Optional[dict[SuspensionType, SuspensionRules]] = None):
        self.rules = rules or SUSPENSION_RULES

    def estimate(
        self,
        suspension_type: Union[SuspensionType, str] = SuspensionType.IFS,
        lift_height_in: float = 0.0,
        diameter_increase_in: float = 0.0,
        width_increase_in: float = 0.0,
        new_diameter_in: Optional[float] = None,
    ) -> ClearanceEstimate:
        """
        Estimate clearance risk.

        Args:
            suspension_type: 'ifs' or 'solid_axle'
            lift_height_in: Current lift (0 for stock)
            diameter_increase_in: New minus current diameter
            width_increase_in: New minus current section width
            new_diameter_in: New tire diameter

        Returns:
            ClearanceEstimate

        Raises:
            InvalidConfigError: If any input is invalid (e.g. negative lift)
        """
        params = ClearanceParams.build(
            suspension_type=suspension_type,
            lift_height_in=lift_height_in,
            diameter_increase_in=diameter_increase_in,
            width_increase_in=width_increase_in,
            new_diameter_in=new_diameter_in,
        )
        return self.estimate_params(params)

    def estimate_params(self, params: ClearanceParams) -> ClearanceEstimate:
        """Estimate clearance risk from validated parameters."""
        rules = self.rules[params.suspension_type]
        probability, primary_issue = self._tree_lookup(rules, params)

        if params.width_increase_in > rules.width_threshold_in:
            probability += rules.width_penalty
            if probability > 70 and primary_issue is None and params.suspension_type == SuspensionType.IFS:
                primary_issue = "Fender liner contact"

        forced_high = params.new_diameter_in >= rules.large_tire_in
        if forced_high:
            probability = max(probability, rules.large_tire_floor)
            primary_issue = rules.large_tire_issue

        probability = min(probability, rules.probability_cap)
        risk = ImpactLevel.HIGH if forced_high else risk_class(probability)
        logger.debug(
            "Clearance %s lift=%.1f +%.2fin: %d%% (%s)",
            params.suspension_type.value,
            params.lift_height_in,
            params.diameter_increase_in,
            probability,
            risk.value,
        )

        return ClearanceEstimate(
            probability=probability,
            risk_class=risk,
            primary_issue=primary_issue,
            suspension_type=params.suspension_type,
            notes=list(rules.notes),
            component_warnings=self._component_warnings(params, probability, risk),
            lift_recommendation=self._lift_recommendation(rules, params, risk),
            trimming_assessment=self._trimming_assessment(params, probability),
            summary=self._summary(params, probability, risk, primary_issue),
        )

    def _tree_lookup(self, rules: SuspensionRules, params: ClearanceParams) -> tuple[int, Optional[str]]:
        branches = rules.tree[lift_bracket(params.lift_height_in)]
        for limit, probability, issue in branches:
            if limit is None or params.diameter_increase_in <= limit:
                return probability, issue
        # Unreachable: the last branch has no limit
        raise AssertionError("clearance decision tree has no open-ended branch")

    def _component_warnings(
        self,
        params: ClearanceParams,
        probability: int,
        risk: ImpactLevel,
    ) -> list[ComponentWarning]:
        warnings = []
        diameter = params.diameter_increase_in
        width = params.width_increase_in
        lift = params.lift_height_in

        if params.suspension_type == SuspensionType.IFS:
            if probability > 40:
                warnings.append(ComponentWarning(
                    component="Upper Control Arms (UCAs)",
                    risk=risk,
                    description="Tire may contact UCA at full compression. "
                                "Consider aftermarket UCAs with more clearance.",
                    severity="critical" if probability > 70 else "moderate",
                ))
            if diameter > 2 and lift < 2:
                warnings.append(ComponentWarning(
                    component="Cab Mount Chop (CMC)",
                    risk=ImpactLevel.MODERATE,
                    description="CMC trimming likely required for adequate turning radius without rubbing.",
                    severity="moderate",
                ))
            if width > 1.5:
                warnings.append(ComponentWarning(
                    component="Fender Liners",
                    risk=ImpactLevel.MODERATE,
                    description="Fender liner trimming or removal may be necessary.",
                    severity="minor",
                ))
        else:
            if probability > 50:
                warnings.append(ComponentWarning(
                    component="Fender Wells",
                    risk=risk,
                    description="Fender trimming or flat fenders may be required.",
                    severity="moderate" if probability > 70 else "minor",
                ))
            if diameter > 4:
                warnings.append(ComponentWarning(
                    component="Bump Stops",
                    risk=ImpactLevel.MODERATE,
                    description="Bump stop trimming or relocation may be needed.",
                    severity="minor",
                ))

        if width > 2:
            warnings.append(ComponentWarning(
                component="Mud Flaps",
                risk=ImpactLevel.LOW,
                description="Mud flaps will likely need to be removed or relocated.",
                severity="minor",
            ))
        if diameter > 3 and lift < 3:
            warnings.append(ComponentWarning(
                component="Brake Lines",
                risk=ImpactLevel.MODERATE,
                description="Extended brake lines may be required for adequate flex.",
                severity="moderate",
            ))
        if diameter > 5:
            warnings.append(ComponentWarning(
                component="Speedometer/ABS",
                risk=ImpactLevel.LOW,
                description="Speedometer recalibration required. "
                            "ABS/traction control may behave differently.",
                severity="minor",
            ))

        return warnings

    def _lift_recommendation(
        self,
        rules: SuspensionRules,
        params: ClearanceParams,
        risk: ImpactLevel,
    ) -> LiftRecommendation:
        if risk == ImpactLevel.LOW:
            return LiftRecommendation(
                required=False,
                current_adequate=True,
                message="Current lift is adequate for this tire size",
            )

        ideal = params.diameter_increase_in * rules.lift_per_inch
        additional = max(0.0, ideal - params.lift_height_in)
        if additional < 0.5:
            return LiftRecommendation(
                required=False,
                current_adequate=True,
                message=f'Current {params.lift_height_in:g}" lift is sufficient with minor trimming',
            )

        recommended = _round_up_half_inch(ideal)
        return LiftRecommendation(
            required=True,
            current_adequate=False,
            message=f'Recommend {recommended:g}" total lift for proper clearance',
            additional_needed_in=_round_up_half_inch(additional),
            recommended_total_in=recommended,
        )

    def _trimming_assessment(self, params: ClearanceParams, probability: int) -> TrimmingAssessment:
        if probability < 30:
            trim_probability, extent = 10, "minimal"
        elif probability < 50:
            trim_probability, extent = 50, "minor"
        elif probability < 70:
            trim_probability, extent = 75, "moderate"
        else:
            trim_probability, extent = 90, "extensive"

        areas = []
        if params.suspension_type == SuspensionType.IFS and params.diameter_increase_in > 2:
            areas.append("Cab mount chop (CMC)")
        if probability > 40:
            areas.append("Fender liners")
        if probability > 60:
            areas.append("Inner fender wells")
        if probability > 70:
            areas.extend(["Pinch welds", "Bump stops"])

        return TrimmingAssessment(
            probability=trim_probability,
            extent=extent,
            areas=areas,
            message=f"{extent.capitalize()} trimming likely needed",
        )

    def _summary(
        self,
        params: ClearanceParams,
        probability: int,
        risk: ImpactLevel,
        primary_issue: Optional[str],
    ) -> str:
        if risk == ImpactLevel.LOW:
            fit = "your current lift" if params.lift_height_in > 0 else "minimal or no modifications"
            return (
                f"Low clearance risk ({probability}% chance of rubbing). "
                f"This tire size should fit with {fit}."
            )
        if risk == ImpactLevel.MODERATE:
            return (
                f"Moderate clearance risk ({probability}% chance of rubbing). "
                f"{primary_issue or 'Some modifications may be required'}. "
                "Expect minor trimming or small lift addition."
            )
        tail = (
            "IFS clearance is challenging with this tire size."
            if params.suspension_type == SuspensionType.IFS
            else "Plan for extensive trimming or additional lift."
        )
        return (
            f"High clearance risk ({probability}% chance of rubbing). "
            f"{primary_issue or 'Significant modifications required'}. {tail}"
        )


def estimate_from_comparison(
    comparison: ComparisonResult,
    suspension_type: Union[SuspensionType, str] = SuspensionType.IFS,
    lift_height_in: float = 0.0,
    estimator: Optional[ClearanceProbabilityEstimator] = None,
) -> ClearanceEstimate:
    """Clearance estimate for the diameter and width growth of a comparison."""
    return (estimator or ClearanceProbabilityEstimator()).estimate(
        suspension_type=suspension_type,
        lift_height_in=lift_height_in,
        diameter_increase_in=comparison.differences.diameter.absolute,
        width_increase_in=comparison.differences.width.absolute,
        new_diameter_in=comparison.new.diameter_in,
    )


def _normalize_vehicle(name: str) -> str:
    return "_".join(name.lower().split())


def suspension_for_vehicle(name: str, reference: Optional[ReferenceData] = None) -> SuspensionType:
    """
    Front suspension type for a vehicle name.

    The longest matching keyword wins, so '4Runner pre 2003' resolves to a
    solid axle while '4Runner' resolves to IFS. Unknown vehicles default to
    IFS, the more restrictive case.
    """
    reference = reference or get_reference()
    normalized = _normalize_vehicle(name)

    best: Optional[tuple[int, SuspensionType]] = None
    candidates = [(k, SuspensionType.IFS) for k in reference.ifs_vehicles]
    candidates += [(k, SuspensionType.SOLID_AXLE) for k in reference.solid_axle_vehicles]
    for keyword, suspension in candidates:
        if keyword in normalized and (best is None or len(keyword) > best[0]):
            best = (len(keyword), suspension)

    if best is None:
        logger.debug("No suspension match for %r, assuming IFS", name)
        return SuspensionType.IFS
    return best[1]
