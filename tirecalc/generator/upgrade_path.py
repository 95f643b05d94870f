"""
Upgrade path planner.

Turns the analysis of a tire change into an ordered list of supporting
modifications, priced by parts tier and split into phases.

Priorities:
1. Safety (brakes)
2. Clearance (lift; wheels when clearance risk is HIGH)
3-4. Performance (axle re-gear)
5-6. Fitment (wheels, trimming)
7-8. Protection (sliders, bumpers)
"""

import logging
from typing import Optional, Union

from tirecalc.errors import InvalidConfigError
from tirecalc.models.inputs import BudgetLevel, PlanTimeline
from tirecalc.models.outputs import (
    ClearanceEstimate,
    ComparisonResult,
    CostRange,
    ImpactLevel,
    PlannedUpgrade,
    StressScoreResult,
    UpgradeCostEstimate,
    UpgradePath,
    UpgradePhase,
    UpgradeSchedule,
)
from tirecalc.physics.units import round_half_up

logger = logging.getLogger(__name__)


def _costs(budget: tuple[int, int], mid_range: tuple[int, int], premium: tuple[int, int]) -> dict:
    return {
        BudgetLevel.BUDGET: CostRange(min=budget[0], max=budget[1]),
        BudgetLevel.MID_RANGE: CostRange(min=mid_range[0], max=mid_range[1]),
        BudgetLevel.PREMIUM: CostRange(min=premium[0], max=premium[1]),
    }


# Parts plus labour per upgrade, in USD
UPGRADE_COSTS: dict[str, dict[BudgetLevel, CostRange]] = {
    "brakes": _costs((300, 600), (600, 1200), (1200, 2500)),
    "lift": _costs((400, 800), (1200, 2500), (3000, 6000)),
    "regear": _costs((1800, 2400), (2400, 3200), (3200, 4500)),
    "wheels": _costs((600, 1000), (1200, 2000), (2500, 5000)),
    "trimming": _costs((0, 200), (200, 500), (500, 1200)),
    "sliders": _costs((400, 800), (800, 1500), (1500, 3000)),
    "bumpers": _costs((600, 1200), (1500, 3000), (3000, 6000)),
}
DEFAULT_COST = CostRange(min=500, max=1500)

BRAKE_OPTIONS = {
    BudgetLevel.BUDGET: ["Upgraded brake pads/rotors", "Stainless steel brake lines"],
    BudgetLevel.MID_RANGE: ["Big brake kit (front)", "Performance pads/rotors (all)", "Braided lines"],
    BudgetLevel.PREMIUM: [
        "Full big brake kit (front/rear)", "Multi-piston calipers", "Slotted rotors", "Track-spec pads",
    ],
}
SUSPENSION_OPTIONS = {
    BudgetLevel.BUDGET: ["Spacer lift + shocks", "Budget coilover kit"],
    BudgetLevel.MID_RANGE: ["Quality coilover system", "Adjustable shocks", "UCAs if needed"],
    BudgetLevel.PREMIUM: ["Premium coilover system", "Adjustable everything", "Long-travel kit", "Custom tuning"],
}
WHEEL_OPTIONS = {
    BudgetLevel.BUDGET: ["Method, Pro Comp, or similar", '17" standard beadlock-capable'],
    BudgetLevel.MID_RANGE: ["Method Race Wheels", "KMC", "Fuel Off-Road", "True beadlock option"],
    BudgetLevel.PREMIUM: ["Method Race Wheels (beadlock)", "Walker Evans", "KMC Machete", "Custom powder coat"],
}
SLIDER_OPTIONS = {
    BudgetLevel.BUDGET: ["Bolt-on tube sliders", "Basic protection"],
    BudgetLevel.MID_RANGE: ["Weld-on sliders", "Step integration", "DOM tubing"],
    BudgetLevel.PREMIUM: ["Custom-fab sliders", "Integrated steps", "Powder-coated", "Strategic plating"],
}
BUMPER_OPTIONS = {
    BudgetLevel.BUDGET: ["Bolt-on steel bumper (front)", "Basic winch mount"],
    BudgetLevel.MID_RANGE: ["Quality bumper set (F/R)", "Winch mount", "D-ring mounts", "Integrated lighting"],
    BudgetLevel.PREMIUM: [
        "Custom-fab bumpers", "Integrated lights/winch", "Strategic approach angles", "Powder-coated",
    ],
}
TRIMMING_OPTIONS = {
    "extensive": ["Flat fenders", "Body mount chop (CMC)", "Pinch weld modification", "Inner fender removal"],
    "moderate": ["CMC (cab mount chop)", "Fender liner trimming", "Pinch weld hammering"],
}
MINOR_TRIMMING_OPTIONS = ["Fender liner trimming", "Minor plastic removal"]

# Install timing labels, grouped by phase of a phased plan
WITH_INSTALL = ("with tire install", "before driving")
SOON = ("within 3-6 months",)
LATER = ("next phase", "future upgrade", "eventual upgrade")

DEFAULT_LIFT_IN = 2.0
DEFAULT_GEAR_INCREASE_PCT = 10.0


def estimate_cost(
    upgrade_type: str,
    budget_level: BudgetLevel,
    lift_in: Optional[float] = None,
) -> CostRange:
    """
    Cost range for an upgrade at a budget level.

    Lift kits above 2in cost 1.2x and above 3in 1.5x the base range.
    Unknown upgrade types get a generic 500-1500 range.
    """
    cost = UPGRADE_COSTS.get(upgrade_type, {}).get(budget_level, DEFAULT_COST)
    if upgrade_type == "lift" and lift_in:
        multiplier = 1.5 if lift_in > 3 else 1.2 if lift_in > 2 else 1.0
        cost = CostRange(
            min=int(round_half_up(cost.min * multiplier)),
            max=int(round_half_up(cost.max * multiplier)),
        )
    return cost


def regear_options(budget_level: BudgetLevel, gear_increase_pct: float) -> list[str]:
    if budget_level == BudgetLevel.BUDGET:
        return [f"Stock ratio + {gear_increase_pct:g}% (both axles)", "Basic install kit"]
    if budget_level == BudgetLevel.MID_RANGE:
        return ["Quality gear set", "Master install kit", "New carrier if needed", "Pro installation"]
    return ["Premium gear set", "ARB/Eaton lockers", "Chromoly shafts", "Full diff rebuild"]


def _midpoint(cost: CostRange) -> float:
    return (cost.min + cost.max) / 2


class UpgradePathPlanner:
    """
    Rule-based planner for supporting modifications.

    Safety-critical upgrades come first, then clearance, performance
    restoration, fitment and protection. Missing analyses count as no
    stress, no rotational impact and LOW clearance risk.
    """

    def __init__(
        self,
        budget_level: Union[BudgetLevel, str] = BudgetLevel.MID_RANGE,
        timeline: Union[PlanTimeline, str] = PlanTimeline.PHASED,
    ):
        try:
            self.budget_level = BudgetLevel(budget_level)
            self.timeline = PlanTimeline(timeline)
        except ValueError as e:
            raise InvalidConfigError(f"Invalid upgrade plan option: {e}") from e

    def plan(
        self,
        comparison: ComparisonResult,
        stress: Optional[StressScoreResult] = None,
        clearance: Optional[ClearanceEstimate] = None,
    ) -> UpgradePath:
        """
        Build the upgrade path for a tire change.

        Args:
            comparison: Result of ComparisonEngine.compare
            stress: Drivetrain stress score, if gearing was supplied
            clearance: Clearance probability estimate

        Returns:
            UpgradePath with upgrades sorted by priority
        """
        stress_score = stress.score if stress is not None else 0
        rotational = comparison.rotational_impact.impact_factor if comparison.rotational_impact else 0.0
        risk = clearance.risk_class if clearance is not None else ImpactLevel.LOW
        diameter_increase = abs(comparison.differences.diameter.absolute)

        upgrades = []
        if rotational > 10 or stress_score > 60:
            upgrades.append(self._brakes())
        if risk in (ImpactLevel.HIGH, ImpactLevel.MODERATE):
            upgrades.append(self._lift(clearance, risk))
        regear = self._regear(stress, stress_score)
        if regear is not None:
            upgrades.append(regear)
        if comparison.differences.width.absolute > 1.5:
            upgrades.append(self._wheels(risk))
        if risk in (ImpactLevel.HIGH, ImpactLevel.MODERATE):
            trimming = self._trimming(clearance)
            if trimming is not None:
                upgrades.append(trimming)
        if diameter_increase > 2:
            upgrades.append(self._sliders())
        if diameter_increase > 3 and self.budget_level != BudgetLevel.BUDGET:
            upgrades.append(self._bumpers())

        # Stable sort keeps insertion order within a priority
        upgrades.sort(key=lambda u: u.priority)

        essential = [u for u in upgrades if u.is_essential]
        logger.debug("Planned %d upgrades (%d essential)", len(upgrades), len(essential))

        return UpgradePath(
            upgrades=upgrades,
            total_upgrades=len(upgrades),
            essential_upgrades=len(essential),
            estimated_cost=UpgradeCostEstimate(
                essential=int(round_half_up(sum(_midpoint(u.cost) for u in essential))),
                total=int(round_half_up(sum(_midpoint(u.cost) for u in upgrades))),
                cost_range=CostRange(
                    min=sum(u.cost.min for u in upgrades),
                    max=sum(u.cost.max for u in upgrades),
                ),
            ),
            schedule=self.schedule(upgrades),
            budget_level=self.budget_level,
        )

    def _brakes(self) -> PlannedUpgrade:
        return PlannedUpgrade(
            priority=1,
            category="Safety",
            upgrade="Brake Upgrade",
            necessity="essential",
            reason="Larger/heavier tires significantly increase braking distances",
            cost=estimate_cost("brakes", self.budget_level),
            timeline="before driving",
            options=BRAKE_OPTIONS[self.budget_level],
        )

    def _lift(self, clearance: ClearanceEstimate, risk: ImpactLevel) -> PlannedUpgrade:
        lift = clearance.lift_recommendation.recommended_total_in or DEFAULT_LIFT_IN
        return PlannedUpgrade(
            priority=2,
            category="Clearance",
            upgrade=f'{lift:g}" Suspension Lift',
            necessity="essential" if risk == ImpactLevel.HIGH else "recommended",
            reason=f"{risk.value} clearance risk - lift needed to prevent rubbing",
            cost=estimate_cost("lift", self.budget_level, lift),
            timeline="with tire install",
            options=SUSPENSION_OPTIONS[self.budget_level],
        )

    def _regear(self, stress: Optional[StressScoreResult], stress_score: int) -> Optional[PlannedUpgrade]:
        if stress_score >= 50:
            suggested = stress.regearing.suggested_increase
            increase = suggested.percent_increase if suggested is not None else DEFAULT_GEAR_INCREASE_PCT
            return PlannedUpgrade(
                priority=3,
                category="Performance",
                upgrade="Axle Regearing",
                necessity="essential" if stress_score >= 70 else "strongly recommended",
                reason=f"{stress_score}/100 drivetrain stress - restore factory performance",
                cost=estimate_cost("regear", self.budget_level),
                timeline="within 3-6 months",
                options=regear_options(self.budget_level, increase),
            )
        if stress_score >= 35:
            return PlannedUpgrade(
                priority=4,
                category="Performance",
                upgrade="Axle Regearing",
                necessity="recommended",
                reason="Moderate drivetrain stress - regearing improves driveability",
                cost=estimate_cost("regear", self.budget_level),
                timeline="eventual upgrade",
                options=regear_options(self.budget_level, 8),
            )
        return None

    def _wheels(self, risk: ImpactLevel) -> PlannedUpgrade:
        high = risk == ImpactLevel.HIGH
        return PlannedUpgrade(
            priority=2 if high else 5,
            category="Fitment",
            upgrade="Wheels with Proper Offset",
            necessity="required" if high else "recommended",
            reason="Wider tires require less backspacing to prevent rubbing",
            cost=estimate_cost("wheels", self.budget_level),
            timeline="with tire install",
            options=WHEEL_OPTIONS[self.budget_level],
        )

    def _trimming(self, clearance: ClearanceEstimate) -> Optional[PlannedUpgrade]:
        extent = clearance.trimming_assessment.extent
        if extent in ("none", "minimal"):
            return None
        return PlannedUpgrade(
            priority=6,
            category="Fitment",
            upgrade="Fender/Body Trimming",
            necessity="required" if extent == "extensive" else "likely needed",
            reason=f"{extent} trimming for full articulation clearance",
            cost=estimate_cost("trimming", self.budget_level),
            timeline="with tire install",
            options=TRIMMING_OPTIONS.get(extent, MINOR_TRIMMING_OPTIONS),
        )

    def _sliders(self) -> PlannedUpgrade:
        return PlannedUpgrade(
            priority=7,
            category="Protection",
            upgrade="Rock Sliders",
            necessity="recommended",
            reason="Larger tires for off-road use - protect rocker panels",
            cost=estimate_cost("sliders", self.budget_level),
            timeline="next phase",
            options=SLIDER_OPTIONS[self.budget_level],
        )

    def _bumpers(self) -> PlannedUpgrade:
        return PlannedUpgrade(
            priority=8,
            category="Protection",
            upgrade="Aftermarket Bumpers",
            necessity="optional",
            reason="Improved approach/departure angles, winch mounting",
            cost=estimate_cost("bumpers", self.budget_level),
            timeline="future upgrade",
            options=BUMPER_OPTIONS[self.budget_level],
        )

    def schedule(self, upgrades: list[PlannedUpgrade]) -> UpgradeSchedule:
        """Split upgrades into phases for the planner's timeline."""
        def names(keep) -> list[str]:
            return [u.upgrade for u in upgrades if keep(u)]

        if self.timeline == PlanTimeline.IMMEDIATE:
            return UpgradeSchedule(
                type=self.timeline,
                description="All essential upgrades before driving",
                phases=[UpgradePhase(phase="Before First Drive", upgrades=names(lambda u: u.is_essential))],
            )
        if self.timeline == PlanTimeline.PHASED:
            return UpgradeSchedule(
                type=self.timeline,
                description="Spread upgrades over 6-12 months",
                phases=[
                    UpgradePhase(
                        phase="Phase 1 (With Tire Install)",
                        upgrades=names(lambda u: u.timeline in WITH_INSTALL),
                    ),
                    UpgradePhase(phase="Phase 2 (0-6 months)", upgrades=names(lambda u: u.timeline in SOON)),
                    UpgradePhase(phase="Phase 3 (6-12+ months)", upgrades=names(lambda u: u.timeline in LATER)),
                ],
            )
        return UpgradeSchedule(
            type=self.timeline,
            description="Upgrade as budget allows",
            phases=[
                UpgradePhase(phase="Essential First", upgrades=names(lambda u: u.necessity == "essential")),
                UpgradePhase(phase="Performance Next", upgrades=names(lambda u: u.category == "Performance")),
                UpgradePhase(phase="Protection Later", upgrades=names(lambda u: u.category == "Protection")),
            ],
        )


def plan_upgrade_path(
    comparison: ComparisonResult,
    stress: Optional[StressScoreResult] = None,
    clearance: Optional[ClearanceEstimate] = None,
    budget_level: Union[BudgetLevel, str] = BudgetLevel.MID_RANGE,
    timeline: Union[PlanTimeline, str] = PlanTimeline.PHASED,
) -> UpgradePath:
    """Plan an upgrade path with a one-off UpgradePathPlanner."""
    return UpgradePathPlanner(budget_level, timeline).plan(comparison, stress, clearance)
