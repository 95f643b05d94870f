"""
Re-gear recommendation engine.

Proposes commercially available axle ratios after a tire change and
scores each candidate against the intended use.
"""

import logging
from typing import Any, Mapping, Optional, Union

from tirecalc.catalog.loader import get_reference
from tirecalc.catalog.models import GearPriority, ReferenceData, UseCaseProfile
from tirecalc.models.inputs import DrivetrainConfig, IntendedUse
from tirecalc.models.outputs import (
    ComparisonResult,
    CostRange,
    IdealRatios,
    RatioImpact,
    RegearAnalysis,
    RegearCandidate,
    RegearNecessity,
    RegearRecommendation,
    Verdict,
)
from tirecalc.physics.drivetrain import (
    HIGHWAY_TEST_SPEED_MPH,
    crawl_ratio,
    effective_gear_ratio,
    engine_rpm,
    min_axle_ratio_for_crawl,
    ratio_for_target_rpm,
    restoration_ratio,
)
from tirecalc.physics.units import round_half_up

logger = logging.getLogger(__name__)

# Catalog ratios proposed per ideal ratio
OPTIONS_PER_TARGET = 2

GEARS_COST = CostRange(min=800, max=1500)
INSTALLATION_COST = CostRange(min=600, max=1200)
TOTAL_COST = CostRange(min=1400, max=2700)

REGEAR_CONSIDERATIONS = [
    "Re-gearing requires professional installation and setup",
    "Both front and rear axles should be re-geared together for 4WD/AWD vehicles",
    "Locker installation can be done simultaneously to save labor costs",
    "Gear ratio change may require speedometer recalibration",
]
REGEAR_BENEFITS = [
    "Restores factory-like acceleration and power delivery",
    "Reduces transmission and engine strain",
    "Improves drivability with larger tires",
    "Can improve fuel economy compared to running tall tires with low gears",
]


def regear_necessity(comparison: ComparisonResult) -> RegearNecessity:
    """How necessary a re-gear is, from the diameter change alone."""
    diameter_pct = comparison.differences.diameter.percentage
    effective_pct = 0.0
    if comparison.drivetrain_impact is not None:
        effective_pct = comparison.drivetrain_impact.effective_gear_ratio.change_percentage

    magnitude = abs(diameter_pct)
    if magnitude > 10:
        level = "strongly_recommended"
        reason = "Diameter change >10% will significantly impact performance and drivetrain stress"
    elif magnitude > 5:
        level = "recommended"
        reason = "Noticeable performance impact. Re-gearing will improve drivability"
    elif magnitude > 3:
        level = "consider"
        reason = "Minor performance impact. Re-gearing depends on use case and budget"
    else:
        level = "optional"
        reason = "Tire size change is minimal"

    return RegearNecessity(
        level=level,
        reason=reason,
        diameter_change_pct=diameter_pct,
        effective_ratio_change_pct=effective_pct,
    )


def closest_ratios(catalog: tuple[float, ...], target: float, count: int = OPTIONS_PER_TARGET) -> list[float]:
    """The `count` catalog ratios nearest to target (ties keep catalog order)."""
    return sorted(catalog, key=lambda ratio: abs(ratio - target))[:count]


class RegearEngine:
    """
    Generator for re-gear candidates.

    Computes a restoration ratio (factory effective gearing) and an optimal
    ratio (use-case target RPM, plus the crawl minimum for torque-priority
    use cases), proposes the nearest catalog ratios for both and scores
    each one.
    """

    def __init__(self, reference: Optional[ReferenceData] = None):
        """
        Initialize the engine.

        Args:
            reference: Reference dataset providing the ratio catalog and use-case profiles
        """
        self.reference = reference or get_reference()

    def recommend(
        self,
        comparison: ComparisonResult,
        current_gear_ratio: float,
        intended_use: Union[IntendedUse, str, None] = IntendedUse.WEEKEND_TRAIL,
        drivetrain: Union[DrivetrainConfig, Mapping[str, Any], None] = None,
    ) -> RegearRecommendation:
        """
        Recommend axle ratios for a tire change.

        Args:
            comparison: Result of ComparisonEngine.compare
            current_gear_ratio: Installed axle ratio
            intended_use: Use case (unknown values fall back to weekend trail)
            drivetrain: Transmission and transfer case ratios
                (defaults to the comparison's drivetrain)

        Returns:
            RegearRecommendation, candidates sorted best first

        Raises:
            InvalidConfigError: If the gear ratio or drivetrain is invalid
        """
        config = DrivetrainConfig.build(
            drivetrain if drivetrain is not None else comparison.drivetrain,
            axle_gear_ratio=current_gear_ratio,
        )
        profile = self.reference.profile(self._coerce_use(intended_use))

        current_d = comparison.current.diameter_in
        new_d = comparison.new.diameter_in
        restoration = restoration_ratio(current_gear_ratio, current_d, new_d)
        optimal = self.optimal_ratio(new_d, profile, config)

        catalog = self.reference.gear_ratios
        restoration_options = closest_ratios(catalog, restoration)
        optimal_options = closest_ratios(catalog, optimal)

        candidates = []
        for ratio in sorted(set(restoration_options) | set(optimal_options), reverse=True):
            impact = self.ratio_impact(comparison, current_gear_ratio, ratio, config)
            candidates.append(RegearCandidate(
                ratio=ratio,
                type="restoration" if ratio in restoration_options else "optimal",
                impact=impact,
                verdict=self.verdict(impact, profile),
            ))
        candidates.sort(key=lambda c: (c.verdict.score, c.ratio), reverse=True)

        if not candidates:
            logger.warning("Gear ratio catalog is empty; no re-gear candidates")

        return RegearRecommendation(
            necessity=regear_necessity(comparison),
            use_case=profile.name,
            current_ratio=current_gear_ratio,
            ideal_ratios=IdealRatios(restoration=restoration, optimal=optimal),
            candidates=candidates,
            analysis=self.analysis() if candidates else None,
        )

    def optimal_ratio(self, new_diameter_in: float, profile: UseCaseProfile, config: DrivetrainConfig) -> float:
        """Axle ratio hitting the profile's target RPM, raised to the crawl minimum when torque matters."""
        optimal = ratio_for_target_rpm(
            profile.target_rpm_at_65,
            new_diameter_in,
            config.transmission_top_gear_ratio,
        )
        if profile.priority == GearPriority.TORQUE and profile.crawl_ratio_min:
            minimum = min_axle_ratio_for_crawl(
                profile.crawl_ratio_min,
                config.transfer_case_low_ratio,
                config.first_gear_ratio,
            )
            return max(optimal, minimum)
        return optimal

    def ratio_impact(
        self,
        comparison: ComparisonResult,
        current_gear_ratio: float,
        ratio: float,
        config: DrivetrainConfig,
    ) -> RatioImpact:
        """Highway RPM, crawl ratio and restoration for a candidate ratio on the new tires."""
        new_d = comparison.new.diameter_in
        rpm = engine_rpm(HIGHWAY_TEST_SPEED_MPH, ratio, config.transmission_top_gear_ratio, new_d)
        crawl = crawl_ratio(ratio, config.transfer_case_low_ratio, config.first_gear_ratio)

        # Effective ratio on the new tires relative to the original setup
        new_effective = effective_gear_ratio(ratio, comparison.current.diameter_in, new_d)
        restoration_pct = (new_effective - current_gear_ratio) / current_gear_ratio * 100

        if restoration_pct > 2:
            acceleration = "improved"
        elif restoration_pct < -2:
            acceleration = "reduced"
        else:
            acceleration = "similar"

        if rpm < 2200:
            fuel_economy = "improved"
        elif rpm > 2500:
            fuel_economy = "reduced"
        else:
            fuel_economy = "similar"

        if rpm < 2400:
            comfort = "comfortable"
        elif rpm < 2700:
            comfort = "moderate"
        else:
            comfort = "high RPM"

        return RatioImpact(
            rpm=int(round_half_up(rpm)),
            crawl_ratio=round_half_up(crawl, 1),
            restoration_percentage=restoration_pct,
            acceleration=acceleration,
            fuel_economy=fuel_economy,
            highway_comfort=comfort,
        )

    def verdict(self, impact: RatioImpact, profile: UseCaseProfile) -> Verdict:
        """
        Score a candidate for a use case.

        Base score is 50, adjusted by distance from the target RPM and by
        the profile's priority.
        """
        score = 50
        pros: list[str] = []
        cons: list[str] = []

        rpm_diff = abs(impact.rpm - profile.target_rpm_at_65)
        if rpm_diff < 100:
            score += 30
            pros.append("Ideal RPM for intended use")
        elif rpm_diff < 200:
            score += 20
            pros.append("Good RPM range for intended use")
        elif rpm_diff > 400:
            score -= 20
            cons.append("RPM significantly off target")

        priority = profile.priority
        if priority == GearPriority.FUEL_ECONOMY:
            if impact.fuel_economy == "improved":
                score += 20
                pros.append("Better fuel economy")
            elif impact.fuel_economy == "reduced":
                score -= 15
                cons.append("Reduced fuel economy")
        elif priority == GearPriority.TORQUE:
            if impact.crawl_ratio >= 50:
                score += 25
                pros.append("Excellent crawl ratio for technical terrain")
            elif impact.crawl_ratio < 40:
                score -= 15
                cons.append("Crawl ratio may be insufficient for difficult rock crawling")
        elif priority == GearPriority.POWER:
            if impact.acceleration == "improved":
                score += 20
                pros.append("Improved acceleration and power delivery")
            elif impact.acceleration == "reduced":
                score -= 15
                cons.append("Reduced acceleration")
        elif priority == GearPriority.BALANCED:
            if abs(impact.restoration_percentage) < 5:
                score += 20
                pros.append("Well-balanced performance restoration")

        if impact.highway_comfort == "comfortable":
            pros.append("Comfortable highway cruising RPM")
        elif impact.highway_comfort == "high RPM":
            cons.append("High RPM on highway - may be loud and hurt fuel economy")

        if score >= 80:
            recommendation = "Excellent choice for your use case"
        elif score >= 65:
            recommendation = "Good option for your use case"
        elif score >= 50:
            recommendation = "Acceptable but not ideal"
        else:
            recommendation = "Not recommended for your use case"

        return Verdict(score=score, pros=pros, cons=cons, recommendation=recommendation)

    def analysis(self) -> RegearAnalysis:
        """Cost ranges and practical notes for a re-gear job."""
        return RegearAnalysis(
            gears_cost=GEARS_COST,
            installation_cost=INSTALLATION_COST,
            total_cost=TOTAL_COST,
            considerations=list(REGEAR_CONSIDERATIONS),
            benefits=list(REGEAR_BENEFITS),
            timeline="1-2 days for professional installation",
        )

    @staticmethod
    def _coerce_use(intended_use: Union[IntendedUse, str, None]) -> IntendedUse:
        if intended_use is None:
            return IntendedUse.WEEKEND_TRAIL
        try:
            return IntendedUse(intended_use)
        except ValueError:
            logger.debug("Unknown use case %r, using weekend trail profile", intended_use)
            return IntendedUse.WEEKEND_TRAIL
