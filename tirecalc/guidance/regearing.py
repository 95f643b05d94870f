"""
Practical regearing guidance.

Qualitative advice keyed by how big the tire change is, describing what
owners actually do at each size (forum consensus from Tacoma, 4Runner
and Wrangler communities) rather than an engineering score.

Scenarios by absolute diameter change:
- minimal:  <2%
- small:    2-5%   (~33" tires)
- moderate: 5-12%  (35" tires)
- large:    12-20% (37" tires)
- extreme:  20%+   (40"+ tires)
"""

from typing import Optional, Union

from tirecalc.models.inputs import IntendedUse
from tirecalc.models.outputs import ComparisonResult, RegearingGuidance

# (upper bound of |diameter change %|, scenario); above the last bound is extreme
SCENARIO_BOUNDS = (
    (2.0, "minimal"),
    (5.0, "small"),
    (12.0, "moderate"),
    (20.0, "large"),
)


def scenario_for(diameter_change_pct: float) -> str:
    magnitude = abs(diameter_change_pct)
    for bound, scenario in SCENARIO_BOUNDS:
        if magnitude < bound:
            return scenario
    return "extreme"


def _minimal(daily: bool, rock: bool) -> dict:
    return dict(
        likelihood="5%",
        consensus="Almost nobody regears for this",
        reality_check="This tire size change is negligible. Stock gears are perfectly fine.",
        why_regear=[
            "Already planning to go much bigger later",
            "Want absolutely perfect factory feel restored",
        ],
        why_not_regear=[
            "Tire change is too small to matter",
            "Performance impact is imperceptible",
            "Not worth the $2,000-3,000 cost",
        ],
        cost_context="$2,000-3,000 for parts + labor",
        recommendation="No regearing needed",
        transmission_note="Automatic and manual transmissions both handle this fine.",
        sources='Forum consensus: "Not worth it for small changes"',
    )


def _small(daily: bool, rock: bool) -> dict:
    return dict(
        likelihood="30%" if daily else "20%",
        consensus='Most people DON\'T regear for 33" tires',
        reality_check=(
            f"About {'70%' if daily else '80%'} of users run 33\" tires on stock gears "
            "indefinitely. They accept slightly slower acceleration as a trade-off."
        ),
        why_regear=[
            'Planning to go to 35" or larger later',
            "Daily driving with automatic transmission feels too sluggish",
            "Frequent towing or mountain driving",
            "Heavy off-road use or rock crawling",
            "Have a 4-cylinder engine (less torque to spare)",
        ],
        why_not_regear=[
            "Cost: $2,000-3,000+ for regearing",
            "V6/V8 engine has sufficient torque",
            "Weekend trail use only (not daily driver)",
            "Can live with 1-2 MPG loss and slightly slower acceleration",
            "Already have 4.10+ gears (not 3.73)",
        ],
        cost_context="$2,000-3,000 for parts + labor; this is the #1 reason people skip regearing",
        recommendation=(
            "Optional. Most skip it, but daily drivers benefit most if you do regear."
            if daily
            else "Optional. Most people run 33s on stock gears for years with no issues."
        ),
        transmission_note="Automatics feel the impact more. Manuals handle stock gears better.",
        sources='Tacoma World, 4Runner Forums: "You can get away without regearing for 33s"',
    )


def _moderate(daily: bool, rock: bool) -> dict:
    if daily:
        recommendation = (
            "Recommended for daily drivers. Most regear to avoid transmission hunting and power loss."
        )
    elif rock:
        recommendation = (
            "Optional. Many rock crawlers prefer the lower effective gearing and don't regear."
        )
    else:
        recommendation = "About 50/50 split. Depends on your tolerance for reduced performance."

    return dict(
        likelihood="60%" if daily else "40%",
        consensus='About half regear for 35" tires',
        reality_check=(
            "60% of daily drivers regear due to sluggish performance and transmission hunting."
            if daily
            else "40% regear; many weekend wheelers run 35s on stock gears without issues."
        ),
        why_regear=[
            "Daily driving with automatic transmission (transmission hunting, sluggish)",
            "Automatic transmission overheating in mountains/traffic",
            "Significant power loss affecting driveability",
            "Highway driving: transmission won't hold top gear",
            "Want to restore factory-like performance",
        ],
        why_not_regear=[
            "Weekend use only; can tolerate reduced power",
            "Cost: $2,500-3,500 is a major investment",
            "Manual transmission: shifts manually, less issue",
            "Rock crawling: lower gearing is actually preferred",
            "Already have deep gears (4.56+)",
        ],
        cost_context="$2,500-3,500; weigh this against quality-of-life improvement",
        recommendation=recommendation,
        transmission_note=(
            "CRITICAL: Automatics often REQUIRE regearing. Manuals tolerate it better. "
            "Monitor transmission temps if staying stock."
        ),
        sources='Jeep Wrangler Forum, 4Runner: "35s with automatics, regear for daily driving"',
    )


def _large(daily: bool, rock: bool) -> dict:
    return dict(
        likelihood="80%",
        consensus='Most people regear for 37" tires',
        reality_check=(
            "About 80% of users regear. The 20% who don't often experience transmission "
            "issues or add auxiliary coolers."
        ),
        why_regear=[
            "Severe performance degradation without regearing",
            "Automatic transmission overheating (common)",
            "Transmission refuses to shift or stays in low gears",
            "Fuel economy drops to 10-13 MPG",
            "Engine lugging and excessive wear",
            "Almost mandatory for daily driving",
        ],
        why_not_regear=[
            "Pure trail rig (very limited street use)",
            "Already installed auxiliary transmission cooler",
            "Manual transmission with patience for very slow acceleration",
            "Temporary setup before going even bigger",
        ],
        cost_context="$2,500-4,000; expensive but almost necessary at this size",
        recommendation=(
            "Strongly recommended. Transmission problems are common without regearing at this size."
        ),
        transmission_note=(
            "Automatic transmissions will overheat and hunt. Manual transmissions barely "
            "tolerate this; expect very sluggish performance."
        ),
        sources='4Runner Forum: "37s on stock gears for a year, transmission was punchy, very sluggish"',
    )


def _extreme(daily: bool, rock: bool) -> dict:
    return dict(
        likelihood="95%",
        consensus='Nearly everyone regears for 40"+ tires',
        reality_check=(
            "This is extreme. Virtually everyone regears immediately. Those who don't have "
            "dedicated trail rigs with minimal street use."
        ),
        why_regear=[
            "Critical: Transmission failure likely without regearing",
            "Severe drivetrain stress and component wear",
            "Engine cannot efficiently move vehicle",
            "Highway driving nearly impossible",
            "Fuel economy in single digits",
            "Safety concern: lack of power to merge, climb",
        ],
        why_not_regear=[
            "Dedicated trailer queen (no street driving)",
            "Competition rock crawler only",
        ],
        cost_context="$3,000-5,000+, but necessary for any street use",
        recommendation="Essential. Do not drive on street without regearing.",
        transmission_note=(
            "Automatic transmission WILL overheat and fail. Manual transmission will be "
            "dangerously underpowered."
        ),
        sources='All forums: "Don\'t even think about running 40s without regearing"',
    )


SCENARIO_TEXTS = {
    "minimal": _minimal,
    "small": _small,
    "moderate": _moderate,
    "large": _large,
    "extreme": _extreme,
}


class RegearingGuidanceLookup:
    """Looks up community regearing guidance for a tire change."""

    def lookup(
        self,
        diameter_change_pct: float,
        diameter_change_in: float = 0.0,
        intended_use: Union[IntendedUse, str, None] = IntendedUse.WEEKEND_TRAIL,
    ) -> RegearingGuidance:
        """
        Guidance for a diameter change.

        Args:
            diameter_change_pct: Diameter change in percent (sign ignored)
            diameter_change_in: Diameter change in inches (informational)
            intended_use: Use case; daily driving and rock crawling change the texts

        Returns:
            RegearingGuidance
        """
        use = _coerce_use(intended_use)
        scenario = scenario_for(diameter_change_pct)
        texts = SCENARIO_TEXTS[scenario](
            use == IntendedUse.DAILY_DRIVER,
            use == IntendedUse.ROCK_CRAWLING,
        )
        return RegearingGuidance(scenario=scenario, **texts)


def _coerce_use(intended_use: Union[IntendedUse, str, None]) -> Optional[IntendedUse]:
    if intended_use is None:
        return IntendedUse.WEEKEND_TRAIL
    try:
        return IntendedUse(intended_use)
    except ValueError:
        return None


def guidance_from_comparison(
    comparison: ComparisonResult,
    intended_use: Union[IntendedUse, str, None] = None,
) -> Optional[RegearingGuidance]:
    """
    Guidance for a finished comparison.

    Returns None when the comparison has no drivetrain impact (no axle
    ratio was supplied).
    """
    if comparison.drivetrain_impact is None:
        return None
    return RegearingGuidanceLookup().lookup(
        comparison.differences.diameter.percentage,
        comparison.differences.diameter.absolute,
        intended_use or comparison.intended_use,
    )
