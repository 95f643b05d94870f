"""
Tire comparison engine.

Compares a current tire against a new tire and produces dimensional
differences, speedometer error, drivetrain impact, clearance impact,
weight/load analysis, rotational impact and compatibility advisories.

ASSUMPTIONS:
- Ground clearance rises by half the diameter change (the axle rises by
  the radius increase).
- Speedometer error depends only on the diameter ratio, so the error
  percentage is identical at every test speed.
- RPM comparisons are made at 65 mph in top gear.
"""

import logging
import warnings
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from tirecalc.catalog.loader import get_reference
from tirecalc.catalog.models import ReferenceData
from tirecalc.comparison.advisories import compatibility_advisories
from tirecalc.comparison.loads import analyze_load_capacity, analyze_weight
from tirecalc.errors import InvalidConfigError, MissingDataWarning
from tirecalc.models.inputs import DrivetrainConfig, IntendedUse, TireSpecOverrides
from tirecalc.models.outputs import (
    ClearanceImpact,
    ComparisonResult,
    CrawlSpeed,
    DimensionDelta,
    Differences,
    DrivetrainImpact,
    GroundClearanceDelta,
    LoadCapacityAnalysis,
    RatioChange,
    RotationalImpact,
    RpmChange,
    SpeedometerError,
    SpeedReading,
    TireDescriptor,
    TireMetrics,
    WeightAnalysis,
)
from tirecalc.physics.drivetrain import (
    CRAWL_REFERENCE_RPM,
    HIGHWAY_TEST_SPEED_MPH,
    crawl_ratio,
    crawl_speed_mph,
    effective_gear_ratio,
    engine_rpm,
)
from tirecalc.physics.rotational import calculate_rotational_impact
from tirecalc.physics.tire_size import coerce_tire, tire_metrics
from tirecalc.physics.units import MM_PER_INCH, round_half_up
from tirecalc.physics.weight import estimate_tire_weight, load_capacity_lbs

logger = logging.getLogger(__name__)

SPEEDOMETER_TEST_SPEEDS_MPH = (30.0, 45.0, 60.0, 75.0)

# Effective ratio change (%) beyond which gearing is called taller/shorter
EFFECTIVE_RATIO_SUMMARY_THRESHOLD = 5.0

# Diameter increase (in) -> (estimated lift, recommendation, modifications note)
CLEARANCE_BUCKETS = [
    (1.5, 0.0, "Stock suspension (trimming may be required)",
     "Minor fender liner trimming may help clearance"),
    (3.0, 1.0, '1-2" lift recommended, or extensive trimming',
     "Many fit with no lift using: fender trimming, pinch weld modification, wheel spacers/offset"),
    (4.5, 2.0, '2-3" lift recommended',
     "Fender trimming, BMC (body mount chop), and wheel offset changes typically required"),
    (6.0, 4.0, '3-4" lift recommended',
     "Significant modifications needed: extensive cutting, BMC, custom suspension, "
     "possible control arm issues"),
]
CLEARANCE_EXTREME = (5.0, '4-6" lift required',
                     "Major build: long-travel suspension, custom control arms, extensive fabrication")


def _delta(current: float, new: float, length: bool = True) -> DimensionDelta:
    change = new - current
    return DimensionDelta(
        absolute=change,
        percentage=change / current * 100,
        mm=change * MM_PER_INCH if length else None,
    )


def _coerce_use(intended_use: Union[IntendedUse, str, None]) -> IntendedUse:
    if intended_use is None:
        return IntendedUse.WEEKEND_TRAIL
    try:
        return IntendedUse(intended_use)
    except ValueError as e:
        raise InvalidConfigError(f"Unknown intended use: {intended_use!r}") from e


def _coerce_overrides(
    overrides: Union[TireSpecOverrides, Mapping[str, Any], None],
) -> TireSpecOverrides:
    if isinstance(overrides, TireSpecOverrides):
        return overrides
    try:
        return TireSpecOverrides(**(overrides or {}))
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid tire specifications: {e}") from e


class ComparisonEngine:
    """
    Builds ComparisonResult objects.

    Holds only the read-only reference dataset, so one engine can serve
    any number of comparisons.
    """

    def __init__(self, reference: Optional[ReferenceData] = None):
        """
        Initialize the engine.

        Args:
            reference: Reference dataset (defaults to the process-wide dataset)
        """
        self.reference = reference or get_reference()

    def compare(
        self,
        current: Union[TireDescriptor, str],
        new: Union[TireDescriptor, str],
        drivetrain: Union[DrivetrainConfig, Mapping[str, Any], None] = None,
        overrides: Union[TireSpecOverrides, Mapping[str, Any], None] = None,
        intended_use: Union[IntendedUse, str, None] = IntendedUse.WEEKEND_TRAIL,
    ) -> ComparisonResult:
        """
        Compare two tires.

        Args:
            current: Current tire (descriptor or size string)
            new: New tire (descriptor or size string)
            drivetrain: Gear train; without an axle ratio drivetrain impact is None
            overrides: Optional tire weights and load indexes
            intended_use: Use case for context-dependent thresholds

        Returns:
            ComparisonResult

        Raises:
            InvalidConfigError: If drivetrain or tire specs are invalid
            ParseError: If a size string cannot be parsed
        """
        # Validate configuration before doing any work
        config = DrivetrainConfig.build(drivetrain) if drivetrain is not None else None
        specs = _coerce_overrides(overrides)
        use = _coerce_use(intended_use)

        current_tire = coerce_tire(current, self.reference)
        new_tire = coerce_tire(new, self.reference)
        logger.info("Comparing %s -> %s (%s)", current_tire.display, new_tire.display, use.value)

        current_metrics = tire_metrics(current_tire)
        new_metrics = tire_metrics(new_tire)

        differences = self.calculate_differences(current_metrics, new_metrics)
        speedometer = self.calculate_speedometer_error(current_tire, new_tire)

        drivetrain_impact = None
        if config is not None and config.has_axle_ratio:
            drivetrain_impact = self.calculate_drivetrain_impact(current_tire, new_tire, config)

        weight_analysis, current_weight, new_weight = self._weight_analysis(
            current_tire, new_tire, specs, use
        )
        rotational = calculate_rotational_impact(
            current_weight,
            new_weight,
            current_tire.diameter_in,
            new_tire.diameter_in,
            weights_estimated=weight_analysis.is_estimate,
        )

        return ComparisonResult(
            current=current_metrics,
            new=new_metrics,
            differences=differences,
            speedometer_error=speedometer,
            drivetrain_impact=drivetrain_impact,
            clearance=self.calculate_clearance_impact(differences),
            weight_analysis=weight_analysis,
            load_capacity_analysis=self._load_capacity_analysis(specs, use),
            rotational_impact=rotational,
            advisories=compatibility_advisories(current_tire, new_tire, differences, speedometer, use),
            intended_use=use,
            drivetrain=config,
        )

    def calculate_differences(self, current: TireMetrics, new: TireMetrics) -> Differences:
        """Dimensional differences, new minus current."""
        diameter = _delta(current.tire.diameter_in, new.tire.diameter_in)
        gain = diameter.absolute / 2
        return Differences(
            diameter=diameter,
            width=_delta(current.tire.section_width_in, new.tire.section_width_in),
            sidewall=_delta(current.tire.sidewall_height_in, new.tire.sidewall_height_in),
            circumference=_delta(current.circumference_in, new.circumference_in),
            ground_clearance=GroundClearanceDelta(gain_in=gain, gain_mm=gain * MM_PER_INCH),
            revolutions_per_mile=_delta(
                current.revolutions_per_mile, new.revolutions_per_mile, length=False
            ),
        )

    def calculate_speedometer_error(
        self,
        current: TireDescriptor,
        new: TireDescriptor,
    ) -> SpeedometerError:
        """Actual speed at each indicated test speed."""
        ratio = new.diameter_in / current.diameter_in

        readings = []
        for speed in SPEEDOMETER_TEST_SPEEDS_MPH:
            actual = speed * ratio
            error = actual - speed
            readings.append(SpeedReading(
                indicated_mph=speed,
                actual_mph=actual,
                error_mph=error,
                error_percentage=error / speed * 100,
                correction=f"{speed:.0f} mph indicated = {actual:.1f} mph actual",
            ))

        if ratio > 1:
            summary = "Speedometer will read SLOWER than actual speed"
        elif ratio < 1:
            summary = "Speedometer will read FASTER than actual speed"
        else:
            summary = "No speedometer error"

        return SpeedometerError(ratio=ratio, summary=summary, readings=readings)

    def calculate_drivetrain_impact(
        self,
        current: TireDescriptor,
        new: TireDescriptor,
        config: DrivetrainConfig,
    ) -> DrivetrainImpact:
        """
        Effective ratio, highway RPM, crawl ratio and crawl speed.

        Args:
            current: Current tire
            new: New tire
            config: Drivetrain with an axle ratio

        Returns:
            DrivetrainImpact
        """
        axle = config.axle_gear_ratio
        top = config.transmission_top_gear_ratio

        new_effective = effective_gear_ratio(axle, current.diameter_in, new.diameter_in)
        effective_change = new_effective - axle
        effective_pct = effective_change / axle * 100
        if effective_pct < -EFFECTIVE_RATIO_SUMMARY_THRESHOLD:
            effective_summary = "Effective gearing is LOWER (taller) - reduced acceleration, lower RPM"
        elif effective_pct > EFFECTIVE_RATIO_SUMMARY_THRESHOLD:
            effective_summary = "Effective gearing is HIGHER (shorter) - improved acceleration, higher RPM"
        else:
            effective_summary = "Minimal effective gear ratio change"

        speed = HIGHWAY_TEST_SPEED_MPH
        rpm_before = engine_rpm(speed, axle, top, current.diameter_in)
        rpm_after = engine_rpm(speed, axle, top, new.diameter_in)
        rpm_change = rpm_after - rpm_before
        if round_half_up(abs(rpm_change)) == 0:
            rpm_summary = f"No RPM change at {speed:.0f} mph"
        else:
            direction = "increase" if rpm_change > 0 else "decrease"
            rpm_summary = f"{abs(rpm_change):.0f} RPM {direction} at {speed:.0f} mph"

        crawl = crawl_ratio(axle, config.transfer_case_low_ratio, config.first_gear_ratio)
        crawl_before = crawl_speed_mph(current.diameter_in, crawl)
        crawl_after = crawl_speed_mph(new.diameter_in, crawl)

        return DrivetrainImpact(
            effective_gear_ratio=RatioChange(
                original=axle,
                new=new_effective,
                change=effective_change,
                change_percentage=effective_pct,
                summary=effective_summary,
            ),
            rpm=RpmChange(
                original=rpm_before,
                new=rpm_after,
                change=rpm_change,
                change_percentage=rpm_change / rpm_before * 100,
                summary=rpm_summary,
                test_speed_mph=speed,
            ),
            crawl_ratio=RatioChange(
                original=crawl,
                new=crawl,
                change=0.0,
                change_percentage=0.0,
                summary="Crawl ratio unchanged (gear ratios determine crawl capability, not tire size)",
            ),
            crawl_speed=CrawlSpeed(
                engine_rpm=CRAWL_REFERENCE_RPM,
                original_mph=crawl_before,
                new_mph=crawl_after,
                change_percentage=(crawl_after - crawl_before) / crawl_before * 100,
            ),
        )

    def calculate_clearance_impact(self, differences: Differences) -> ClearanceImpact:
        """
        Coarse lift and fitment guidance from the diameter and width increase.

        Lift estimates are conservative; many builds fit larger tires with
        trimming and wheel offset changes instead.
        """
        diameter_increase = differences.diameter.absolute
        width_increase = differences.width.absolute

        lift, recommendation, note = CLEARANCE_EXTREME
        for limit, bucket_lift, bucket_rec, bucket_note in CLEARANCE_BUCKETS:
            if diameter_increase <= limit:
                lift, recommendation, note = bucket_lift, bucket_rec, bucket_note
                break

        fender_concern = width_increase > 1 or diameter_increase > 2
        offset_needed = width_increase > 1.5

        return ClearanceImpact(
            ground_clearance_gain_in=differences.ground_clearance.gain_in,
            estimated_lift_required_in=lift,
            lift_recommendation=recommendation,
            modifications_note=note,
            fender_clearance_concern=fender_concern,
            fender_clearance_message=(
                "Fender trimming or body mount chop likely required"
                if fender_concern
                else "Should clear fenders with minor or no trimming"
            ),
            wheel_offset_change_needed=offset_needed,
            wheel_offset_message=(
                "Consider wheels with less backspacing or wheel spacers to prevent rubbing"
                if offset_needed
                else "Stock wheel offset should work"
            ),
            bumpstop_modification=(
                "Bump stop modification likely required to prevent tire contact at full compression"
                if diameter_increase > 1.5
                else None
            ),
        )

    def _weight_analysis(
        self,
        current: TireDescriptor,
        new: TireDescriptor,
        specs: TireSpecOverrides,
        use: IntendedUse,
    ) -> tuple[WeightAnalysis, float, float]:
        """Weight analysis using supplied weights where given, estimates otherwise."""
        supplied = (specs.current_tire_weight_lbs, specs.new_tire_weight_lbs)
        if any(w is not None for w in supplied) and not all(w is not None for w in supplied):
            warnings.warn(
                "Only one tire weight supplied; the other is estimated from its size",
                MissingDataWarning,
                stacklevel=3,
            )

        current_weight = specs.current_tire_weight_lbs or estimate_tire_weight(current)
        new_weight = specs.new_tire_weight_lbs or estimate_tire_weight(new)
        analysis = analyze_weight(current_weight, new_weight, not specs.has_weights, use)
        return analysis, current_weight, new_weight

    def _load_capacity_analysis(
        self,
        specs: TireSpecOverrides,
        use: IntendedUse,
    ) -> Optional[LoadCapacityAnalysis]:
        """Load capacity analysis, or None when either load index is missing or unknown."""
        current_index, new_index = specs.current_load_index, specs.new_load_index
        if current_index is None and new_index is None:
            return None
        if current_index is None or new_index is None:
            warnings.warn(
                "Load capacity analysis needs both load indexes; skipping",
                MissingDataWarning,
                stacklevel=3,
            )
            return None

        current_capacity = load_capacity_lbs(current_index, self.reference)
        new_capacity = load_capacity_lbs(new_index, self.reference)
        if current_capacity is None or new_capacity is None:
            table = self.reference.load_index_table
            known = f"{min(table)}-{max(table)}" if table else "empty"
            warnings.warn(
                f"Load index outside the table ({known}): "
                f"{current_index} -> {new_index}; skipping load capacity analysis",
                MissingDataWarning,
                stacklevel=3,
            )
            return None

        return analyze_load_capacity(current_index, new_index, current_capacity, new_capacity, use)


def compare_tires(
    current: Union[TireDescriptor, str],
    new: Union[TireDescriptor, str],
    drivetrain: Union[DrivetrainConfig, Mapping[str, Any], None] = None,
    overrides: Union[TireSpecOverrides, Mapping[str, Any], None] = None,
    intended_use: Union[IntendedUse, str, None] = IntendedUse.WEEKEND_TRAIL,
    reference: Optional[ReferenceData] = None,
) -> ComparisonResult:
    """Compare two tires with a one-off ComparisonEngine."""
    return ComparisonEngine(reference).compare(current, new, drivetrain, overrides, intended_use)
