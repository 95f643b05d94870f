"""
Tests for the full upgrade report.
"""

import pytest

from tirecalc.models.inputs import (
    BudgetLevel,
    DrivetrainConfig,
    IntendedUse,
    PlanTimeline,
    SuspensionType,
    UpgradeRequest,
)
from tirecalc.models.outputs import ImpactLevel
from tirecalc.report import build_report


@pytest.fixture
def tacoma_request() -> UpgradeRequest:
    """Provide a loaded Tacoma going from 265/70R16 to 285/75R17."""
    return UpgradeRequest(
        vehicle="Toyota Tacoma",
        current_tire="265/70R16",
        new_tire="285/75R17",
        drivetrain=DrivetrainConfig(
            axle_gear_ratio=3.909,
            transmission_top_gear_ratio=0.85,
            transfer_case_low_ratio=2.566,
            first_gear_ratio=3.52,
        ),
        intended_use=IntendedUse.OVERLANDING,
        lift_height_in=2.0,
        expedition_load_lbs=600.0,
        include_regear=True,
    )


class TestBuildReport:
    """Tests for build_report."""

    def test_full_report(self, tacoma_request, reference):
        """Test every analysis runs for a complete request."""
        report = build_report(tacoma_request, reference)

        assert report.vehicle == "Toyota Tacoma"
        assert report.comparison.differences.diameter.absolute == pytest.approx(2.2)
        assert report.drivetrain_stress is not None
        assert report.regearing_guidance.scenario == "moderate"
        assert report.regear is not None
        assert report.regear.candidates
        assert report.overland.has_load
        assert report.overland.load_category.category == "MEDIUM"
        assert report.overland.adjusted_stress.base == report.drivetrain_stress.score

    def test_suspension_from_vehicle(self, tacoma_request, reference):
        """Test the Tacoma is treated as IFS with a 2in lift."""
        clearance = build_report(tacoma_request, reference).clearance_estimate

        # IFS, 1-2.5in lift bracket, +2.2in
        assert clearance.suspension_type == SuspensionType.IFS
        assert clearance.probability == 50
        assert clearance.risk_class == ImpactLevel.MODERATE

    def test_explicit_suspension_wins(self, tacoma_request, reference):
        """Test an explicit suspension type overrides the vehicle lookup."""
        request = tacoma_request.model_copy(update={"suspension_type": SuspensionType.SOLID_AXLE})

        clearance = build_report(request, reference).clearance_estimate

        assert clearance.suspension_type == SuspensionType.SOLID_AXLE

    def test_community_builds(self, tacoma_request, reference):
        """Test matching community builds are attached."""
        report = build_report(tacoma_request, reference)

        assert [b.recommended_gear_ratio for b in report.community_builds] == [4.30, 4.56]

    def test_custom_community_builds(self, tacoma_request, reference):
        """Test an empty build list yields no matches."""
        report = build_report(tacoma_request, reference, gear_recommendations=[])

        assert report.community_builds == []

    def test_minimal_request(self, reference):
        """Test a request with only tire sizes."""
        report = build_report(UpgradeRequest(current_tire="265/70R17", new_tire="285/75R17"), reference)

        assert report.comparison.drivetrain_impact is None
        assert report.drivetrain_stress is None
        assert report.regearing_guidance is None
        assert report.regear is None
        assert report.overland is None
        assert report.community_builds == []
        assert report.clearance_estimate.suspension_type == SuspensionType.IFS

    def test_regear_needs_axle_ratio(self, reference):
        """Test re-gear candidates are skipped without an axle ratio."""
        request = UpgradeRequest(current_tire="265/70R17", new_tire="285/75R17", include_regear=True)

        assert build_report(request, reference).regear is None

    def test_report_serializes(self, tacoma_request, reference):
        """Test the report dumps to JSON."""
        report = build_report(tacoma_request, reference)

        assert '"community_builds"' in report.model_dump_json()

    def test_upgrade_path(self, tacoma_request, reference):
        """Test the upgrade path follows the clearance estimate and plan options."""
        request = tacoma_request.model_copy(
            update={"budget_level": BudgetLevel.PREMIUM, "plan_timeline": PlanTimeline.IMMEDIATE}
        )

        path = build_report(request, reference).upgrade_path

        assert path.budget_level == BudgetLevel.PREMIUM
        assert path.schedule.type == PlanTimeline.IMMEDIATE
        lift = next(u for u in path.upgrades if u.category == "Clearance")
        assert lift.necessity == "recommended"
        assert path.total_upgrades == len(path.upgrades)

    def test_upgrade_path_defaults(self, reference):
        """Test a minimal request gets a mid-range phased plan."""
        report = build_report(UpgradeRequest(current_tire="265/70R17", new_tire="285/75R17"), reference)

        assert report.upgrade_path.budget_level == BudgetLevel.MID_RANGE
        assert [p.phase for p in report.upgrade_path.schedule.phases] == [
            "Phase 1 (With Tire Install)",
            "Phase 2 (0-6 months)",
            "Phase 3 (6-12+ months)",
        ]
