"""
Tests for the upgrade path planner.

The large build is 265/70R16 -> 35x12.50R17 (+4.4in, +2.07in wide) on a
stock IFS truck: stress 91, rotational factor ~34, clearance 95% HIGH
with a 4in lift recommendation.
"""

import pytest

from tirecalc.clearance.probability import estimate_from_comparison
from tirecalc.errors import InvalidConfigError
from tirecalc.generator.upgrade_path import UpgradePathPlanner, estimate_cost, plan_upgrade_path
from tirecalc.models.inputs import BudgetLevel, PlanTimeline, StressParams
from tirecalc.models.outputs import StressScoreResult, UpgradePath
from tirecalc.scoring.stress import DrivetrainStressScorer, score_comparison


def stress_for(diameter_pct: float, effective_pct: float) -> StressScoreResult:
    """Score a change with no weight delta on a reference-weight vehicle."""
    return DrivetrainStressScorer().score(
        StressParams(diameter_change_pct=diameter_pct, effective_ratio_change_pct=effective_pct)
    )


@pytest.fixture
def big_plan(big_upgrade) -> UpgradePath:
    """Provide the mid-range phased plan for the 35in build."""
    return plan_upgrade_path(
        big_upgrade,
        score_comparison(big_upgrade),
        estimate_from_comparison(big_upgrade),
    )


class TestEstimateCost:
    """Tests for estimate_cost."""

    @pytest.mark.parametrize(
        "budget,expected",
        [
            (BudgetLevel.BUDGET, (300, 600)),
            (BudgetLevel.MID_RANGE, (600, 1200)),
            (BudgetLevel.PREMIUM, (1200, 2500)),
        ],
    )
    def test_brakes_by_budget(self, budget, expected):
        """Test the cost table follows the budget level."""
        cost = estimate_cost("brakes", budget)

        assert (cost.min, cost.max) == expected

    @pytest.mark.parametrize("lift,expected", [(2.0, (1200, 2500)), (2.5, (1440, 3000)), (4.0, (1800, 3750))])
    def test_lift_height_multiplier(self, lift, expected):
        """Test taller lifts cost 1.2x above 2in and 1.5x above 3in."""
        cost = estimate_cost("lift", BudgetLevel.MID_RANGE, lift)

        assert (cost.min, cost.max) == expected

    def test_unknown_upgrade(self):
        """Test unknown upgrades get the generic range."""
        cost = estimate_cost("snorkel", BudgetLevel.PREMIUM)

        assert (cost.min, cost.max) == (500, 1500)


class TestLargeBuild:
    """Tests for the 35in build plan."""

    def test_upgrades_in_priority_order(self, big_plan):
        """Test every rule fires and upgrades are sorted by priority."""
        assert [(u.priority, u.upgrade) for u in big_plan.upgrades] == [
            (1, "Brake Upgrade"),
            (2, '4" Suspension Lift'),
            (2, "Wheels with Proper Offset"),
            (3, "Axle Regearing"),
            (6, "Fender/Body Trimming"),
            (7, "Rock Sliders"),
            (8, "Aftermarket Bumpers"),
        ]

    def test_necessity(self, big_plan):
        """Test HIGH clearance risk and stress make upgrades essential."""
        necessity = {u.upgrade: u.necessity for u in big_plan.upgrades}

        assert necessity["Brake Upgrade"] == "essential"
        assert necessity['4" Suspension Lift'] == "essential"
        assert necessity["Wheels with Proper Offset"] == "required"
        assert necessity["Axle Regearing"] == "essential"
        assert necessity["Fender/Body Trimming"] == "required"
        assert necessity["Aftermarket Bumpers"] == "optional"
        assert big_plan.essential_upgrades == 5
        assert big_plan.total_upgrades == 7

    def test_lift_cost_scaled(self, big_plan):
        """Test the 4in lift is priced at 1.5x."""
        lift = big_plan.upgrades[1]

        assert (lift.cost.min, lift.cost.max) == (1800, 3750)
        assert lift.reason == "HIGH clearance risk - lift needed to prevent rubbing"

    def test_cost_summary(self, big_plan):
        """Test totals sum range midpoints and bounds."""
        cost = big_plan.estimated_cost

        # 900 + 2775 + 1600 + 2800 + 350
        assert cost.essential == 8425
        assert cost.total == 8425 + 1150 + 2250
        assert (cost.cost_range.min, cost.cost_range.max) == (8500, 15150)

    def test_extensive_trimming_options(self, big_plan):
        """Test extensive trimming suggests flat fenders."""
        trimming = big_plan.upgrades[4]

        assert trimming.reason == "extensive trimming for full articulation clearance"
        assert "Flat fenders" in trimming.options

    def test_phased_schedule(self, big_plan):
        """Test the default plan spreads upgrades over three phases."""
        schedule = big_plan.schedule

        assert schedule.type == PlanTimeline.PHASED
        assert [p.upgrades for p in schedule.phases] == [
            ["Brake Upgrade", '4" Suspension Lift', "Wheels with Proper Offset", "Fender/Body Trimming"],
            ["Axle Regearing"],
            ["Rock Sliders", "Aftermarket Bumpers"],
        ]

    def test_immediate_schedule(self, big_upgrade):
        """Test an immediate plan lists essential and required upgrades."""
        plan = plan_upgrade_path(
            big_upgrade,
            score_comparison(big_upgrade),
            estimate_from_comparison(big_upgrade),
            timeline="immediate",
        )

        assert len(plan.schedule.phases) == 1
        assert plan.schedule.phases[0].phase == "Before First Drive"
        assert len(plan.schedule.phases[0].upgrades) == 5

    def test_eventual_schedule(self, big_upgrade):
        """Test an eventual plan groups by necessity and category."""
        plan = plan_upgrade_path(
            big_upgrade,
            score_comparison(big_upgrade),
            estimate_from_comparison(big_upgrade),
            timeline=PlanTimeline.EVENTUAL,
        )

        assert [p.upgrades for p in plan.schedule.phases] == [
            ["Brake Upgrade", '4" Suspension Lift', "Axle Regearing"],
            ["Axle Regearing"],
            ["Rock Sliders", "Aftermarket Bumpers"],
        ]

    def test_budget_build(self, big_upgrade):
        """Test a budget plan skips bumpers and uses cheaper parts."""
        plan = plan_upgrade_path(
            big_upgrade,
            score_comparison(big_upgrade),
            estimate_from_comparison(big_upgrade),
            budget_level="budget",
        )

        assert "Aftermarket Bumpers" not in [u.upgrade for u in plan.upgrades]
        assert plan.budget_level == BudgetLevel.BUDGET
        regear = next(u for u in plan.upgrades if u.upgrade == "Axle Regearing")
        assert regear.options[0].startswith("Stock ratio + ")
        assert regear.options[0].endswith("% (both axles)")


class TestMildBuild:
    """Tests for the 265/70R17 -> 285/75R17 plan."""

    def test_moderate_clearance(self, mild_upgrade):
        """Test a stock IFS truck needs a recommended lift and minor trimming."""
        plan = plan_upgrade_path(
            mild_upgrade,
            score_comparison(mild_upgrade),
            estimate_from_comparison(mild_upgrade),
        )

        assert [(u.upgrade, u.necessity) for u in plan.upgrades] == [
            ('1.5" Suspension Lift', "recommended"),
            ("Fender/Body Trimming", "likely needed"),
        ]
        assert plan.upgrades[1].options == ["Fender liner trimming", "Minor plastic removal"]
        assert plan.essential_upgrades == 0
        assert plan.estimated_cost.essential == 0
        assert plan.estimated_cost.total == 1850 + 350

    def test_low_clearance_risk(self, mild_upgrade):
        """Test a solid axle truck needs nothing for the same tires."""
        plan = plan_upgrade_path(
            mild_upgrade,
            score_comparison(mild_upgrade),
            estimate_from_comparison(mild_upgrade, "solid_axle"),
        )

        assert plan.upgrades == []
        assert plan.estimated_cost.total == 0
        assert all(phase.upgrades == [] for phase in plan.schedule.phases)

    def test_without_analyses(self, mild_upgrade_no_gearing):
        """Test missing stress and clearance count as no risk."""
        plan = UpgradePathPlanner().plan(mild_upgrade_no_gearing)

        assert plan.upgrades == []
        assert plan.budget_level == BudgetLevel.MID_RANGE


class TestRegearBands:
    """Tests for the re-gear upgrade by stress score."""

    def test_moderate_stress(self, mild_upgrade):
        """Test a 35-49 score recommends an eventual re-gear."""
        stress = stress_for(7.0, -7.0)
        assert stress.score == 39

        plan = UpgradePathPlanner().plan(mild_upgrade, stress)

        regear = plan.upgrades[0]
        assert regear.priority == 4
        assert regear.necessity == "recommended"
        assert regear.timeline == "eventual upgrade"

    def test_significant_stress(self, mild_upgrade):
        """Test a 50-69 score strongly recommends a re-gear with the suggested increase."""
        stress = stress_for(10.0, -12.0)
        assert stress.score == 58

        plan = UpgradePathPlanner(budget_level=BudgetLevel.BUDGET).plan(mild_upgrade, stress)

        regear = plan.upgrades[0]
        assert regear.priority == 3
        assert regear.necessity == "strongly recommended"
        assert regear.reason == "58/100 drivetrain stress - restore factory performance"
        assert regear.options[0] == "Stock ratio + 10% (both axles)"
        assert plan.upgrades[0].upgrade == "Axle Regearing"
        assert "Brake Upgrade" not in [u.upgrade for u in plan.upgrades]


class TestValidation:
    """Tests for planner options."""

    def test_aliases(self):
        """Test budget level aliases."""
        assert UpgradePathPlanner(budget_level="mid-range").budget_level == BudgetLevel.MID_RANGE

    @pytest.mark.parametrize("option", [{"budget_level": "luxury"}, {"timeline": "someday"}])
    def test_invalid_options(self, option):
        """Test unknown budget levels and timelines are rejected."""
        with pytest.raises(InvalidConfigError):
            UpgradePathPlanner(**option)
