"""
Tests for expedition load adjustments.
"""

import pytest

from tirecalc.models.inputs import StressParams
from tirecalc.models.outputs import ImpactLevel
from tirecalc.scoring.overland import (
    adjust_stress,
    calculate_overland_impact,
    categorize_load,
    load_multipliers,
)
from tirecalc.scoring.stress import DrivetrainStressScorer


@pytest.fixture
def moderate_stress():
    """Provide a stress result scoring 58."""
    return DrivetrainStressScorer().score(
        StressParams(diameter_change_pct=10.0, effective_ratio_change_pct=-12.0)
    )


class TestLoadCategories:
    """Tests for load categorization and multipliers."""

    @pytest.mark.parametrize(
        "load,category",
        [(100, "LIGHT"), (299, "LIGHT"), (300, "MEDIUM"), (699, "MEDIUM"),
         (700, "HEAVY"), (1199, "HEAVY"), (1200, "EXTREME"), (2500, "EXTREME")],
    )
    def test_categories(self, load, category):
        """Test category boundaries."""
        assert categorize_load(load).category == category

    def test_multipliers(self):
        """Test multipliers for a 1000 lb load."""
        multipliers = load_multipliers(1000)

        assert multipliers.stress == pytest.approx(1.25)
        assert multipliers.fuel == pytest.approx(1 + 1000 / 3000)
        assert multipliers.braking == pytest.approx(1.2)
        assert multipliers.suspension == 1.2

    def test_suspension_multiplier_steps(self):
        """Test the suspension multiplier steps at 400 and 800 lbs."""
        assert load_multipliers(400).suspension == 1.0
        assert load_multipliers(401).suspension == 1.1
        assert load_multipliers(801).suspension == 1.2


class TestAdjustedStress:
    """Tests for stress adjusted by load."""

    def test_adjusted_score(self, moderate_stress):
        """Test 58 * 1.25 = 72.5 rounds up to 73."""
        adjusted = adjust_stress(moderate_stress, load_multipliers(1000))

        assert moderate_stress.score == 58
        assert adjusted.base == 58
        assert adjusted.adjusted == 73
        assert adjusted.increase == 15
        assert adjusted.classification == ImpactLevel.HIGH

    def test_adjusted_score_is_capped(self, moderate_stress):
        """Test the adjusted score never exceeds 100."""
        high = moderate_stress.model_copy(update={"score": 90})

        adjusted = adjust_stress(high, load_multipliers(1000))

        assert adjusted.adjusted == 100
        assert adjusted.increase == 23
        assert adjusted.classification == ImpactLevel.HIGH


class TestOverlandImpact:
    """Tests for the full expedition load analysis."""

    def test_no_load(self, mild_upgrade):
        """Test zero load reports no impact."""
        impact = calculate_overland_impact(mild_upgrade, 0)

        assert not impact.has_load
        assert impact.load_category is None
        assert impact.summary is None

    def test_heavy_load(self, mild_upgrade, moderate_stress):
        """Test a 1000 lb load on the 31.6in -> 32.8in upgrade."""
        impact = calculate_overland_impact(mild_upgrade, 1000, moderate_stress)

        assert impact.has_load
        assert impact.load_category.category == "HEAVY"
        assert impact.adjusted_stress.adjusted == 73
        assert impact.summary.startswith("HEAVY expedition load (1000 lbs): Extended expedition build.")
        assert "from 58 to 73" in impact.summary

    def test_fuel_economy(self, mild_upgrade):
        """Test fuel loss = 0.5 * diameter% * fuel multiplier + 0.5% per 100 lbs."""
        fuel = calculate_overland_impact(mild_upgrade, 1000).fuel_economy

        # 3.797 * 0.5 = 1.90; 1.90 * 1.333 + 5.0 = 7.53
        assert fuel.base_loss_pct == pytest.approx(1.9)
        assert fuel.load_loss_pct == pytest.approx(5.0)
        assert fuel.total_loss_pct == pytest.approx(7.5)
        assert fuel.description == "Moderate fuel economy impact: expect 8% reduction"

    def test_braking(self, mild_upgrade):
        """Test braking increase from load share and rotational factor."""
        braking = calculate_overland_impact(mild_upgrade, 1000).braking

        # 1000 / 4500 = 22.2%, plus 0.3 * 4.93 = 1.5%
        assert braking.load_increase_pct == pytest.approx(22.2)
        assert braking.tire_increase_pct == pytest.approx(1.5)
        assert braking.total_increase_pct == pytest.approx(23.7)
        assert braking.recommendation == "Brake upgrade essential for safe loaded operation"

    def test_warnings(self, mild_upgrade):
        """Test load warnings for a 1000 lb load."""
        warnings = calculate_overland_impact(mild_upgrade, 1000).warnings

        assert [w.component for w in warnings] == ["Suspension", "Payload Capacity"]
        assert warnings[0].message.startswith("1000 lbs exceeds")

    def test_heavy_load_large_tires(self, big_upgrade):
        """Test the drivetrain warning for big tires under heavy load."""
        warnings = calculate_overland_impact(big_upgrade, 1500).warnings

        components = [w.component for w in warnings]
        assert "Drivetrain" in components
        assert "Brakes" in components
        assert "Tires" in components

    def test_without_stress(self, mild_upgrade):
        """Test the analysis works without a stress score."""
        impact = calculate_overland_impact(mild_upgrade, 500)

        assert impact.adjusted_stress is None
        assert "Drivetrain stress" not in impact.summary
