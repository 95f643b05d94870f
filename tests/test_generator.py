"""
Tests for the re-gear recommendation engine.

Uses 265/70R16 (30.6in) -> 35x12.50R17 (35in) on a 3.909 axle with a
direct-drive top gear.
"""

import pytest

from tirecalc.catalog.models import DEFAULT_PROFILE, ReferenceData
from tirecalc.comparison.engine import ComparisonEngine
from tirecalc.errors import InvalidConfigError
from tirecalc.generator.regear import RegearEngine, closest_ratios, regear_necessity
from tirecalc.models.inputs import DrivetrainConfig, IntendedUse


class TestRegearNecessity:
    """Tests for regear_necessity."""

    def test_large_change(self, big_upgrade):
        """Test a 14% increase is strongly recommended."""
        necessity = regear_necessity(big_upgrade)

        assert necessity.level == "strongly_recommended"
        assert necessity.diameter_change_pct == pytest.approx(14.38, abs=0.01)
        assert necessity.effective_ratio_change_pct < 0

    def test_small_change(self, mild_upgrade):
        """Test a 3.8% increase is worth considering."""
        assert regear_necessity(mild_upgrade).level == "consider"

    def test_without_gearing(self, mild_upgrade_no_gearing):
        """Test necessity works without drivetrain data."""
        necessity = regear_necessity(mild_upgrade_no_gearing)

        assert necessity.level == "consider"
        assert necessity.effective_ratio_change_pct == 0.0


class TestClosestRatios:
    """Tests for catalog lookup."""

    def test_closest(self, reference):
        """Test the two nearest ratios are returned nearest first."""
        assert closest_ratios(reference.gear_ratios, 4.471) == [4.56, 4.30]

    def test_exact_match_first(self, reference):
        """Test an exact catalog ratio comes first."""
        assert closest_ratios(reference.gear_ratios, 4.10, count=1) == [4.10]

    def test_empty_catalog(self):
        """Test an empty catalog yields nothing."""
        assert closest_ratios((), 4.10) == []


class TestRegearEngine:
    """Tests for RegearEngine.recommend."""

    def test_ideal_ratios(self, big_upgrade, reference):
        """Test restoration and optimal ratios."""
        result = RegearEngine(reference).recommend(big_upgrade, 3.909)

        # 3.909 * 35 / 30.6 and 2400 * 35 / (65 * 1.0 * 336)
        assert result.ideal_ratios.restoration == pytest.approx(4.471, abs=0.001)
        assert result.ideal_ratios.optimal == pytest.approx(3.846, abs=0.001)
        assert result.use_case == "Weekend Trail"
        assert result.current_ratio == 3.909

    def test_candidates(self, big_upgrade, reference):
        """Test candidates are the nearest catalog ratios to both targets."""
        result = RegearEngine(reference).recommend(big_upgrade, 3.909)

        assert sorted(c.ratio for c in result.candidates) == [3.909, 3.92, 4.30, 4.56]
        types = {c.ratio: c.type for c in result.candidates}
        assert types[4.56] == "restoration"
        assert types[4.30] == "restoration"
        assert types[3.92] == "optimal"

    def test_candidates_sorted_by_score(self, big_upgrade, reference):
        """Test best candidates come first, ties broken by higher ratio."""
        result = RegearEngine(reference).recommend(big_upgrade, 3.909)

        assert [c.ratio for c in result.candidates] == [3.92, 3.909, 4.30, 4.56]
        assert [c.verdict.score for c in result.candidates] == [80, 80, 70, 50]
        assert result.best.ratio == 3.92

    def test_candidate_impact(self, big_upgrade, reference):
        """Test the RPM and crawl ratio of a candidate."""
        result = RegearEngine(reference).recommend(big_upgrade, 3.909)
        by_ratio = {c.ratio: c for c in result.candidates}

        # 65 * 4.56 * 336 / 35 = 2845.4
        assert by_ratio[4.56].impact.rpm == 2845
        assert by_ratio[4.56].impact.crawl_ratio == pytest.approx(45.6)
        assert by_ratio[4.56].impact.highway_comfort == "high RPM"
        assert by_ratio[4.56].verdict.recommendation == "Acceptable but not ideal"
        assert by_ratio[3.92].verdict.recommendation == "Excellent choice for your use case"

    def test_rock_crawling_uses_crawl_minimum(self, big_upgrade, reference):
        """Test the crawl ratio minimum raises the optimal ratio."""
        result = RegearEngine(reference).recommend(big_upgrade, 3.909, IntendedUse.ROCK_CRAWLING)

        # 50 / (2.5 * 4.0) = 5.0 beats 2600 * 35 / 21840 = 4.17
        assert result.ideal_ratios.optimal == pytest.approx(5.0)
        assert {4.88, 5.13} <= {c.ratio for c in result.candidates}

    def test_drivetrain_override(self, big_upgrade, reference):
        """Test transmission ratios come from the supplied drivetrain."""
        drivetrain = DrivetrainConfig(transmission_top_gear_ratio=0.8)
        result = RegearEngine(reference).recommend(big_upgrade, 3.909, drivetrain=drivetrain)

        assert result.ideal_ratios.optimal == pytest.approx(2400 * 35 / (65 * 0.8 * 336))

    def test_unknown_use_falls_back(self, big_upgrade, reference):
        """Test unknown use cases use the weekend trail profile."""
        result = RegearEngine(reference).recommend(big_upgrade, 3.909, "mall_crawler")

        assert result.use_case == "Weekend Trail"

    def test_analysis(self, big_upgrade, reference):
        """Test the cost analysis is attached."""
        analysis = RegearEngine(reference).recommend(big_upgrade, 3.909).analysis

        assert analysis.total_cost.min == 1400
        assert analysis.total_cost.max == 2700
        assert analysis.considerations

    def test_empty_catalog(self, big_upgrade, reference):
        """Test an empty ratio catalog yields no candidates."""
        empty = reference.model_copy(update={"gear_ratios": ()})

        result = RegearEngine(empty).recommend(big_upgrade, 3.909)

        assert result.candidates == []
        assert result.analysis is None
        assert result.best is None
        assert result.ideal_ratios.restoration == pytest.approx(4.471, abs=0.001)

    def test_empty_reference(self):
        """Test a dataset with no tables yields no candidates and the default profile."""
        empty = ReferenceData()
        comparison = ComparisonEngine(empty).compare("265/70R17", "285/75R17", {"axle_gear_ratio": 3.909})

        result = RegearEngine(empty).recommend(comparison, 3.909, IntendedUse.ROCK_CRAWLING)

        assert result.use_case == DEFAULT_PROFILE.name
        assert result.candidates == []
        assert result.analysis is None
        # 3.909 * 33.83 / 31.61 by formula
        assert result.ideal_ratios.restoration == pytest.approx(4.184, abs=0.005)

    @pytest.mark.parametrize("ratio", [0, -4.10])
    def test_invalid_ratio(self, big_upgrade, reference, ratio):
        """Test invalid current ratios are rejected."""
        with pytest.raises(InvalidConfigError):
            RegearEngine(reference).recommend(big_upgrade, ratio)
