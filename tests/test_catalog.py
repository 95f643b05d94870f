"""
Tests for reference data and community gear ratio builds.

Tests cover:
- Built-in reference tables
- JSON reference overrides
- CSV loading of community builds
- Real-world build matching and ratio popularity
"""

import json

import pytest

from tirecalc.catalog.loader import load_gear_recommendations, load_reference
from tirecalc.catalog.matcher import find_real_world_recommendations, popular_gear_ratios_for_tire_size
from tirecalc.catalog.models import DEFAULT_PROFILE, GearRecommendationRow, ReferenceData
from tirecalc.models.inputs import IntendedUse
from tirecalc.models.outputs import DiameterSource
from tirecalc.physics.tire_size import parse_tire_size


@pytest.fixture
def builds() -> list[GearRecommendationRow]:
    """Provide the packaged community builds."""
    return load_gear_recommendations()


class TestReferenceData:
    """Tests for the built-in tables."""

    def test_gear_ratios_sorted(self, reference):
        """Test the ratio catalog is ascending and unique."""
        ratios = reference.gear_ratios

        assert list(ratios) == sorted(set(ratios))
        assert 3.73 in ratios
        assert 4.56 in ratios

    def test_gear_ratios_validated(self):
        """Test non-positive ratios are rejected and duplicates dropped."""
        assert ReferenceData(gear_ratios=(4.10, 3.73, 4.10)).gear_ratios == (3.73, 4.10)
        with pytest.raises(ValueError):
            ReferenceData(gear_ratios=(0.0, 3.73))

    def test_profiles(self, reference):
        """Test every use case has a profile."""
        for use in IntendedUse:
            assert reference.profile(use).target_rpm_at_65 > 0

        assert reference.profile(IntendedUse.ROCK_CRAWLING).crawl_ratio_min == 50

    def test_profile_fallback_on_empty_dataset(self):
        """Test an empty dataset still yields the weekend trail profile."""
        assert ReferenceData().profile(IntendedUse.SNOW) == DEFAULT_PROFILE
        assert ReferenceData().profile(IntendedUse.SNOW).target_rpm_at_65 == 2400

    def test_load_capacity(self, reference):
        """Test load index lookup."""
        assert reference.load_capacity(121) == 3197
        assert reference.load_capacity(69) is None


class TestLoadReference:
    """Tests for JSON reference overrides."""

    def test_overrides_merge(self, tmp_path):
        """Test measured diameters merge and other tables replace."""
        path = tmp_path / "reference.json"
        path.write_text(json.dumps({
            "measured_diameters": {"275/55R20": 31.5},
            "gear_ratios": [4.10, 3.73],
        }))

        reference = load_reference(path)

        assert reference.measured_diameter("275/55R20") == 31.5
        assert reference.measured_diameter("265/70R17") == 31.6
        assert reference.gear_ratios == (3.73, 4.10)
        assert reference.load_capacity(112) == 2469

    def test_override_used_by_parser(self, tmp_path):
        """Test the parser uses the overridden measured diameter."""
        path = tmp_path / "reference.json"
        path.write_text(json.dumps({"measured_diameters": {"275/55R20": 31.5}}))

        tire = parse_tire_size("275/55R20", load_reference(path))

        assert tire.diameter_in == 31.5
        assert tire.diameter_source == DiameterSource.MEASURED

    def test_unknown_keys_ignored(self, tmp_path):
        """Test unknown tables are skipped."""
        path = tmp_path / "reference.json"
        path.write_text(json.dumps({"tire_pressures": {"x": 1}}))

        reference = load_reference(path)

        assert reference.measured_diameter("285/75R17") == 32.8

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_reference(tmp_path / "missing.json")

    def test_not_an_object(self, tmp_path):
        """Test a JSON list is rejected."""
        path = tmp_path / "reference.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(ValueError):
            load_reference(path)


class TestLoadGearRecommendations:
    """Tests for the community builds CSV."""

    def test_packaged_csv(self, builds):
        """Test the packaged sample loads."""
        assert len(builds) == 12
        assert builds[0].vehicle_type == "Jeep Wrangler JL"
        assert builds[0].recommended_gear_ratio == 4.56

    def test_missing_file_is_empty(self, tmp_path):
        """Test a missing CSV yields no rows."""
        assert load_gear_recommendations(tmp_path / "missing.csv") == []

    def test_invalid_rows_skipped(self, tmp_path):
        """Test rows failing validation are skipped."""
        path = tmp_path / "builds.csv"
        path.write_text(
            "vehicle_type,stock_tire_diameter,new_tire_diameter,stock_gear_ratio,"
            "recommended_gear_ratio,use_case,notes\n"
            "Toyota Tacoma,30.6,33,3.909,4.30,daily,ok\n"
            "Toyota Tacoma,abc,33,3.909,4.30,daily,bad diameter\n"
            "Toyota Tacoma,30.6,35,3.909,-1,daily,bad ratio\n"
        )

        rows = load_gear_recommendations(path)

        assert len(rows) == 1
        assert rows[0].notes == "ok"

    def test_missing_columns(self, tmp_path):
        """Test a CSV without the required columns yields no rows."""
        path = tmp_path / "builds.csv"
        path.write_text("vehicle,ratio\nTacoma,4.30\n")

        assert load_gear_recommendations(path) == []

    def test_optional_columns(self, tmp_path):
        """Test use_case and notes may be omitted."""
        path = tmp_path / "builds.csv"
        path.write_text(
            "vehicle_type,stock_tire_diameter,new_tire_diameter,stock_gear_ratio,recommended_gear_ratio\n"
            "Ford Bronco,33.2,35,4.46,4.70\n"
        )

        rows = load_gear_recommendations(path)

        assert rows[0].use_case == ""
        assert rows[0].notes == ""


class TestMatcher:
    """Tests for real-world build matching."""

    def test_find_matching_builds(self, builds):
        """Test Tacoma 30.6in -> 33in on 3.909 gears."""
        matches = find_real_world_recommendations(builds, "Tacoma", 30.6, 33.0, 3.909)

        assert [m.recommended_gear_ratio for m in matches] == [4.30, 4.56]

    def test_vehicle_match_is_loose(self, builds):
        """Test the vehicle filter is case-insensitive containment."""
        matches = find_real_world_recommendations(builds, "Tacoma TRD Pro", 30.6, 33.0, 3.909)

        assert matches == []
        matches = find_real_world_recommendations(builds, "TOYOTA", 30.6, 33.0, 3.909)
        assert len(matches) == 2

    def test_any_vehicle(self, builds):
        """Test None matches every vehicle."""
        matches = find_real_world_recommendations(builds, None, 30.6, 33.0, 3.8)

        # 3.909 and 3.73 are both within 0.15 of 3.8
        assert {m.vehicle_type for m in matches} == {"Toyota Tacoma", "Toyota 4Runner"}

    def test_gear_tolerance(self, builds):
        """Test stock gear ratios outside 0.15 don't match."""
        assert find_real_world_recommendations(builds, "Tacoma", 30.6, 33.0, 4.10) == []

    def test_empty_dataset(self):
        """Test an empty dataset yields no matches."""
        assert find_real_world_recommendations([], "Tacoma", 30.6, 33.0, 3.909) == []
        assert popular_gear_ratios_for_tire_size([], 35.0) == []

    def test_popular_ratios(self, builds):
        """Test ratio popularity for 35in tires."""
        popular = popular_gear_ratios_for_tire_size(builds, 35.0)

        assert [(p.ratio, p.popularity) for p in popular] == [(4.56, 3), (4.88, 2), (4.70, 1)]
        assert popular[0].vehicles == ["Jeep Wrangler JL"]

    def test_popular_ratios_by_use_case(self, builds):
        """Test the use case filter."""
        popular = popular_gear_ratios_for_tire_size(builds, 35.0, use_case="overlanding")

        assert [p.ratio for p in popular] == [4.88]
        assert popular[0].vehicles == ["Toyota Tacoma", "Toyota 4Runner"]
