"""
Built-in reference tables.

Measured diameters come from tape measurements and published retailer
data (+/-0.2in). Sizes not listed fall back to the closed-form diameter
formula (+/-0.5in).
"""

from functools import lru_cache

from tirecalc.catalog.models import DEFAULT_PROFILE, GearPriority, ReferenceData, UseCaseProfile
from tirecalc.models.inputs import IntendedUse


MEASURED_TIRE_DIAMETERS: dict[str, float] = {
    # Common off-road sizes
    "285/75R17": 32.8,  # formula gives 33.83
    "285/75R16": 32.8,
    "265/70R17": 31.6,
    "255/75R17": 32.1,
    "285/70R17": 32.7,
    "315/70R17": 34.4,
    # Tacoma / 4Runner
    "265/70R16": 30.6,
    "265/65R17": 30.6,
    "275/70R17": 32.2,
    "275/65R18": 32.1,
    # Wrangler
    "245/75R17": 31.5,
    # Bronco
    "275/70R18": 33.2,
    # Popular upgrades
    "305/70R17": 33.8,
    "295/70R17": 33.3,
    "295/70R18": 34.3,
    "305/65R18": 33.5,
    # Load range E
    "285/75R18": 34.8,
    "295/75R16": 33.4,
}

AVAILABLE_GEAR_RATIOS: tuple[float, ...] = (
    3.07, 3.21, 3.31, 3.42, 3.45, 3.55, 3.73, 3.909, 3.92, 4.10, 4.27, 4.30,
    4.56, 4.88, 5.13, 5.29, 5.38, 5.71, 5.86,
)

USE_CASE_PROFILES: dict[IntendedUse, UseCaseProfile] = {
    IntendedUse.DAILY_DRIVER: UseCaseProfile(
        name="Daily Driver",
        priority=GearPriority.FUEL_ECONOMY,
        target_rpm_at_65=2200,
        description="Prioritizes fuel economy and highway driving comfort",
    ),
    IntendedUse.WEEKEND_TRAIL: DEFAULT_PROFILE,
    IntendedUse.ROCK_CRAWLING: UseCaseProfile(
        name="Rock Crawling",
        priority=GearPriority.TORQUE,
        target_rpm_at_65=2600,
        crawl_ratio_min=50,
        description="Maximum low-end torque and crawl control",
    ),
    IntendedUse.OVERLANDING: UseCaseProfile(
        name="Overlanding / Expedition",
        priority=GearPriority.POWER_BAND,
        target_rpm_at_65=2300,
        description="Maintains power band for loaded vehicle, long highway miles",
    ),
    IntendedUse.SAND_DESERT: UseCaseProfile(
        name="Sand / Desert",
        priority=GearPriority.POWER,
        target_rpm_at_65=2500,
        description="Maintains power delivery for momentum-based terrain",
    ),
    IntendedUse.SNOW: UseCaseProfile(
        name="Snow",
        priority=GearPriority.BALANCED,
        target_rpm_at_65=2400,
        description="Balanced gearing for variable traction conditions",
    ),
}

# Load index -> capacity per tire (lbs)
LOAD_INDEX_TABLE: dict[int, float] = {
    70: 739, 71: 761, 72: 783, 73: 805, 74: 827, 75: 853, 76: 882, 77: 908, 78: 937, 79: 963,
    80: 992, 81: 1019, 82: 1047, 83: 1074, 84: 1102, 85: 1135, 86: 1168, 87: 1201, 88: 1235, 89: 1279,
    90: 1323, 91: 1356, 92: 1389, 93: 1433, 94: 1477, 95: 1521, 96: 1565, 97: 1609, 98: 1653, 99: 1709,
    100: 1764, 101: 1819, 102: 1874, 103: 1929, 104: 1984, 105: 2039, 106: 2094, 107: 2149, 108: 2205, 109: 2271,
    110: 2337, 111: 2403, 112: 2469, 113: 2535, 114: 2601, 115: 2679, 116: 2756, 117: 2833, 118: 2910, 119: 2998,
    120: 3086, 121: 3197, 122: 3307, 123: 3417, 124: 3527, 125: 3638, 126: 3748, 127: 3858, 128: 3968, 129: 4079,
    130: 4189,
}

IFS_VEHICLES: tuple[str, ...] = (
    "tacoma", "4runner", "fj_cruiser", "tundra", "sequoia",
    "frontier", "xterra", "colorado", "canyon",
)

SOLID_AXLE_VEHICLES: tuple[str, ...] = (
    "wrangler", "gladiator", "bronco", "defender",
    "4runner_pre_2003", "landcruiser_70", "g_wagon",
)


def builtin_reference_tables() -> dict:
    """Built-in tables as plain data, keyed like ReferenceData fields."""
    return {
        "measured_diameters": dict(MEASURED_TIRE_DIAMETERS),
        "gear_ratios": AVAILABLE_GEAR_RATIOS,
        "use_case_profiles": dict(USE_CASE_PROFILES),
        "load_index_table": dict(LOAD_INDEX_TABLE),
        "ifs_vehicles": IFS_VEHICLES,
        "solid_axle_vehicles": SOLID_AXLE_VEHICLES,
    }


@lru_cache(maxsize=1)
def default_reference() -> ReferenceData:
    """The built-in reference dataset, built once."""
    return ReferenceData(**builtin_reference_tables())
