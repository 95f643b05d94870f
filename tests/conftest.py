"""
Pytest configuration and shared fixtures.
"""

import pytest

from tirecalc.catalog.reference import default_reference
from tirecalc.catalog.models import ReferenceData
from tirecalc.comparison.engine import ComparisonEngine
from tirecalc.models.inputs import DrivetrainConfig
from tirecalc.models.outputs import ComparisonResult


@pytest.fixture
def reference() -> ReferenceData:
    """Provide the built-in reference dataset."""
    return default_reference()


@pytest.fixture
def engine(reference) -> ComparisonEngine:
    """Provide a comparison engine over the built-in tables."""
    return ComparisonEngine(reference)


@pytest.fixture
def tacoma_drivetrain() -> DrivetrainConfig:
    """Provide a Tacoma-like drivetrain (3.909 axle, 0.85 overdrive)."""
    return DrivetrainConfig(
        axle_gear_ratio=3.909,
        transmission_top_gear_ratio=0.85,
    )


@pytest.fixture
def mild_upgrade(engine, tacoma_drivetrain) -> ComparisonResult:
    """Provide 265/70R17 -> 285/75R17 (31.6in -> 32.8in measured) with gearing."""
    return engine.compare("265/70R17", "285/75R17", drivetrain=tacoma_drivetrain)


@pytest.fixture
def mild_upgrade_no_gearing(engine) -> ComparisonResult:
    """Provide 265/70R17 -> 285/75R17 without an axle ratio."""
    return engine.compare("265/70R17", "285/75R17")


@pytest.fixture
def big_upgrade(engine) -> ComparisonResult:
    """Provide 265/70R16 -> 35x12.50R17 (30.6in -> 35in) with a 3.909 axle."""
    return engine.compare(
        "265/70R16",
        "35x12.50R17",
        drivetrain=DrivetrainConfig(axle_gear_ratio=3.909),
    )
