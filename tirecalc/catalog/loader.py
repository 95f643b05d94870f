"""
Reference data loader.

Builds the read-only ReferenceData from the built-in tables, optionally
overridden by a JSON file, and loads the community gear ratio CSV.
"""

import csv
import importlib.resources as resources
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from tirecalc.catalog.models import GearRecommendationRow, ReferenceData
from tirecalc.catalog.reference import builtin_reference_tables, default_reference
from tirecalc.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_GEAR_CSV_NAME = "gear_ratio_recommendations.csv"

# Tables merged entry by entry; every other key replaces the built-in value
MERGED_TABLES = ("measured_diameters", "use_case_profiles", "load_index_table")

CSV_COLUMNS = (
    "vehicle_type",
    "stock_tire_diameter",
    "new_tire_diameter",
    "stock_gear_ratio",
    "recommended_gear_ratio",
    "use_case",
    "notes",
)


def _resource_path(filename: str) -> Optional[Path]:
    """
    Resolve a packaged data file inside tirecalc.data.

    Returns None if the resource is unavailable.
    """
    try:
        resource = resources.files("tirecalc.data").joinpath(filename)
    except ModuleNotFoundError:
        return None
    if resource.is_file():
        with resources.as_file(resource) as tmp_path:
            return Path(tmp_path)
    return None


def load_reference(path: Union[str, Path]) -> ReferenceData:
    """
    Load reference data from a JSON file layered over the built-in tables.

    Args:
        path: JSON object whose keys are ReferenceData fields

    Returns:
        ReferenceData with the overrides applied

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file content is not a valid reference dataset
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Reference data not found: {path}")

    with open(path, encoding="utf-8") as f:
        overrides = json.load(f)
    if not isinstance(overrides, dict):
        raise ValueError(f"Reference data must be a JSON object: {path}")

    tables = builtin_reference_tables()
    for key, value in overrides.items():
        if key not in tables:
            logger.warning("Ignoring unknown reference table %r in %s", key, path)
            continue
        if key in MERGED_TABLES and isinstance(value, dict):
            merged = dict(tables[key])
            merged.update(value)
            tables[key] = merged
        else:
            tables[key] = value

    logger.info("Loaded reference overrides from %s (%s)", path, ", ".join(sorted(overrides)))
    return ReferenceData(**tables)


@lru_cache(maxsize=1)
def get_reference() -> ReferenceData:
    """The reference dataset for this process, honoring TIRECALC_REFERENCE_PATH."""
    settings = get_settings()
    if settings.reference_path is not None:
        return load_reference(settings.reference_path)
    return default_reference()


def _resolve_gear_csv(path: Union[str, Path, None]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    configured = get_settings().gear_recommendations_path
    if configured is not None:
        return configured
    return _resource_path(DEFAULT_GEAR_CSV_NAME)


def load_gear_recommendations(
    path: Union[str, Path, None] = None,
) -> list[GearRecommendationRow]:
    """
    Load community gear ratio builds from CSV.

    A missing file yields an empty list. Rows that fail validation are
    skipped with a warning.

    Args:
        path: CSV path. Defaults to the configured path, then the packaged sample.

    Returns:
        List of GearRecommendationRow objects
    """
    csv_path = _resolve_gear_csv(path)
    if csv_path is None or not csv_path.exists():
        logger.warning("Gear ratio recommendations not found: %s", csv_path)
        return []

    rows: list[GearRecommendationRow] = []
    with open(csv_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in CSV_COLUMNS[:5] if c not in (reader.fieldnames or [])]
        if missing:
            logger.warning("Gear ratio CSV %s is missing columns: %s", csv_path, ", ".join(missing))
            return []
        for line_no, record in enumerate(reader, start=2):
            data = {k: (record.get(k) or "").strip() for k in CSV_COLUMNS}
            try:
                rows.append(GearRecommendationRow(**data))
            except ValidationError as e:
                logger.warning("Skipping invalid row %d in %s: %s", line_no, csv_path, e.errors()[0]["msg"])

    logger.debug("Loaded %d gear ratio recommendations from %s", len(rows), csv_path)
    return rows
