"""
Real-world gear ratio matching.

Looks up community-verified builds that resemble a tire upgrade so that
calculated recommendations can be checked against what owners actually run.
An empty dataset yields no matches.
"""

from typing import Optional

from tirecalc.catalog.models import GearRecommendationRow, PopularRatio


# Matching tolerances
TIRE_TOLERANCE_IN = 1.0
GEAR_TOLERANCE = 0.15
POPULAR_TIRE_TOLERANCE_IN = 1.5


def _loosely_matches(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction."""
    a, b = a.lower(), b.lower()
    return a in b or b in a


def find_real_world_recommendations(
    rows: list[GearRecommendationRow],
    vehicle_type: Optional[str],
    stock_diameter_in: float,
    new_diameter_in: float,
    current_gear_ratio: float,
) -> list[GearRecommendationRow]:
    """
    Find builds matching a specific upgrade.

    Args:
        rows: Community builds (may be empty)
        vehicle_type: Make/model substring, or None to match any vehicle
        stock_diameter_in: Current tire diameter
        new_diameter_in: New tire diameter
        current_gear_ratio: Current axle ratio

    Returns:
        Matching rows, in dataset order
    """
    matches = []
    for row in rows:
        if vehicle_type and not _loosely_matches(row.vehicle_type, vehicle_type):
            continue
        if abs(row.stock_tire_diameter - stock_diameter_in) > TIRE_TOLERANCE_IN:
            continue
        if abs(row.new_tire_diameter - new_diameter_in) > TIRE_TOLERANCE_IN:
            continue
        if abs(row.stock_gear_ratio - current_gear_ratio) > GEAR_TOLERANCE:
            continue
        matches.append(row)
    return matches


def popular_gear_ratios_for_tire_size(
    rows: list[GearRecommendationRow],
    new_diameter_in: float,
    use_case: Optional[str] = None,
) -> list[PopularRatio]:
    """
    Rank recommended ratios by how often they appear for a tire size.

    Args:
        rows: Community builds (may be empty)
        new_diameter_in: New tire diameter, matched within 1.5in
        use_case: Optional use case substring filter

    Returns:
        PopularRatio entries sorted by popularity (descending)
    """
    grouped: dict[float, dict] = {}
    for row in rows:
        if abs(row.new_tire_diameter - new_diameter_in) > POPULAR_TIRE_TOLERANCE_IN:
            continue
        if use_case and not _loosely_matches(row.use_case, use_case):
            continue
        entry = grouped.setdefault(
            row.recommended_gear_ratio,
            {"count": 0, "use_cases": [], "vehicles": [], "notes": []},
        )
        entry["count"] += 1
        for key, value in (
            ("use_cases", row.use_case),
            ("vehicles", row.vehicle_type),
            ("notes", row.notes),
        ):
            if value and value not in entry[key]:
                entry[key].append(value)

    popular = [
        PopularRatio(
            ratio=ratio,
            popularity=entry["count"],
            use_cases=entry["use_cases"],
            vehicles=entry["vehicles"],
            notes=entry["notes"],
        )
        for ratio, entry in grouped.items()
    ]
    popular.sort(key=lambda p: p.popularity, reverse=True)
    return popular
