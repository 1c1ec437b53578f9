"""Linear mass of standard steel profiles (kg/m), keyed by designation."""

from __future__ import annotations
import logging

logger = logging.getLogger(__name__)

# kg/m for designations missing from the table
DEFAULT_LINEAR_WEIGHT = 30.0

LINEAR_WEIGHTS: dict[str, float] = {
    "IPE 80": 6.0,
    "IPE 100": 8.1,
    "IPE 120": 10.4,
    "IPE 140": 12.9,
    "IPE 160": 15.8,
    "IPE 180": 18.8,
    "IPE 200": 22.4,
    "IPE 220": 26.2,
    "IPE 240": 30.7,
    "IPE 270": 36.1,
    "IPE 300": 42.2,
    "IPE 330": 49.1,
    "IPE 360": 57.1,
    "IPE 400": 66.3,
    "IPE 450": 77.6,
    "IPE 500": 90.7,
    "HEA 100": 16.7,
    "HEA 120": 19.9,
    "HEA 140": 24.7,
    "HEA 160": 30.4,
    "HEA 180": 35.5,
    "HEA 200": 42.3,
    "HEA 220": 50.5,
    "HEA 240": 60.3,
    "HEA 260": 68.2,
    "HEA 280": 76.4,
    "HEA 300": 88.3,
    "HEB 100": 20.4,
    "HEB 120": 26.7,
    "HEB 140": 33.7,
    "HEB 160": 42.6,
    "HEB 180": 51.2,
    "HEB 200": 61.3,
    "HEB 220": 71.5,
    "HEB 240": 83.2,
    "HEB 260": 93.0,
    "HEB 280": 103.1,
    "HEB 300": 117.0,
    "UAP 65": 7.09,
    "UAP 80": 8.64,
    "UAP 100": 10.6,
    "UAP 120": 13.4,
    "UAP 140": 16.0,
    "UAP 160": 18.8,
    "UAP 180": 22.0,
    "UAP 200": 25.3,
    "UPN 80": 8.64,
    "UPN 100": 10.6,
    "UPN 120": 13.4,
    "UPN 140": 16.0,
    "UPN 160": 18.8,
    "UPN 180": 22.0,
    "UPN 200": 25.3,
}


def linear_weight(designation: str, default: float = DEFAULT_LINEAR_WEIGHT) -> float:
    """Return kg/m for a designation, or `default` when it is not tabulated."""
    weight = LINEAR_WEIGHTS.get(designation)
    if weight is None:
        logger.debug("No linear weight for profile %r, using %.1f kg/m", designation, default)
        return default
    return weight


def profile_weight(
    designation: str,
    length_mm: float,
    count: int = 1,
    default: float = DEFAULT_LINEAR_WEIGHT,
) -> float:
    """Mass in kg of `count` pieces of `length_mm` millimetres."""
    return linear_weight(designation, default) * (length_mm / 1000) * count


def is_known_profile(designation: str) -> bool:
    return designation in LINEAR_WEIGHTS
