"""Coordinate string validation helpers."""

from __future__ import annotations

import re
from typing import Optional

_PAIR_RE = re.compile(r"^(-?\d+\.?\d*)\s*,?\s*(-?\d+\.?\d*)$", re.ASCII)
_DECIMAL_RE = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$", re.ASCII)
_DMS_HINT_RE = re.compile(r"\d+°.*[NSEW]", re.IGNORECASE | re.ASCII)


def in_range(latitude: float, longitude: float) -> bool:
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def _checked_pair(match: Optional[re.Match[str]]) -> Optional[str]:
    if not match:
        return None
    lat_text, lon_text = match.group(1), match.group(2)
    if not in_range(float(lat_text), float(lon_text)):
        return None
    return f"{lat_text},{lon_text}"


def parse_coordinate_string(value: str) -> Optional[str]:
    """Return ``value`` as a canonical ``"lat,lon"`` string, or ``None``.

    The separating comma is optional, so ``"40.7 -74.0"`` is accepted too.
    Pairs outside the latitude/longitude ranges are rejected.
    """
    return _checked_pair(_PAIR_RE.match(value.strip()))


def looks_like_coordinates(value: Optional[str]) -> bool:
    """Check the shape of a result without range-checking it."""
    if not value:
        return False
    return bool(_DECIMAL_RE.match(value) or _DMS_HINT_RE.search(value))


def validate_coordinates(value: Optional[str]) -> Optional[str]:
    """Gate applied to every extraction result.

    Decimal pairs must have a comma and be in range; they come back in
    canonical form. Anything that looks like DMS is passed through as-is,
    unchecked, for the converter to deal with.
    """
    if not value:
        return None

    cleaned = value.strip()
    coords = _checked_pair(_DECIMAL_RE.match(cleaned))
    if coords:
        return coords

    if _DMS_HINT_RE.search(cleaned):
        return cleaned

    return None
