"""Coordinate format conversion.

Converts coordinate pairs between Decimal Degrees ("40.7128,-74.0060") and
Degrees-Minutes-Seconds ("40°42'46.08\"N, 74°0'21.60\"W"). The direction of
the conversion is detected from the input.
"""

from __future__ import annotations

import math
import re


class FormatError(ValueError):
    """Raised when a coordinate string does not have a convertible shape."""


_DMS_RE = re.compile(
    r"(\d{1,3})°\s*(\d{1,2})'\s*(\d{1,2}(?:\.\d+)?)\"\s*([NSEW])",
    re.IGNORECASE | re.ASCII,
)


def _direction_multiplier(direction: str) -> int:
    return -1 if direction.upper() in ("S", "W") else 1


def _split_pair(value: str, message: str) -> tuple[str, str]:
    parts = value.split(",")
    if len(parts) != 2:
        raise FormatError(message)
    return parts[0].strip(), parts[1].strip()


def _parse_dms_axis(value: str) -> float:
    match = _DMS_RE.search(value)
    if not match:
        raise FormatError(f'Invalid DMS coordinate part: "{value}"')

    degrees = float(match.group(1))
    minutes = float(match.group(2))
    seconds = float(match.group(3))
    decimal = degrees + minutes / 60 + seconds / 3600

    return decimal * _direction_multiplier(match.group(4))


def _format_dms_axis(value: float, is_latitude: bool) -> str:
    if is_latitude:
        direction = "S" if value < 0 else "N"
    else:
        direction = "W" if value < 0 else "E"

    magnitude = abs(value)
    degrees = math.floor(magnitude)
    minutes_decimal = (magnitude - degrees) * 60
    minutes = math.floor(minutes_decimal)
    seconds = (minutes_decimal - minutes) * 60

    return f"{degrees}°{minutes}'{seconds:.2f}\"{direction}"


def dms_to_decimal(dms: str) -> str:
    """Convert a DMS pair into a ``"lat,lon"`` string with six decimals."""
    lat_part, lon_part = _split_pair(
        dms, "Invalid DMS format. Expected 'latitude, longitude'."
    )
    latitude = _parse_dms_axis(lat_part)
    longitude = _parse_dms_axis(lon_part)
    return f"{latitude:.6f},{longitude:.6f}"


def decimal_to_dms(decimal: str) -> str:
    """Convert a ``"lat,lon"`` decimal pair into DMS notation.

    The two axes are joined by ``", "``. Seconds are rounded to two decimals.
    """
    lat_part, lon_part = _split_pair(
        decimal, "Invalid decimal format. Expected 'latitude,longitude'."
    )
    try:
        latitude = float(lat_part)
        longitude = float(lon_part)
    except ValueError as exc:
        raise FormatError("Decimal coordinates contain non-numeric characters.") from exc

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise FormatError("Decimal coordinates contain non-numeric characters.")

    return f"{_format_dms_axis(latitude, True)}, {_format_dms_axis(longitude, False)}"


def convert(coordinates: str) -> str:
    """Convert between DD and DMS, detecting the input format.

    Input containing ``°`` is treated as DMS and converted to decimal
    degrees, anything else is treated as decimal degrees and converted to
    DMS. A DMS pair without the separating comma gets one inserted after
    the first ``N`` (or, failing that, the first ``S``).

    Raises:
        FormatError: If the input does not have a convertible shape.
    """
    is_dms = "°" in coordinates
    has_comma = "," in coordinates

    if is_dms and has_comma:
        return dms_to_decimal(coordinates)
    if is_dms:
        # Only handles a hemisphere letter sitting right before the split point.
        if "N" in coordinates:
            return dms_to_decimal(coordinates.replace("N", "N,", 1))
        return dms_to_decimal(coordinates.replace("S", "S,", 1))

    return decimal_to_dms(coordinates)
