"""Coordinate scraping from fetched map pages."""

from __future__ import annotations

import re
from typing import Optional

from coord_converter.validation import in_range, parse_coordinate_string

_NUMBER = r"-?\d+\.?\d*"

_AT_PAIR_RE = re.compile(rf"@({_NUMBER}),({_NUMBER})", re.ASCII)

# Google Maps page patterns, in order of preference
_GOOGLE_META_RE = re.compile(
    rf"<meta[^>]*content=[\"']([^\"']*@{_NUMBER},{_NUMBER}[^\"']*)[\"']",
    re.IGNORECASE | re.ASCII,
)
_GOOGLE_JSON_RE = re.compile(rf"\"@{_NUMBER},{_NUMBER}\"", re.ASCII)
_GOOGLE_LINK_RE = re.compile(
    rf"<link[^>]*href=[\"']([^\"']*@{_NUMBER},{_NUMBER}[^\"']*)[\"']",
    re.IGNORECASE | re.ASCII,
)
_PRECISE_PAIR_RE = re.compile(r"-?\d+\.\d{6,},-?\d+\.\d{6,}", re.ASCII)

# Generic geo metadata
_GEO_POSITION_RE = re.compile(
    r"<meta[^>]*name=[\"']?geo\.position[\"']?[^>]*content=[\"']([^\"']+)[\"']",
    re.IGNORECASE | re.ASCII,
)
_ICBM_RE = re.compile(
    r"<meta[^>]*name=[\"']?ICBM[\"']?[^>]*content=[\"']([^\"']+)[\"']",
    re.IGNORECASE | re.ASCII,
)
_SCHEMA_FLAT_RE = re.compile(
    rf"\"latitude\"\s*:\s*\"?({_NUMBER})\"?\s*,\s*\"longitude\"\s*:\s*\"?({_NUMBER})\"?",
    re.IGNORECASE | re.ASCII,
)
_SCHEMA_GEO_RE = re.compile(
    r"\"geo\"\s*:\s*\{\s*\"@type\"\s*:\s*\"GeoCoordinates\"\s*,\s*"
    rf"\"latitude\"\s*:\s*\"?({_NUMBER})\"?\s*,\s*\"longitude\"\s*:\s*\"?({_NUMBER})\"?",
    re.IGNORECASE | re.ASCII,
)


def _at_pair(text: str) -> Optional[str]:
    match = _AT_PAIR_RE.search(text)
    if match:
        return f"{match.group(1)},{match.group(2)}"
    return None


def scrape_google_maps(html: str) -> Optional[str]:
    """Find the map centre in a Google Maps page.

    Tries, in order: a meta tag ``content`` holding an ``@lat,lon`` token, a
    quoted ``"@lat,lon"`` literal, a ``<link>`` ``href`` holding the token,
    and finally the first high-precision ``lat,lon`` pair in range.
    """
    if not html:
        return None

    match = _GOOGLE_META_RE.search(html)
    if match:
        coords = _at_pair(match.group(1))
        if coords:
            return coords

    match = _GOOGLE_JSON_RE.search(html)
    if match:
        coords = _at_pair(match.group(0))
        if coords:
            return coords

    match = _GOOGLE_LINK_RE.search(html)
    if match:
        coords = _at_pair(match.group(1))
        if coords:
            return coords

    for candidate in _PRECISE_PAIR_RE.findall(html):
        lat_text, lon_text = candidate.split(",")
        if in_range(float(lat_text), float(lon_text)):
            return candidate

    return None


def scrape_page_metadata(html: str) -> Optional[str]:
    """Find coordinates in generic page metadata.

    Looks at ``geo.position`` and ``ICBM`` meta tags (``lat;lon``) and at
    schema.org ``GeoCoordinates`` data, in that order.
    """
    if not html:
        return None

    for pattern in (_GEO_POSITION_RE, _ICBM_RE):
        match = pattern.search(html)
        if match:
            coords = parse_coordinate_string(match.group(1).replace(";", ",", 1))
            if coords:
                return coords

    for pattern in (_SCHEMA_FLAT_RE, _SCHEMA_GEO_RE):
        match = pattern.search(html)
        if match:
            return f"{match.group(1)},{match.group(2)}"

    return None
