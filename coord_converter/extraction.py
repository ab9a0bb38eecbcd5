"""Coordinate extraction from raw input and map service URLs.

Input is either a coordinate pair typed by a user or a link copied from a
map service. ``extract_sync`` only looks at the text itself;
``extract_async`` additionally follows short links and scrapes the linked
page through an injected resolver (see ``coord_converter.fetch``).

Extraction never raises: a failed sync extraction returns the trimmed input
unchanged and a failed async extraction returns ``None``.
"""

from __future__ import annotations

import inspect
import re
from typing import Awaitable, Callable, Optional, Union
from urllib.parse import SplitResult, parse_qs, urlsplit

from coord_converter.fetch import FetchResult, resolve_url_async, warn
from coord_converter.scraping import scrape_google_maps, scrape_page_metadata
from coord_converter.validation import parse_coordinate_string, validate_coordinates

Resolver = Callable[[str], Union[Optional[FetchResult], Awaitable[Optional[FetchResult]]]]

URL_MARKERS = ("://", "www.", "maps.", "goo.gl")

_NUMBER = r"-?\d+\.?\d*"
_AT_PATH_RE = re.compile(rf"@({_NUMBER}),({_NUMBER})", re.ASCII)
_PLACE_PATH_RE = re.compile(rf"/place/({_NUMBER}),({_NUMBER})", re.ASCII)
_ANY_PAIR_RE = re.compile(rf"({_NUMBER}),({_NUMBER})", re.ASCII)
_FRAGMENT_PAIR_RE = re.compile(rf"/({_NUMBER})/({_NUMBER})", re.ASCII)
_EMBEDDED_PAIR_RE = re.compile(r"(-?\d+\.\d{4,})\s*,\s*(-?\d+\.\d{4,})", re.ASCII)


def is_url_like(text: str) -> bool:
    return any(marker in text for marker in URL_MARKERS)


def is_short_link(hostname: str) -> bool:
    """Short links (``goo.gl``, ``maps.app.goo.gl``) need a network round trip."""
    return "goo.gl" in hostname


def _split_url(text: str) -> SplitResult:
    parts = urlsplit(text)
    if not parts.scheme or not parts.netloc:
        parts = urlsplit("https://" + text)
    return parts


def _param(query: dict[str, list[str]], name: str) -> Optional[str]:
    values = query.get(name)
    return values[0] if values else None


def _first_valid_match(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    return parse_coordinate_string(f"{match.group(1)},{match.group(2)}")


def _google_maps(parts: SplitResult, query: dict[str, list[str]]) -> Optional[str]:
    q = _param(query, "q")
    if q:
        coords = parse_coordinate_string(q)
        if coords:
            return coords

    for pattern in (_AT_PATH_RE, _PLACE_PATH_RE, _ANY_PAIR_RE):
        coords = _first_valid_match(pattern, parts.path)
        if coords:
            return coords
    return None


def _waze(parts: SplitResult, query: dict[str, list[str]]) -> Optional[str]:
    ll = _param(query, "ll")
    return parse_coordinate_string(ll) if ll else None


def _apple_maps(parts: SplitResult, query: dict[str, list[str]]) -> Optional[str]:
    for name in ("ll", "coordinate"):
        value = _param(query, name)
        if value:
            coords = parse_coordinate_string(value)
            if coords:
                return coords
    return None


def _openstreetmap(parts: SplitResult, query: dict[str, list[str]]) -> Optional[str]:
    mlat = _param(query, "mlat")
    mlon = _param(query, "mlon")
    if mlat and mlon:
        coords = parse_coordinate_string(f"{mlat},{mlon}")
        if coords:
            return coords

    # e.g. #map=15/40.7128/-74.0060
    return _first_valid_match(_FRAGMENT_PAIR_RE, parts.fragment)


def _bing_maps(parts: SplitResult, query: dict[str, list[str]]) -> Optional[str]:
    cp = _param(query, "cp")
    return parse_coordinate_string(cp.replace("~", ",", 1)) if cp else None


def _query_params(parts: SplitResult, query: dict[str, list[str]]) -> Optional[str]:
    lat = _param(query, "lat") or _param(query, "latitude")
    lon = _param(query, "lon") or _param(query, "lng") or _param(query, "longitude")
    if lat and lon:
        return parse_coordinate_string(f"{lat},{lon}")
    return None


def _maps_service(name: str) -> Callable[[str, str], bool]:
    """Match ``name`` map hosts such as maps.google.com; www.google.com/maps is not one."""

    def matches(hostname: str, path: str) -> bool:
        return name in hostname and "maps" in hostname

    return matches


_is_google_maps = _maps_service("google")

# (hostname/path matcher, extractor) pairs, tried in priority order
DIALECTS: list[tuple[Callable[[str, str], bool], Callable[[SplitResult, dict[str, list[str]]], Optional[str]]]] = [
    (_is_google_maps, _google_maps),
    (lambda host, path: "waze" in host, _waze),
    (_maps_service("apple"), _apple_maps),
    (lambda host, path: "openstreetmap" in host, _openstreetmap),
    (_maps_service("bing"), _bing_maps),
    (lambda host, path: True, _query_params),
]


def extract_sync(text: str) -> str:
    """Extract a ``"lat,lon"`` string from raw input or a map URL.

    Input that does not look like a URL is returned trimmed, as is a URL
    nothing could be extracted from (short links included). Callers must
    validate the result themselves.
    """
    trimmed = text.strip()
    if not is_url_like(text):
        return trimmed

    try:
        parts = _split_url(trimmed)
        hostname = (parts.hostname or "").lower()
        if is_short_link(hostname):
            return trimmed

        query = parse_qs(parts.query)
        for matches, extractor in DIALECTS:
            if not matches(hostname, parts.path):
                continue
            coords = extractor(parts, query)
            if coords:
                return coords
    except ValueError as e:
        warn(f"Could not parse URL {trimmed!r}: {e}")
        return trimmed

    coords = _first_valid_match(_EMBEDDED_PAIR_RE, text)
    return coords or trimmed


async def _fetch(resolver: Resolver, url: str) -> Optional[FetchResult]:
    try:
        result = resolver(url)
        if inspect.isawaitable(result):
            result = await result
        return result
    except Exception as e:
        warn(f"Fetching {url} failed: {e}")
        return None


async def _expand_short_link(resolver: Resolver, url: str) -> Optional[str]:
    result = await _fetch(resolver, url)
    if result is None or not result.final_url or result.final_url == url:
        return None
    return result.final_url


async def _scrape(resolver: Resolver, url: str, scraper: Callable[[str], Optional[str]]) -> Optional[str]:
    result = await _fetch(resolver, url)
    if result is None:
        return None
    return validate_coordinates(scraper(result.body))


async def extract_async(text: str, resolver: Resolver = resolve_url_async) -> Optional[str]:
    """Extract coordinates, using the network when the URL alone is not enough.

    Short links are expanded first. Google Maps pages are scraped for the
    map centre and any other page for geo metadata. Every result passes
    ``validate_coordinates``; ``None`` means nothing usable was found.

    Args:
        text: Coordinates or a map URL.
        resolver: Fetch-and-follow callable returning a ``FetchResult``
            (sync or async). Failures may be raised or returned as ``None``.
    """
    sync_result = extract_sync(text)
    trimmed = text.strip()

    if not is_url_like(text):
        return validate_coordinates(sync_result)

    if sync_result != trimmed:
        validated = validate_coordinates(sync_result)
        if validated:
            return validated

    try:
        parts = _split_url(trimmed)
        hostname = (parts.hostname or "").lower()
    except ValueError as e:
        warn(f"Could not parse URL {trimmed!r}: {e}")
        return None
    url = parts.geturl()

    if is_short_link(hostname):
        expanded = await _expand_short_link(resolver, url)
        if expanded:
            validated = validate_coordinates(extract_sync(expanded))
            if validated and validated != expanded:
                return validated
            coords = await _scrape(resolver, expanded, scrape_google_maps)
            if coords:
                return coords
    elif _is_google_maps(hostname, parts.path):
        coords = await _scrape(resolver, url, scrape_google_maps)
        if coords:
            return coords

    return await _scrape(resolver, url, scrape_page_metadata)
