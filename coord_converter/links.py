"""Links and URIs built from extracted coordinates."""

from __future__ import annotations

from urllib.parse import quote, unquote

from coord_converter.conversion import convert

MAP_APP_URLS = {
    "waze": "https://waze.com/ul?ll={coords}&navigate=yes",
    "googlemaps": "https://www.google.com/maps?q={coords}",
    "applemaps": "https://maps.apple.com/place?coordinate={coords}",
}


def decode_until_stable(value: str, max_iterations: int = 10) -> str:
    """Percent-decode ``value`` until decoding no longer changes it.

    Share links can arrive encoded several times over. Decoding stops after
    ``max_iterations`` rounds, and an undecodable sequence stops it with the
    last good value.
    """
    decoded = value
    for _ in range(max_iterations):
        try:
            step = unquote(decoded, errors="strict")
        except UnicodeDecodeError:
            break
        if step == decoded:
            break
        decoded = step
    return decoded


def to_decimal(coordinates: str) -> str:
    """Decimal form used by map apps; DMS input is converted first."""
    compact = coordinates.replace(" ", "", 1)
    if "°" in coordinates:
        return convert(compact)
    return compact


def map_app_links(coordinates: str) -> dict[str, str]:
    decimal = to_decimal(coordinates)
    return {name: template.format(coords=decimal) for name, template in MAP_APP_URLS.items()}


def geo_uri(coordinates: str) -> str:
    return f"geo:{to_decimal(coordinates)}"


def share_url(base_url: str, coordinates: str) -> str:
    return f"{base_url.rstrip('/')}/?c={quote(to_decimal(coordinates), safe='')}"
