import asyncio
import sys
from decimal import Decimal

from lat_lon_parser import parse

from coord_converter.extraction import Resolver, extract_async, extract_sync, is_url_like
from coord_converter.links import decode_until_stable
from coord_converter.validation import in_range, looks_like_coordinates


class ExtractionError(ValueError):
    """Raised when no coordinates can be obtained from the user's input."""


def print_examples():
    """Print usage examples."""
    print("""
Coordinate Converter
====================

Usage:
  python convert_coordinates.py <coordinates or map URL> [options]

Examples:
  # Plain coordinates
  python convert_coordinates.py "40.7128,-74.0060"                      # DD -> DMS
  python convert_coordinates.py "40°42'46.08\\"N, 74°0'21.60\\"W"         # DMS -> DD

  # Map service links
  python convert_coordinates.py "https://www.google.com/maps/@40.7128,-74.0060,15z"
  python convert_coordinates.py "https://waze.com/ul?ll=40.7128,-74.0060"
  python convert_coordinates.py "https://www.openstreetmap.org/?mlat=40.7128&mlon=-74.0060"
  python convert_coordinates.py "https://maps.app.goo.gl/abc123"        # Short link (network)

  # Separate axes, any notation
  python convert_coordinates.py -lat "23°30'0\\"S" -long "46°37'59\\"W"

  # Links to open the place in map apps
  python convert_coordinates.py "40.7128,-74.0060" --links --share

Options:
  --latitude, -lat    Latitude given on its own
  --longitude, -long  Longitude given on its own
  --offline, -o       Do not fetch pages, only read the URL itself
  --links, -l         Print Waze / Google Maps / Apple Maps links and a geo: URI
  --share, -s         Print a share link
  --refresh-cache, -R Ignore cached short-link lookups
  --config, -c        Path to a TOML config file (default: coord_config.toml)

Supported links:
  Google Maps, Waze, Apple Maps, OpenStreetMap, Bing Maps, goo.gl short
  links, and pages carrying geo.position / ICBM / schema.org metadata.
""")

def resolve_cli_input(args, argv):
    # If no arguments provided, show examples
    if not argv:
        print_examples()
        sys.exit(0)

    if args.latitude or args.longitude:
        if not (args.latitude and args.longitude):
            print("Error: --latitude and --longitude must be given together.\n")
            print_examples()
            sys.exit(1)
        return parse_axis_pair(args.latitude, args.longitude)

    if not args.input:
        print("Error: coordinates or a map URL are required.\n")
        print_examples()
        sys.exit(1)

    return args.input


def _plain(value: float) -> str:
    # repr() switches to exponent notation below 1e-4
    return format(Decimal(repr(value)), "f")


def parse_axis_pair(latitude: str, longitude: str) -> str:
    """Combine separately given axes into a ``"lat,lon"`` string.

    Each axis may use any notation ``lat_lon_parser`` understands
    (decimal, DMS, with or without hemisphere letters).
    """
    try:
        lat = parse(latitude)
        lon = parse(longitude)
    except ValueError as exc:
        raise ExtractionError(
            "Invalid coordinates. Use decimal degrees or DMS with a direction (e.g. 23°30'0\"S)."
        ) from exc
    if not in_range(lat, lon):
        raise ExtractionError("Coordinates out of range.")
    return f"{_plain(lat)},{_plain(lon)}"


def locate_coordinates(text: str, resolver: Resolver, offline: bool = False, max_decode_iterations: int = 10) -> str:
    """
    Turn user input into coordinates, the way the converter front end does.

    The network path is tried first; if it finds nothing, the synchronous
    extraction result is used when it at least looks like coordinates.

    Raises:
        ExtractionError: If neither path produced coordinates.
    """
    text = text.strip()
    if not is_url_like(text):
        # shared coordinates can arrive percent-encoded several times
        text = decode_until_stable(text, max_decode_iterations)

    if not offline:
        coords = asyncio.run(extract_async(text, resolver))
        if coords:
            if looks_like_coordinates(coords):
                return coords
            raise ExtractionError(
                "Invalid coordinate format extracted from the URL. Try entering the coordinates manually."
            )

    coords = extract_sync(text)
    if looks_like_coordinates(coords):
        return coords
    raise ExtractionError(
        "Could not extract coordinates from the input. Try entering the coordinates directly."
    )
