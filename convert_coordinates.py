import argparse
import sys
from functools import partial

import toml

import coord_converter.cli
from coord_converter.cli import ExtractionError, locate_coordinates
from coord_converter.config import CONFIG_FILE, load_config
from coord_converter.conversion import FormatError, convert
from coord_converter.fetch import resolve_cached_async, resolve_url_async
from coord_converter.links import geo_uri, map_app_links, share_url


def build_resolver(config, refresh_cache=False):
    """Pick the fetch-and-follow implementation for this run."""
    fetch_conf = config["fetch"]
    kwargs = dict(user_agent=fetch_conf["user_agent"], timeout=fetch_conf["timeout"])
    if config["cache"]["enabled"]:
        return partial(resolve_cached_async, refresh_cache=refresh_cache, **kwargs)
    return partial(resolve_url_async, **kwargs)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Extract coordinates from map links and convert between DD and DMS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python convert_coordinates.py "40.7128,-74.0060"
  python convert_coordinates.py "https://www.google.com/maps/@40.7128,-74.0060,15z"
  python convert_coordinates.py "https://maps.app.goo.gl/abc123" --links
  python convert_coordinates.py -lat 40.7128 -long -74.0060 --share
  python convert_coordinates.py -- "-33.8688,151.2093"   # input starting with "-"
        """
    )

    parser.add_argument('input', nargs='?', type=str, help='Coordinates (DD or DMS) or a map URL')
    parser.add_argument("--latitude", "-lat", dest="latitude", type=str, help="Latitude given on its own")
    parser.add_argument("--longitude", "-long", dest="longitude", type=str, help="Longitude given on its own")
    parser.add_argument('--offline', '-o', action='store_true', help='Only read the URL itself, never fetch pages')
    parser.add_argument('--links', '-l', action='store_true', help='Print map app links and a geo: URI')
    parser.add_argument('--share', '-s', action='store_true', help='Print a share link')
    parser.add_argument('--refresh-cache', '-R', action='store_true', help='Force a refresh of cached short-link lookups (default: False)')
    parser.add_argument('--config', '-c', type=str, default=str(CONFIG_FILE), help='Path to the TOML config file')
    return parser


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        user_input = coord_converter.cli.resolve_cli_input(args, argv)

        print("=" * 50)
        print("Coordinate Converter")
        print("=" * 50)

        config = load_config(args.config)
        resolver = build_resolver(config, args.refresh_cache)

        coords = locate_coordinates(
            user_input,
            resolver,
            offline=args.offline,
            max_decode_iterations=config["decode"]["max_iterations"],
        )
        print(f"✓ Coordinates: {coords}")

        converted = convert(coords)
        label = "Decimal" if "°" in coords else "DMS"
        print(f"✓ {label}: {converted}")

        if args.links:
            print("\nMap links:")
            for name, url in map_app_links(coords).items():
                print(f"  {name:<11} {url}")
            print(f"  {'geo':<11} {geo_uri(coords)}")

        if args.share:
            print(f"\n✓ Share: {share_url(config['share']['base_url'], coords)}")

    except (ExtractionError, FormatError, toml.TomlDecodeError) as e:
        print(f"\n✗ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
