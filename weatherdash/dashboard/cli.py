"""Command line front end for the weather dashboard.

Usage:
    python -m weatherdash.dashboard.cli Paris
    python -m weatherdash.dashboard.cli --coords 48.85 2.35 --units imperial
    python -m weatherdash.dashboard.cli --favorite-add Paris
    python -m weatherdash.dashboard.cli --mock 7 London
"""

import argparse
import json
import sys

from pydantic import ValidationError

from weatherdash.dashboard.service import DashboardResult, WeatherService
from weatherdash.shared.api.mock import MockWeatherClient
from weatherdash.shared.config.logging import configure_logging
from weatherdash.shared.models.weather import Coordinates, Units


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Look up weather for a city")
    parser.add_argument("city", nargs="?", default="", help="City to look up")
    parser.add_argument(
        "--units",
        choices=[u.value for u in Units],
        default=None,
        help="Unit system (defaults to settings)",
    )
    parser.add_argument(
        "--coords",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="Look up by position instead of city name",
    )
    parser.add_argument(
        "--no-geolocation",
        action="store_true",
        help="Behave as if location access was denied (shows the default city)",
    )
    parser.add_argument(
        "--mock",
        type=int,
        metavar="SEED",
        help="Use generated offline weather with this seed instead of the provider",
    )
    parser.add_argument("--history", action="store_true", help="Show recent searches")
    parser.add_argument("--favorites", action="store_true", help="Show favorite cities")
    parser.add_argument("--favorite-add", metavar="CITY", help="Add a favorite city")
    parser.add_argument("--favorite-remove", metavar="CITY", help="Remove a favorite city")
    return parser


def render(result: DashboardResult) -> str:
    """Render a search result as indented JSON."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def main(argv: list[str] | None = None, service: WeatherService | None = None) -> int:
    """Run the command line front end.

    Returns:
        Process exit code (1 when the search failed)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    if service is None:
        client = MockWeatherClient(seed=args.mock) if args.mock is not None else None
        service = WeatherService(client=client)

    if args.history:
        print(json.dumps(service.history(), indent=2))
        return 0
    if args.favorites:
        print(json.dumps(service.favorites(), indent=2))
        return 0
    if args.favorite_add:
        print(json.dumps(service.add_favorite(args.favorite_add), indent=2))
        return 0
    if args.favorite_remove:
        print(json.dumps(service.remove_favorite(args.favorite_remove), indent=2))
        return 0

    coordinates = None
    if args.coords:
        try:
            coordinates = Coordinates(lat=args.coords[0], lon=args.coords[1])
        except ValidationError:
            parser.error("--coords: latitude must be within 90 and longitude within 180")

    result = service.search(
        args.city,
        units=Units(args.units) if args.units else None,
        coordinates=coordinates,
        geolocation_denied=args.no_geolocation,
    )

    print(render(result))
    if result.error is not None:
        print(result.error.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
