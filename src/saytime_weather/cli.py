"""CLI: resolve a location to temperature and condition, then display or write artifacts."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

from rich.console import Console

from . import __version__
from .classifier import classify_location
from .config import load_settings
from .exceptions import ConfigError, NoReport, UsageError
from .geocoding import NominatimGeocoder
from .log_setup import setup_logger
from .output import ArtifactWriter, render_verbose
from .resolver import ObservationResolver
from .weather.metar import MetarProvider
from .weather.openmeteo import OpenMeteoProvider

EXAMPLES = """\
location_id:
  Postal code, ZIP code, ICAO airport code, or special location.
  ICAO examples: KJFK, EGLL, CYYZ, NZSP, LFPG, RJAA
  Special: SOUTHPOLE, ALERT, HEARD, BOUVET, MIDWAY, EASTER, etc.
  Pass "v" after the location to print the result instead of writing files.

examples:
  %(prog)s 90210                 Beverly Hills, CA (ZIP)
  %(prog)s M5H2N2 v              Toronto, ON (postal code)
  %(prog)s -d fr 75001           Paris, France
  %(prog)s KJFK v                JFK Airport, New York
  %(prog)s -t C EGLL             Heathrow in Celsius
  %(prog)s SOUTHPOLE v           South Pole Station
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _country_code(value: str) -> str:
    text = value.strip().lower()
    if len(text) != 2 or not text.isalpha():
        raise argparse.ArgumentTypeError(f"expected a 2-letter country code, got {value!r}")
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="resolve",
        description="Resolve a location to current temperature and weather condition.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("location", nargs="?", default=None, help="Location identifier.")
    parser.add_argument(
        "display_mode",
        nargs="?",
        default=None,
        help="'v' to display text only; no files are written.",
    )
    parser.add_argument("-c", "--config", type=Path, default=None, help="Alternate config file.")
    parser.add_argument(
        "-d",
        "--default-country",
        type=_country_code,
        default=None,
        metavar="CC",
        help="Override default country (us, ca, fr, de, uk, ...).",
    )
    parser.add_argument(
        "-t",
        "--temperature-mode",
        type=str.upper,
        choices=["F", "C"],
        default=None,
        help="Override temperature mode.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Accepted for compatibility; results are never cached.",
    )
    parser.add_argument(
        "--no-condition",
        action="store_true",
        help="Skip the weather condition announcement file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s version {__version__}",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments; raises UsageError on bad input.

    Options may appear anywhere, including between the location and ``v``.
    """
    return build_parser().parse_intermixed_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {
        "default_country": args.default_country,
        "temperature_mode": args.temperature_mode,
    }
    if args.no_condition:
        overrides["process_condition"] = False
    return overrides


def main() -> int:
    """Run one resolution and report the result."""
    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    try:
        args = parse_args()
        query = classify_location(args.location)
    except UsageError as exc:
        err_console.print(f"ERROR: {exc}", markup=False)
        err_console.print("Use --help for usage information", markup=False)
        return 1
    verbose = (args.display_mode or "").lower() == "v"

    logger = setup_logger(level=logging.WARNING)
    try:
        settings = load_settings(config_file=args.config, overrides=_cli_overrides(args))
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 1
    logger.setLevel(settings.log_level)
    logger.debug("Loaded settings: %s", settings.safe_summary())
    if args.no_cache:
        logger.debug("--no-cache requested; resolutions are never cached")

    try:
        with (
            NominatimGeocoder(settings=settings, logger=logger) as geocoder,
            MetarProvider(settings=settings, logger=logger) as metar,
            OpenMeteoProvider(settings=settings, logger=logger, geocoder=geocoder) as openmeteo,
        ):
            resolver = ObservationResolver(
                providers={"metar": metar, "openmeteo": openmeteo},
                preference=settings.provider_preference,
                logger=logger,
            )
            observation = resolver.resolve(query)
    except NoReport as exc:
        logger.error("Resolution failed: %s", exc)
        console.print("No Report", markup=False)
        return 1

    if verbose:
        console.print(render_verbose(observation), markup=False)
        return 0

    try:
        ArtifactWriter(settings=settings, logger=logger).write(observation)
    except OSError as exc:
        logger.error("Failed writing output artifacts: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
