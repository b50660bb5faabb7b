"""METAR provider: raw aviation reports from aviationweather.gov with an NWS fallback."""

from __future__ import annotations

import re

from ..exceptions import NoReport, UnparsableReport
from ..http import HttpSource
from ..models import Condition, LocationQuery, Observation, celsius_to_fahrenheit
from .base import WeatherProvider

_STATION_RE = re.compile(r"^[A-Z0-9]{3,4}$")
_TEMP_PAIR_RE = re.compile(r"^(M?)(\d{2})/(?:M?\d{2})?$")
_WEATHER_GROUP_RE = re.compile(
    r"^(?:[+-]|VC)?"
    r"((?:MI|PR|BC|DR|BL|SH|TS|FZ)*"
    r"(?:DZ|RA|SN|SG|IC|PL|GR|GS|UP|BR|FG|FU|VA|DU|SA|HZ|PY|PO|SQ|FC|SS|DS)*)$"
)
_CLOUD_GROUP_RE = re.compile(r"^(FEW|SCT|BKN|OVC)(?:\d{3}|///)")
_CLEAR_SKY_GROUPS = {"CLR", "SKC", "NSC", "CAVOK"}
_REPORT_TYPES = {"METAR", "SPECI"}

# First match wins; the order is significant.
_CONDITION_PRIORITY: tuple[tuple[Condition, frozenset[str]], ...] = (
    ("thunderstorm", frozenset({"TS"})),
    ("rain", frozenset({"RA", "DZ"})),
    ("snow", frozenset({"SN", "SG"})),
    ("hail", frozenset({"PL", "GR", "GS"})),
    ("fog", frozenset({"FG"})),
    ("mist", frozenset({"BR", "HZ", "FU", "DU", "SA"})),
)


def report_body(report: str) -> list[str]:
    """Groups of a report after the station identifier and before remarks."""
    tokens = report.split()
    while tokens and tokens[0] in _REPORT_TYPES:
        tokens = tokens[1:]
    body = tokens[1:]
    if "RMK" in body:
        body = body[: body.index("RMK")]
    return body


def parse_metar_temperature_f(report: str) -> int:
    """Extract the air temperature from the ``TT/DD`` group, in Fahrenheit."""
    for group in report_body(report):
        match = _TEMP_PAIR_RE.match(group)
        if match is None:
            continue
        celsius = int(match.group(2))
        if match.group(1) == "M":
            celsius = -celsius
        return celsius_to_fahrenheit(celsius)
    raise UnparsableReport(f"No temperature/dew point group in METAR: {report!r}")


def _weather_codes(groups: list[str]) -> set[str]:
    codes: set[str] = set()
    for group in groups:
        match = _WEATHER_GROUP_RE.match(group)
        if match is None or not match.group(1):
            continue
        letters = match.group(1)
        codes.update(letters[i : i + 2] for i in range(0, len(letters), 2))
    return codes


def metar_condition(report: str) -> Condition:
    """Map METAR weather and sky groups to a condition word."""
    groups = report_body(report)
    codes = _weather_codes(groups)
    for condition, markers in _CONDITION_PRIORITY:
        if codes & markers:
            return condition

    cover = {m.group(1) for m in map(_CLOUD_GROUP_RE.match, groups) if m is not None}
    if cover & {"OVC", "BKN", "SCT"}:
        return "cloudy"
    # FEW and the clear-sky groups both read as clear, as does no match at all.
    return "clear"


class MetarProvider(HttpSource, WeatherProvider):
    """Fetches the latest METAR for a station and normalizes it."""

    provider_name = "metar"

    def fetch_observation(self, query: LocationQuery) -> Observation:
        report = self.fetch_raw_report(query.normalized)
        return Observation(
            temperature_fahrenheit=parse_metar_temperature_f(report),
            condition=metar_condition(report),
            provider=self.provider_name,
        )

    def fetch_raw_report(self, station: str) -> str:
        """Return the raw report line, trying the secondary source once."""
        icao = station.strip().upper()
        if not _STATION_RE.fullmatch(icao):
            raise NoReport(f"{station!r} is not a METAR station identifier.")

        text = self._request_text(
            self.settings.metar_primary_url,
            context="METAR primary fetch",
            params={"ids": icao, "format": "raw", "hours": 0, "taf": "false"},
        )
        lines = _non_empty_lines(text)
        if lines:
            return lines[0]

        self.logger.info("Primary METAR source empty for %s; trying secondary", icao)
        text = self._request_text(
            self.settings.metar_secondary_url_template.format(icao=icao),
            context="METAR secondary fetch",
        )
        lines = _non_empty_lines(text)
        if lines:
            # The NWS station file starts with a timestamp line.
            return lines[-1]
        raise NoReport(f"No METAR available for {icao}.")


def _non_empty_lines(text: str | None) -> list[str]:
    if text is None:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]
