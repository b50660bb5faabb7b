"""METAR fetching, temperature parsing and condition mapping."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from saytime_weather.classifier import classify_location
from saytime_weather.config import Settings
from saytime_weather.exceptions import NoReport, UnparsableReport
from saytime_weather.weather.metar import (
    MetarProvider,
    metar_condition,
    parse_metar_temperature_f,
)


def _make_provider() -> MetarProvider:
    return MetarProvider(settings=Settings(), logger=logging.getLogger("test_metar"))


@pytest.mark.parametrize(
    ("report", "expected"),
    [
        ("KJFK 191551Z 31012KT 10SM FEW250 21/16 A3012", 70),
        ("CYYZ 191600Z 27010KT 15SM BKN040 M05/M12 A3002", 23),
        ("NZSP 191550Z 09008KT 9999 SKC M52/M57 Q0675", -62),
        ("EGLL 191550Z 24008KT 9999 FEW030 00/M02 Q1015", 32),
        ("KDEN 191553Z 00000KT 10SM CLR 08/ A3010", 46),
        ("METAR KORD 191551Z 18010KT 10SM SCT035 15/10 A2995", 59),
    ],
)
def test_parse_temperature(report: str, expected: int) -> None:
    assert parse_metar_temperature_f(report) == expected


def test_parse_temperature_ignores_remarks_and_runway_groups() -> None:
    report = "KBOS 191554Z 05008KT 1/2SM R04R/2400FT BR OVC003 12/11 A2990 RMK T01220111"
    assert parse_metar_temperature_f(report) == 54


def test_missing_temperature_group_is_unparsable() -> None:
    with pytest.raises(UnparsableReport):
        parse_metar_temperature_f("KJFK 191551Z 31012KT 10SM FEW250 A3012")


@pytest.mark.parametrize(
    ("report", "expected"),
    [
        ("KJFK 191551Z 31012KT 10SM +TSRA BKN020CB 24/22 A2990", "thunderstorm"),
        ("KJFK 191551Z 31012KT 2SM -RA VCTS OVC010 18/17 A2990", "thunderstorm"),
        ("KJFK 191551Z 31012KT 3SM FZRA OVC010 M01/M02 A2990", "rain"),
        ("KJFK 191551Z 31012KT 5SM -SHRA BKN030 15/12 A2990", "rain"),
        ("KJFK 191551Z 31012KT 5SM -DZ OVC008 10/09 A2990", "rain"),
        ("KJFK 191551Z 31012KT 1SM RASN OVC008 01/00 A2990", "rain"),
        ("CYYZ 191600Z 27010KT 1SM -SN OVC015 M05/M07 A3002", "snow"),
        ("CYYZ 191600Z 27010KT 3SM PL OVC015 M01/M03 A3002", "hail"),
        ("KSFO 191556Z 00000KT 1/4SM FG VV002 12/12 A3001", "fog"),
        ("KLAX 191553Z 25005KT 4SM HZ SCT010 19/14 A2992", "mist"),
        ("KBOS 191554Z 05008KT 5SM BR OVC003 12/11 A2990", "mist"),
        ("EGLL 191550Z 24008KT 9999 BKN030 14/08 Q1015", "cloudy"),
        ("EGLL 191550Z 24008KT 9999 SCT030 14/08 Q1015", "cloudy"),
        ("EGLL 191550Z 24008KT 9999 FEW030 14/08 Q1015", "clear"),
        ("KDEN 191553Z 00000KT 10SM CLR 08/M05 A3010", "clear"),
        ("EGLL 191550Z 24008KT CAVOK 14/08 Q1015", "clear"),
        ("KJFK ... 21/16 ...", "clear"),
    ],
)
def test_condition_mapping(report: str, expected: str) -> None:
    assert metar_condition(report) == expected


def test_thunderstorm_beats_rain_regardless_of_order() -> None:
    assert metar_condition("KJFK 191551Z 31012KT -RA TS OVC010 18/17 A2990") == "thunderstorm"


def test_station_identifier_and_remarks_do_not_trigger_markers() -> None:
    # KSAN contains "SA"; the remarks mention rain that ended.
    report = "KSAN 191551Z 28008KT 10SM FEW020 20/14 A2998 RMK AO2 RAE45 SLP150"
    assert metar_condition(report) == "clear"


def test_fetch_observation_uses_primary_source() -> None:
    provider = _make_provider()
    calls: list[str] = []

    def _fake_request(url: str, context: str, params: dict[str, Any] | None = None) -> str:
        calls.append(url)
        return "KJFK 191551Z 31012KT 10SM FEW250 21/16 A3012\n"

    provider._request_text = _fake_request  # type: ignore[assignment]
    observation = provider.fetch_observation(classify_location("kjfk"))

    assert observation.temperature_fahrenheit == 70
    assert observation.condition == "clear"
    assert observation.provider == "metar"
    assert calls == ["https://aviationweather.gov/api/data/metar"]


def test_fetch_falls_back_to_secondary_and_takes_last_line() -> None:
    provider = _make_provider()
    calls: list[str] = []

    def _fake_request(url: str, context: str, params: dict[str, Any] | None = None) -> str | None:
        calls.append(url)
        if "aviationweather" in url:
            return None
        return "2026/10/19 15:51\nKJFK 191551Z 31012KT 10SM -RA OVC020 12/10 A3012\n"

    provider._request_text = _fake_request  # type: ignore[assignment]
    observation = provider.fetch_observation(classify_location("KJFK"))

    assert observation.condition == "rain"
    assert observation.temperature_fahrenheit == 54
    assert calls[1] == "https://tgftp.nws.noaa.gov/data/observations/metar/stations/KJFK.TXT"


def test_both_sources_empty_raises_no_report() -> None:
    provider = _make_provider()
    provider._request_text = (  # type: ignore[assignment]
        lambda url, context, params=None: "  \n"
    )
    with pytest.raises(NoReport):
        provider.fetch_raw_report("KJFK")


def test_non_station_tokens_make_no_requests() -> None:
    provider = _make_provider()
    calls: list[str] = []

    def _fake_request(url: str, context: str, params: dict[str, Any] | None = None) -> str:
        calls.append(url)
        return ""

    provider._request_text = _fake_request  # type: ignore[assignment]
    with pytest.raises(NoReport):
        provider.fetch_observation(classify_location("90210"))
    assert calls == []


def test_report_without_temperature_is_unparsable() -> None:
    provider = _make_provider()
    provider._request_text = (  # type: ignore[assignment]
        lambda url, context, params=None: "KJFK 191551Z 31012KT 10SM FEW250 A3012"
    )
    with pytest.raises(UnparsableReport):
        provider.fetch_observation(classify_location("KJFK"))


def test_server_error_on_primary_falls_through_to_secondary(monkeypatch: Any) -> None:
    provider = _make_provider()

    def _fake_get(url: str, params: Any = None) -> httpx.Response:
        request = httpx.Request("GET", url)
        if "aviationweather" in url:
            return httpx.Response(503, text="unavailable", request=request)
        return httpx.Response(
            200,
            text="2026/10/19 15:51\nEGLL 191550Z 24008KT 9999 SCT030 14/08 Q1015\n",
            request=request,
        )

    monkeypatch.setattr(provider._client, "get", _fake_get)
    assert provider.fetch_raw_report("EGLL").startswith("EGLL 191550Z")
