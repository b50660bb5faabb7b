"""Location classification and gazetteer lookups."""

from __future__ import annotations

import pytest

from saytime_weather.classifier import classify_location, is_icao_code
from saytime_weather.exceptions import LocationNotFound, UsageError
from saytime_weather.gazetteer import SPECIAL_LOCATIONS, lookup_special


@pytest.mark.parametrize("token", ["KJFK", "egll", "CyYz", "NZSP", "WAKE"])
def test_four_letter_tokens_are_icao(token: str) -> None:
    query = classify_location(token)
    assert query.category == "icao"
    assert query.normalized == token.upper()


def test_icao_rule_shadows_four_letter_gazetteer_alias() -> None:
    assert "WAKE" in SPECIAL_LOCATIONS
    assert classify_location("wake").category == "icao"


@pytest.mark.parametrize("token", ["SOUTHPOLE", "southpole", "South Pole", "st helena"])
def test_gazetteer_tokens_are_special(token: str) -> None:
    query = classify_location(token)
    assert query.category == "special"
    assert query.normalized in SPECIAL_LOCATIONS


@pytest.mark.parametrize("token", ["90210", "M5H2N2", "m5h 2n2", "ZZZZ99", "KJF", "SW1A1AA"])
def test_everything_else_is_postal(token: str) -> None:
    query = classify_location(token)
    assert query.category == "postal"
    assert query.raw == token


@pytest.mark.parametrize(
    ("token", "category", "normalized"),
    [
        (" kjfk ", "icao", "KJFK"),
        ("\tEGLL\n", "icao", "EGLL"),
        ("  southpole ", "special", "SOUTHPOLE"),
        (" 90210 ", "postal", "90210"),
    ],
)
def test_surrounding_whitespace_does_not_change_category(
    token: str, category: str, normalized: str
) -> None:
    query = classify_location(token)
    assert query.category == category
    assert query.normalized == normalized
    assert query.raw == token


@pytest.mark.parametrize("token", ["", "   ", None])
def test_empty_location_is_usage_error(token: str | None) -> None:
    with pytest.raises(UsageError):
        classify_location(token)


def test_icao_requires_exactly_four_letters() -> None:
    assert is_icao_code("kjfk")
    assert not is_icao_code("KJF1")
    assert not is_icao_code("KJFKX")
    assert not is_icao_code(" KJFK")


def test_every_gazetteer_entry_round_trips_through_lookup() -> None:
    for name, coords in SPECIAL_LOCATIONS.items():
        assert classify_location(name).category in {"special", "icao"}
        assert lookup_special(name) == coords
        assert lookup_special(name.lower()) == coords


def test_gazetteer_matches_static_table() -> None:
    assert len(SPECIAL_LOCATIONS) >= 50
    south_pole = lookup_special("SOUTHPOLE")
    assert (south_pole.latitude, south_pole.longitude) == (-90.0, 0.0)
    alert = lookup_special("ALERT")
    assert (alert.latitude, alert.longitude) == (82.50, -62.35)
    easter = lookup_special("easter")
    assert (easter.latitude, easter.longitude) == (-27.11, -109.36)


def test_gazetteer_miss_raises_location_not_found() -> None:
    with pytest.raises(LocationNotFound, match="ATLANTIS"):
        lookup_special("ATLANTIS")


def test_gazetteer_is_read_only() -> None:
    with pytest.raises(TypeError):
        SPECIAL_LOCATIONS["NEWPLACE"] = SPECIAL_LOCATIONS["ALERT"]  # type: ignore[index]
