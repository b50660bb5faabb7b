"""Typed models shared by the classifier, providers and output writer."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LocationCategory = Literal["icao", "special", "postal"]
ProviderName = Literal["metar", "openmeteo"]
ProviderPreference = Literal["auto", "metar", "openmeteo"]
Condition = Literal[
    "clear",
    "sunny",
    "cloudy",
    "rain",
    "snow",
    "hail",
    "fog",
    "mist",
    "thunderstorm",
]


def fahrenheit_to_celsius(fahrenheit: float) -> int:
    """Convert Fahrenheit to whole-degree Celsius."""
    return round((fahrenheit - 32) * 5 / 9)


def celsius_to_fahrenheit(celsius: float) -> int:
    """Convert Celsius to whole-degree Fahrenheit."""
    return round(celsius * 9 / 5 + 32)


class LocationQuery(BaseModel):
    """A classified location token."""

    model_config = ConfigDict(frozen=True)

    raw: str = Field(description="Token exactly as supplied on the command line")
    category: LocationCategory
    normalized: str = Field(description="Uppercase form used for lookups")


class Coordinates(BaseModel):
    """Signed decimal-degree coordinates."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class Observation(BaseModel):
    """Canonical provider-independent weather result."""

    model_config = ConfigDict(frozen=True)

    temperature_fahrenheit: int
    condition: Condition
    provider: ProviderName | None = None

    @property
    def temperature_celsius(self) -> int:
        return fahrenheit_to_celsius(self.temperature_fahrenheit)
