"""Open-Meteo provider: current conditions for arbitrary coordinates."""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Any

from ..config import Settings
from ..exceptions import NoForecastData
from ..gazetteer import lookup_special
from ..geocoding import NominatimGeocoder
from ..http import HttpSource
from ..models import Condition, Coordinates, LocationQuery, Observation
from .base import WeatherProvider

_MAINLY_CLEAR_CODES = frozenset({1, 2})

WEATHER_CODE_CONDITIONS: MappingProxyType[int, Condition] = MappingProxyType(
    {
        0: "clear",
        3: "cloudy",
        45: "fog",
        48: "fog",
        **{code: "rain" for code in (51, 53, 55, 56, 57)},
        **{code: "rain" for code in (61, 63, 65, 66, 67, 80, 81, 82)},
        **{code: "snow" for code in (71, 73, 75, 77, 85, 86)},
        **{code: "thunderstorm" for code in (95, 96, 99)},
    }
)


def openmeteo_condition(code: int, is_day: bool = True) -> Condition:
    """Map a WMO weather code to a condition word.

    Codes 1-2 ("mainly clear") read as sunny by day and clear at night; every
    other code ignores the time of day. Unknown codes map to clear.
    """
    if code in _MAINLY_CLEAR_CODES:
        return "sunny" if is_day else "clear"
    return WEATHER_CODE_CONDITIONS.get(code, "clear")


class OpenMeteoProvider(HttpSource, WeatherProvider):
    """Resolves coordinates for a query and reads Open-Meteo current data."""

    provider_name = "openmeteo"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        geocoder: NominatimGeocoder,
    ) -> None:
        super().__init__(settings, logger)
        self.geocoder = geocoder

    def fetch_observation(self, query: LocationQuery) -> Observation:
        coords = self.coordinates_for(query)
        return self.fetch_current(coords)

    def coordinates_for(self, query: LocationQuery) -> Coordinates:
        if query.category == "special":
            return lookup_special(query.normalized)
        return self.geocoder.resolve(query.normalized, self.settings.default_country)

    def fetch_current(self, coords: Coordinates) -> Observation:
        payload = self._request_json(
            self.settings.forecast_url,
            context="Open-Meteo forecast fetch",
            params={
                "latitude": coords.latitude,
                "longitude": coords.longitude,
                "current": "temperature_2m,weather_code,is_day",
                "temperature_unit": "fahrenheit",
                "timezone": "auto",
            },
        )
        return self.normalize_current(payload)

    def normalize_current(self, payload: Any) -> Observation:
        """Build an Observation from a forecast response body."""
        if not isinstance(payload, dict):
            raise NoForecastData("Open-Meteo returned no forecast object.")
        current = payload.get("current")
        if not isinstance(current, dict):
            current = payload

        temperature = self._as_float(current.get("temperature_2m"))
        if temperature is None:
            raise NoForecastData("Open-Meteo response missing 'temperature_2m'.")

        code = self._as_int(current.get("weather_code"))
        is_day = self._as_int(current.get("is_day"))
        condition = openmeteo_condition(
            code if code is not None else 0,
            is_day=is_day != 0,
        )
        return Observation(
            temperature_fahrenheit=round(temperature),
            condition=condition,
            provider=self.provider_name,
        )

    @staticmethod
    def _as_float(value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)) and math.isfinite(value):
            return float(value)
        return None

    @staticmethod
    def _as_int(value: Any) -> int | None:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return None
