"""Weather provider integrations."""

from .base import WeatherProvider
from .metar import MetarProvider, metar_condition, parse_metar_temperature_f
from .openmeteo import OpenMeteoProvider, openmeteo_condition

__all__ = [
    "MetarProvider",
    "OpenMeteoProvider",
    "WeatherProvider",
    "metar_condition",
    "openmeteo_condition",
    "parse_metar_temperature_f",
]
