"""Provider fallback: pick the attempt order and return the first good observation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .exceptions import NoReport, WeatherProviderError
from .models import (
    LocationCategory,
    LocationQuery,
    Observation,
    ProviderName,
    ProviderPreference,
)
from .weather.base import WeatherProvider

# (category, preference) -> providers to try, in order.
PROVIDER_ORDER = MappingProxyType(
    {
        ("icao", "openmeteo"): ("openmeteo", "metar"),
        ("icao", "metar"): ("metar", "openmeteo"),
        ("icao", "auto"): ("metar", "openmeteo"),
        ("special", "openmeteo"): ("openmeteo",),
        ("special", "metar"): ("openmeteo",),
        ("special", "auto"): ("openmeteo",),
        ("postal", "openmeteo"): ("openmeteo", "metar"),
        ("postal", "metar"): ("metar", "openmeteo"),
        ("postal", "auto"): ("openmeteo", "metar"),
    }
)


def provider_order(
    category: LocationCategory, preference: ProviderPreference
) -> tuple[ProviderName, ...]:
    """Ordered provider names for a location category and configured preference."""
    try:
        return PROVIDER_ORDER[(category, preference)]
    except KeyError:
        return PROVIDER_ORDER[(category, "auto")]


class ObservationResolver:
    """Tries providers strictly in order and stops at the first observation."""

    def __init__(
        self,
        providers: Mapping[ProviderName, WeatherProvider],
        preference: ProviderPreference = "auto",
        logger: logging.Logger | None = None,
    ) -> None:
        self.providers = providers
        self.preference = preference
        self.logger = logger or logging.getLogger("saytime_weather.resolver")

    def resolve(self, query: LocationQuery) -> Observation:
        """Return the first provider observation, or raise NoReport."""
        attempted: list[str] = []
        for name in provider_order(query.category, self.preference):
            context = {"location": query.normalized, "category": query.category, "provider": name}
            provider = self.providers.get(name)
            if provider is None:
                self.logger.warning("Provider %s is not configured; skipping", name, extra=context)
                continue
            attempted.append(name)
            try:
                observation = provider.fetch_observation(query)
            except WeatherProviderError as exc:
                self.logger.info(
                    "Provider %s failed for %s: %s", name, query.normalized, exc, extra=context
                )
                continue
            self.logger.info(
                "Resolved %s via %s: %d F, %s",
                query.normalized,
                name,
                observation.temperature_fahrenheit,
                observation.condition,
                extra=context,
            )
            return observation

        raise NoReport(
            f"No provider returned a report for {query.raw!r} "
            f"(tried: {', '.join(attempted) or 'none'})."
        )
