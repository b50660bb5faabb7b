"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import LocationQuery, Observation, ProviderName


class WeatherProvider(ABC):
    """Base contract for providers consulted by the resolver."""

    provider_name: ProviderName

    @abstractmethod
    def fetch_observation(self, query: LocationQuery) -> Observation:
        """Fetch and normalize the current observation for ``query``.

        Raises a WeatherProviderError subclass when nothing usable came back.
        """

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
