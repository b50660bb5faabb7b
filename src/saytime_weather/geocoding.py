"""Postal-code geocoding via Nominatim, with a Canadian FSA-to-city fallback."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from types import MappingProxyType
from typing import Any, Literal

from pydantic import ValidationError

from .config import Settings
from .exceptions import GeocodeUnavailable
from .http import HttpSource
from .models import Coordinates

PostalFormat = Literal["numeric", "canadian", "generic"]

_NUMERIC_RE = re.compile(r"^[0-9]{5}$")
# Both separator forms are accepted: none at all, or any single character.
_CANADIAN_COMPACT_RE = re.compile(r"^([A-Z][0-9][A-Z])([0-9][A-Z][0-9])$")
_CANADIAN_SEPARATED_RE = re.compile(r"^([A-Z][0-9][A-Z]).([0-9][A-Z][0-9])$")
_FSA_PREFIX_RE = re.compile(r"^[A-Z][0-9][A-Z]")


def _expand(city: str, *fsas: str) -> dict[str, str]:
    return {fsa: city for fsa in fsas}


# Ontario FSAs mapped precisely; everything else falls back on the first letter.
FSA_CITIES = MappingProxyType(
    {
        **_expand("Chatham-Kent, Ontario", "N7L"),
        **_expand("Sarnia, Ontario", "N7M", "N7T"),
        **_expand(
            "London, Ontario", "N6A", "N6B", "N6C", "N6E", "N6G", "N6H", "N6J", "N6K"
        ),
        **_expand(
            "Windsor, Ontario",
            "N8A", "N8H", "N8N", "N8P", "N8R", "N8S", "N8T", "N8V", "N8W", "N8X", "N8Y",
            "N9A", "N9B", "N9C", "N9E", "N9G", "N9H", "N9J", "N9K", "N9Y",
        ),
        **_expand("Guelph, Ontario", "N1G", "N1H", "N1K", "N1L"),
        **_expand("Cambridge, Ontario", "N3C", "N3E", "N3H"),
        **_expand(
            "Kitchener, Ontario",
            "N2C", "N2E", "N2G", "N2H", "N2J", "N2K", "N2L", "N2M", "N2N", "N2P", "N2R",
        ),
    }
)

FSA_LETTER_CITIES = MappingProxyType(
    {
        "M": "Toronto, Ontario",
        "V": "Vancouver, British Columbia",
        "H": "Montreal, Quebec",
        "T": "Calgary, Alberta",
        "R": "Winnipeg, Manitoba",
        "K": "Ottawa, Ontario",
        "L": "Mississauga, Ontario",
        "N": "London, Ontario",
        "P": "Thunder Bay, Ontario",
        "S": "Regina, Saskatchewan",
        "E": "Moncton, New Brunswick",
        "B": "Halifax, Nova Scotia",
    }
)


def classify_postal(token: str) -> PostalFormat:
    candidate = token.strip().upper()
    if _NUMERIC_RE.fullmatch(candidate):
        return "numeric"
    if _CANADIAN_COMPACT_RE.fullmatch(candidate) or _CANADIAN_SEPARATED_RE.fullmatch(candidate):
        return "canadian"
    return "generic"


def canonical_canadian(token: str) -> str:
    """Normalize a Canadian postal code to ``A1A 1A1`` spacing."""
    candidate = token.strip().upper()
    match = _CANADIAN_COMPACT_RE.fullmatch(candidate) or _CANADIAN_SEPARATED_RE.fullmatch(
        candidate
    )
    if match is None:
        raise ValueError(f"Not a Canadian postal code: {token!r}")
    return f"{match.group(1)} {match.group(2)}"


def city_for_fsa(token: str) -> str | None:
    """Approximate city for the Forward Sortation Area leading ``token``."""
    candidate = token.strip().upper()
    if not _FSA_PREFIX_RE.match(candidate):
        return None
    fsa = candidate[:3]
    return FSA_CITIES.get(fsa) or FSA_LETTER_CITIES.get(fsa[0])


class NominatimGeocoder(HttpSource):
    """Resolve postal/ZIP codes to coordinates."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(settings, logger)
        self._sleep = sleep

    def resolve(self, postal: str, default_country: str | None = None) -> Coordinates:
        """Return coordinates for ``postal`` or raise GeocodeUnavailable."""
        country = (default_country or self.settings.default_country).lower()
        postal_format = classify_postal(postal)

        params: dict[str, Any] = {"format": "json", "limit": 1}
        if postal_format == "numeric":
            params.update(postalcode=postal.strip(), country=country)
        elif postal_format == "canadian":
            params.update(postalcode=canonical_canadian(postal), country="ca")
        else:
            params.update(postalcode=postal.strip())

        coords = self._search(params, context=f"Postal geocode ({postal_format})")
        if coords is not None:
            return coords

        city = city_for_fsa(postal)
        if city is not None:
            self.logger.info("Postal lookup for %s failed; trying FSA city %s", postal, city)
            # Nominatim allows one request per second.
            self._sleep(self.settings.geocode_rate_limit_seconds)
            coords = self._search(
                {"q": city, "format": "json", "limit": 1}, context="FSA city geocode"
            )
            if coords is not None:
                return coords

        raise GeocodeUnavailable(f"No coordinates found for postal code {postal!r}")

    def _search(self, params: dict[str, Any], context: str) -> Coordinates | None:
        payload = self._request_json(self.settings.geocode_url, context=context, params=params)
        return self._first_coordinates(payload)

    @staticmethod
    def _first_coordinates(payload: Any) -> Coordinates | None:
        if not isinstance(payload, list) or not payload:
            return None
        first = payload[0]
        if not isinstance(first, dict):
            return None
        lat = first.get("lat")
        lon = first.get("lon")
        if lat in (None, "") or lon in (None, ""):
            return None
        try:
            return Coordinates(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError, ValidationError):
            return None
