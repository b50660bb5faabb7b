"""Classify a raw location token as ICAO, special location or postal code."""

from __future__ import annotations

import re

from .exceptions import UsageError
from .gazetteer import is_special_location, special_key
from .models import LocationQuery

_ICAO_RE = re.compile(r"^[A-Z]{4}$")


def is_icao_code(token: str) -> bool:
    return bool(_ICAO_RE.fullmatch(token.upper()))


def classify_location(raw: str | None) -> LocationQuery:
    """Categorize a location token.

    The ICAO rule runs first, so a four-letter gazetteer alias is always
    treated as an airport code.
    """
    token = raw.strip() if raw is not None else ""
    if not token:
        raise UsageError("A location_id is required (postal code, ICAO code or special location).")

    if is_icao_code(token):
        return LocationQuery(raw=raw, category="icao", normalized=token.upper())
    if is_special_location(token):
        return LocationQuery(raw=raw, category="special", normalized=special_key(token))
    return LocationQuery(raw=raw, category="postal", normalized=token.upper())
