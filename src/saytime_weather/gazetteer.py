"""Static coordinates for curated remote and special locations."""

from __future__ import annotations

import re
from types import MappingProxyType

from .exceptions import LocationNotFound
from .models import Coordinates

_WHITESPACE_RE = re.compile(r"\s+")

_SPECIAL_LOCATIONS: dict[str, tuple[float, float]] = {
    # Antarctica
    "SOUTHPOLE": (-90.0, 0.0),
    "MCMURDO": (-77.85, 166.67),
    "PALMER": (-64.77, -64.05),
    "VOSTOK": (-78.46, 106.84),
    "CASEY": (-66.28, 110.53),
    "MAWSON": (-67.60, 62.87),
    "DAVIS": (-68.58, 77.97),
    "SCOTTBASE": (-77.85, 166.76),
    "SYOWA": (-69.00, 39.58),
    "CONCORDIA": (-75.10, 123.33),
    "HALLEY": (-75.58, -26.66),
    "DUMONT": (-66.66, 140.01),
    "SANAE": (-71.67, -2.84),
    # Arctic
    "ALERT": (82.50, -62.35),
    "EUREKA": (79.99, -85.93),
    "THULE": (76.53, -68.70),
    "LONGYEARBYEN": (78.22, 15.65),
    "BARROW": (71.29, -156.79),
    "RESOLUTE": (74.72, -94.83),
    "GRISE": (76.42, -82.90),
    # DXpedition islands
    "ASCENSION": (-7.95, -14.36),
    "STHELENA": (-15.97, -5.72),
    "TRISTAN": (-37.11, -12.28),
    "BOUVET": (-54.42, 3.38),
    "HEARD": (-53.10, 73.51),
    "KERGUELEN": (-49.35, 70.22),
    "CROZET": (-46.43, 51.86),
    "AMSTERDAM": (-37.83, 77.57),
    "MACQUARIE": (-54.62, 158.86),
    # Pacific
    "MIDWAY": (28.21, -177.38),
    "WAKE": (19.28, 166.65),
    "JOHNSTON": (16.73, -169.53),
    "PALMYRA": (5.89, -162.08),
    "JARVIS": (-0.37, -159.99),
    "HOWLAND": (0.81, -176.62),
    "BAKER": (0.19, -176.48),
    "KINGMAN": (6.38, -162.42),
    # Indian Ocean
    "DIEGO": (-7.26, 72.40),
    "CHAGOS": (-7.26, 72.40),
    "COCOS": (-12.19, 96.83),
    "CHRISTMAS": (-10.49, 105.62),
    # South Atlantic
    "FALKLANDS": (-51.70, -59.52),
    "SOUTHGEORGIA": (-54.28, -36.51),
    "SOUTHSANDWICH": (-59.43, -26.35),
    # Polynesia and eastern Pacific
    "MARQUESAS": (-9.00, -140.00),
    "EASTER": (-27.11, -109.36),
    "PITCAIRN": (-25.07, -130.10),
    "CLIPPERTON": (10.30, -109.22),
    "GALAPAGOS": (-0.95, -90.97),
    # Observatories
    "MAUNA": (19.54, -155.58),
    "JUNGFRAUJOCH": (46.55, 7.98),
    # Deserts
    "MCMURDODRY": (-77.85, 163.00),
    "ATACAMA": (-24.50, -69.25),
    # Other remote islands
    "GOUGH": (-40.35, -9.88),
    "MARION": (-46.88, 37.86),
    "PRINCE": (-46.77, 37.86),
    "CAMPBELL": (-52.55, 169.15),
    "AUCKLAND": (-50.73, 166.09),
    "KERMADEC": (-29.25, -177.92),
    "CHATHAM": (-43.95, -176.55),
}

SPECIAL_LOCATIONS = MappingProxyType(
    {
        name: Coordinates(latitude=lat, longitude=lon)
        for name, (lat, lon) in _SPECIAL_LOCATIONS.items()
    }
)


def special_key(token: str) -> str:
    """Gazetteer key form: uppercase with all whitespace removed."""
    return _WHITESPACE_RE.sub("", token).upper()


def is_special_location(token: str) -> bool:
    return special_key(token) in SPECIAL_LOCATIONS


def lookup_special(token: str) -> Coordinates:
    """Return fixed coordinates for a special-location token."""
    try:
        return SPECIAL_LOCATIONS[special_key(token)]
    except KeyError:
        raise LocationNotFound(f"Unknown special location: {token!r}") from None
