"""Typed settings loader: built-in defaults, environment, INI file, CLI overrides."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError
from .models import ProviderPreference

logger = logging.getLogger("saytime_weather.config")

DEFAULT_CONFIG_PATHS: list[Path] = [
    Path("/etc/asterisk/local/weather.ini"),
    Path("/etc/asterisk/weather.ini"),
    Path("/usr/local/etc/weather.ini"),
    Path.home() / ".weather.ini",
]

# INI key (lowercased) -> Settings field.
CONFIG_FILE_KEYS = {
    "temperature_mode": "temperature_mode",
    "process_condition": "process_condition",
    "default_country": "default_country",
    "default_provider": "provider_preference",
}

_FALSE_WORDS = {"NO", "FALSE", "0", "OFF"}

DEFAULT_CONFIG_TEMPLATE = """\
; ============================================================================
; Weather Configuration for saytime-weather
; ============================================================================
; This file controls how weather data is fetched and announced.
; All settings have sensible defaults - no changes required to get started!
; ============================================================================

[weather]

; Temperature display mode: F for Fahrenheit, C for Celsius
; Default: F
Temperature_mode = F

; Process and announce weather conditions (cloudy, rain, clear, etc.)
; Set to NO to only announce temperature
; Default: YES
process_condition = YES

; Default country for ambiguous postal code lookups
; Use ISO 3166-1 alpha-2 country codes: us, ca, de, fr, uk, etc.
; Default: us
default_country = us

; Weather data provider: auto, metar, or openmeteo
; Default: auto (tries best source automatically)
DEFAULT_PROVIDER = auto

; ============================================================================
; USAGE EXAMPLES
; ============================================================================
;
; Test weather for your location:
;   resolve KJFK v          # JFK Airport
;   resolve 90210 v         # Beverly Hills, CA
;   resolve M5H2N2 v        # Toronto, ON
;   resolve ALERT v         # Alert, Nunavut
;
; With options:
;   resolve -d fr 75001     # Paris with French lookup
;   resolve -t C KJFK       # JFK in Celsius
;
; ============================================================================
"""


class Settings(BaseSettings):
    """Per-invocation settings; read-only once constructed."""

    model_config = SettingsConfigDict(
        env_prefix="SAYTIME_WEATHER_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    temperature_mode: Literal["F", "C"] = "F"
    process_condition: bool = True
    default_country: str = "us"
    provider_preference: ProviderPreference = "auto"

    config_path: Path | None = None

    http_timeout_seconds: float = Field(default=15.0, gt=0)
    user_agent: str = Field(
        default="saytime-weather/0.1 (+https://github.com/KD5FMU/Time-Weather-Announce)",
        min_length=1,
    )
    metar_primary_url: str = "https://aviationweather.gov/api/data/metar"
    metar_secondary_url_template: str = (
        "https://tgftp.nws.noaa.gov/data/observations/metar/stations/{icao}.TXT"
    )
    geocode_url: str = "https://nominatim.openstreetmap.org/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    geocode_rate_limit_seconds: float = Field(default=1.0, ge=0)

    output_dir: Path = Path("/tmp")
    sound_dirs: list[Path] = Field(
        default_factory=lambda: [
            Path("/usr/share/asterisk/sounds/en/wx"),
            Path("/var/lib/asterisk/sounds"),
            Path("/usr/share/asterisk/sounds/en"),
        ]
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("temperature_mode", mode="before")
    @classmethod
    def coerce_temperature_mode(cls, value: Any) -> str:
        """Unknown temperature modes fall back to Fahrenheit."""
        text = str(value).strip().upper() if value is not None else ""
        return text if text in {"F", "C"} else "F"

    @field_validator("process_condition", mode="before")
    @classmethod
    def coerce_process_condition(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().upper() if value is not None else ""
        # Anything that is not an explicit "off" keeps the default.
        return text not in _FALSE_WORDS

    @field_validator("default_country", mode="before")
    @classmethod
    def coerce_default_country(cls, value: Any) -> str:
        text = str(value).strip().lower() if value is not None else ""
        return text if len(text) == 2 and text.isalpha() else "us"

    @field_validator("provider_preference", mode="before")
    @classmethod
    def coerce_provider_preference(cls, value: Any) -> str:
        text = str(value).strip().lower() if value is not None else ""
        return text if text in {"auto", "metar", "openmeteo"} else "auto"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def condition_path(self) -> Path:
        return self.output_dir / "condition.gsm"

    @property
    def temperature_path(self) -> Path:
        return self.output_dir / "temperature"

    def safe_summary(self) -> dict[str, Any]:
        """Return the user-facing part of the config for logging."""
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "temperature_mode": self.temperature_mode,
            "process_condition": self.process_condition,
            "default_country": self.default_country,
            "provider_preference": self.provider_preference,
            "output_dir": str(self.output_dir),
        }


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1].strip()
    return value


def read_config_file(path: Path) -> dict[str, str]:
    """Parse an INI-like weather config; the section header is optional."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed reading config file {path}: {exc}") from exc

    if not any(line.lstrip().startswith("[") for line in text.splitlines()):
        text = "[weather]\n" + text

    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        inline_comment_prefixes=(";", "#"),
    )
    try:
        parser.read_string(text, source=str(path))
    except configparser.ParsingError as exc:
        # Well-formed lines are still loaded; bad lines are skipped.
        logger.warning("Skipping unparseable lines in %s: %s", path, exc)
    except configparser.Error as exc:
        logger.warning("Ignoring malformed config file %s: %s", path, exc)
        return {}

    values: dict[str, str] = {}
    for section in parser.sections():
        for key, raw_value in parser.items(section):
            field = CONFIG_FILE_KEYS.get(key.strip().lower())
            if field is not None and field not in values:
                values[field] = _strip_quotes(raw_value)
    return values


def write_default_config(candidates: list[Path]) -> Path | None:
    """Write the default config at the first writable candidate path."""
    for candidate in candidates:
        try:
            candidate.parent.mkdir(parents=True, exist_ok=True)
            candidate.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
            candidate.chmod(0o644)
        except OSError as exc:
            logger.debug("Cannot create default config at %s: %s", candidate, exc)
            continue
        logger.info("Created default config file at %s", candidate)
        return candidate
    return None


def locate_config_file(
    config_file: Path | None = None,
    search_paths: list[Path] | None = None,
) -> Path | None:
    """Return the config file to use, creating a default one when none exists."""
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"Custom config file not found: {config_file}")
        return config_file

    candidates = search_paths if search_paths is not None else DEFAULT_CONFIG_PATHS
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return write_default_config(candidates)


def load_settings(
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
    search_paths: list[Path] | None = None,
) -> Settings:
    """Merge defaults, environment, config file and CLI overrides into Settings."""
    path = locate_config_file(config_file, search_paths)
    values: dict[str, Any] = read_config_file(path) if path is not None else {}
    values.update({key: value for key, value in (overrides or {}).items() if value is not None})
    values["config_path"] = path
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
