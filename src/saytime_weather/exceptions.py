"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or a requested config file is missing."""


class UsageError(Exception):
    """Raised for bad or missing command-line arguments."""


class WeatherProviderError(Exception):
    """Raised when a provider step fails; recoverable by trying the next provider."""


class LocationNotFound(WeatherProviderError):
    """Raised when a token is absent from the special-location gazetteer."""


class GeocodeUnavailable(WeatherProviderError):
    """Raised when a postal code cannot be turned into coordinates."""


class NoReport(WeatherProviderError):
    """Raised when no report is available (per provider, or for the whole chain)."""


class UnparsableReport(WeatherProviderError):
    """Raised when a report is present but lacks the expected fields."""


class NoForecastData(WeatherProviderError):
    """Raised when a forecast response carries no current temperature."""
