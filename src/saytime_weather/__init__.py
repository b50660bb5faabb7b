"""Location-to-weather resolution for hourly time and weather announcements."""

__version__ = "0.1.0"
