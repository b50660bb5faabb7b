"""Render an observation as a display line or as announcement artifacts."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .config import Settings
from .models import Observation

SOUND_EXTENSIONS = (".gsm", ".ulaw")


def render_verbose(observation: Observation) -> str:
    """Human-readable line, e.g. ``70°F, 21°C / clear``."""
    return (
        f"{observation.temperature_fahrenheit}°F, "
        f"{observation.temperature_celsius}°C / {observation.condition}"
    )


def find_condition_sound(word: str, sound_dirs: list[Path]) -> Path | None:
    """First ``<word>.gsm`` or ``<word>.ulaw`` in the sound directories, in order."""
    name = word.strip().lower()
    for directory in sound_dirs:
        for extension in SOUND_EXTENSIONS:
            candidate = directory / f"{name}{extension}"
            if candidate.is_file():
                return candidate
    return None


class ArtifactWriter:
    """Writes the temperature and condition files read by the announcer."""

    def __init__(self, settings: Settings, logger: logging.Logger | None = None) -> None:
        self.settings = settings
        self.logger = logger or logging.getLogger("saytime_weather.output")

    def write(self, observation: Observation) -> None:
        """Replace both artifacts; raises OSError when the output dir is unusable."""
        temperature_path = self.settings.temperature_path
        condition_path = self.settings.condition_path
        temperature_path.unlink(missing_ok=True)
        condition_path.unlink(missing_ok=True)

        if self.settings.temperature_mode == "C":
            value = observation.temperature_celsius
        else:
            value = observation.temperature_fahrenheit
        temperature_path.write_text(f"{value}\n", encoding="ascii")
        self.logger.info(
            "Wrote temperature %s%s to %s", value, self.settings.temperature_mode, temperature_path
        )

        if not self.settings.process_condition:
            return

        sound = find_condition_sound(observation.condition, self.settings.sound_dirs)
        if sound is None:
            self.logger.warning("No sound file for condition %r", observation.condition)
            return
        shutil.copyfile(sound, condition_path)
        self.logger.info("Copied condition sound %s to %s", sound, condition_path)
