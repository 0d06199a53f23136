"""Configuration helpers for the Time Tracking Calendar service and CLI."""
from __future__ import annotations

from dataclasses import dataclass
import calendar
import os
from typing import Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


DEFAULT_SOURCE_COLOR = "#2c83bdff"
VIEW_DAY_CHOICES = (1, 3, 7)

_WEEKDAYS = {
    "monday": calendar.MONDAY,
    "tuesday": calendar.TUESDAY,
    "wednesday": calendar.WEDNESDAY,
    "thursday": calendar.THURSDAY,
    "friday": calendar.FRIDAY,
    "saturday": calendar.SATURDAY,
    "sunday": calendar.SUNDAY,
}


@dataclass(slots=True)
class Settings:
    """Runtime configuration."""

    source_color: str = DEFAULT_SOURCE_COLOR
    week_start: int = calendar.SUNDAY
    default_view_days: int = 7
    strict_colors: bool = False
    environment: str = "local"


def _parse_week_start(raw: str) -> int:
    value = raw.strip().lower()
    if value.isdigit() and int(value) in _WEEKDAYS.values():
        return int(value)
    if value not in _WEEKDAYS:
        raise ConfigError(
            f"Invalid TTC_WEEK_START '{raw}'. Use a weekday name such as 'sunday'."
        )
    return _WEEKDAYS[value]


def load_settings(*, dotenv: bool = True) -> Settings:
    """Load settings from environment variables.

    Args:
        dotenv: Read a ``.env`` file into the environment first.

    Returns:
        Settings with every value resolved.

    Raises:
        ConfigError: if a value is present but unusable.
    """

    if dotenv:
        load_dotenv()

    source_color = os.getenv("TTC_SOURCE_COLOR", DEFAULT_SOURCE_COLOR).strip()
    if not source_color.startswith("#"):
        raise ConfigError(
            f"TTC_SOURCE_COLOR must be a hex color starting with '#', got '{source_color}'."
        )

    week_start = _parse_week_start(os.getenv("TTC_WEEK_START", "sunday"))

    raw_days: Optional[str] = os.getenv("TTC_DEFAULT_VIEW_DAYS")
    default_view_days = 7
    if raw_days:
        try:
            default_view_days = int(raw_days)
        except ValueError as exc:
            raise ConfigError(f"TTC_DEFAULT_VIEW_DAYS must be an integer, got '{raw_days}'.") from exc
        if default_view_days not in VIEW_DAY_CHOICES:
            raise ConfigError(
                f"TTC_DEFAULT_VIEW_DAYS must be one of {VIEW_DAY_CHOICES}, got {default_view_days}."
            )

    strict_colors = os.getenv("TTC_STRICT_COLORS", "0") == "1"
    environment = os.getenv("TTC_ENV", "local")

    return Settings(
        source_color=source_color,
        week_start=week_start,
        default_view_days=default_view_days,
        strict_colors=strict_colors,
        environment=environment,
    )
