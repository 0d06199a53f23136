"""Shared dependencies and helper functions for API routers.

Usage in routers:
    from api.dependencies import get_current_user, get_settings, parse_view_state
"""
from __future__ import annotations

import os
from datetime import date
from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException

from time_tracking_calendar.api.auth import (  # noqa: F401 - re-export
    UserProfile,
    get_current_user,
    get_optional_user,
)
from time_tracking_calendar.calendar import (
    CalendarAccountConfig,
    CalendarError,
    account_from_access_token,
    load_account_from_env,
)
from time_tracking_calendar.config import Settings, load_settings
from time_tracking_calendar.theme import ColorError, Theme, derive_theme
from time_tracking_calendar.view import ViewError, ViewState


# =============================================================================
# Configuration Constants
# =============================================================================

ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    os.getenv("TTC_ALLOWED_FRONTEND", "").strip(),
]


# =============================================================================
# Cached Functions
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return load_settings()


# =============================================================================
# Request Helpers
# =============================================================================

def parse_view_state(
    date_value: Optional[str],
    days: Optional[int],
    settings: Settings,
) -> ViewState:
    """Build a ViewState from query values, defaulting to today / configured width."""
    try:
        reference = date.fromisoformat(date_value) if date_value else date.today()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {date_value}")

    try:
        return ViewState(reference, days if days is not None else settings.default_view_days)
    except ViewError as e:
        raise HTTPException(status_code=400, detail=str(e))


def resolve_theme(color: Optional[str], settings: Settings) -> Theme:
    """Derive the theme for ``color`` or the configured source color."""
    try:
        return derive_theme(color or settings.source_color, strict=settings.strict_colors)
    except ColorError as e:
        raise HTTPException(status_code=400, detail=str(e))


def get_calendar_account(
    calendar_token: str | None = Header(default=None, alias="X-Calendar-Access-Token"),
) -> CalendarAccountConfig:
    """Calendar credentials: the user's forwarded access token, else env config."""
    if calendar_token:
        return account_from_access_token(
            calendar_token, os.getenv("TTC_CALENDAR_ID", "primary")
        )
    try:
        return load_account_from_env()
    except CalendarError as e:
        raise HTTPException(status_code=502, detail=e.user_message)
