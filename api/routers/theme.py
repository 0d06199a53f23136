"""Theme Router - generated palettes and the persisted dark-mode flag."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from api.dependencies import UserProfile, get_optional_user, get_settings, resolve_theme
from api.models import ThemeModeRequest
from time_tracking_calendar.config import Settings
from time_tracking_calendar.theme import (
    DEFAULT_OWNER,
    get_preference,
    set_dark_mode,
    theme_stylesheet,
    toggle_dark_mode,
)

router = APIRouter()


def _owner(user: Optional[UserProfile]) -> str:
    return user.email if user else DEFAULT_OWNER


@router.get("")
def get_theme(
    color: Optional[str] = Query(None, description="Source color, e.g. #2c83bd"),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Light and dark role tables for the source color."""
    return resolve_theme(color, settings).to_api_dict()


@router.get("/stylesheet.css", response_class=PlainTextResponse)
def get_theme_stylesheet(
    color: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Stylesheet with the light rules on :root and the dark overrides."""
    css = theme_stylesheet(resolve_theme(color, settings))
    return PlainTextResponse(css, media_type="text/css")


@router.get("/mode")
def get_theme_mode(user: Optional[UserProfile] = Depends(get_optional_user)) -> dict:
    """Persisted dark-mode flag."""
    return get_preference(_owner(user)).to_api_dict()


@router.put("/mode")
def put_theme_mode(
    request: ThemeModeRequest,
    user: Optional[UserProfile] = Depends(get_optional_user),
) -> dict:
    return set_dark_mode(_owner(user), request.is_dark_mode).to_api_dict()


@router.post("/toggle")
def toggle_theme_mode(user: Optional[UserProfile] = Depends(get_optional_user)) -> dict:
    """Flip between light and dark."""
    return toggle_dark_mode(_owner(user)).to_api_dict()
