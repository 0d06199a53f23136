"""View Router - calendar grid layouts and the rendered page.

Handles:
- Grid layout for a reference date and view width
- Today / previous / next navigation
- The server-rendered HTML page and its theme toggle form
"""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from api.dependencies import (
    UserProfile,
    get_optional_user,
    get_settings,
    parse_view_state,
    resolve_theme,
)
from api.models import NavigateRequest
from time_tracking_calendar.config import Settings
from time_tracking_calendar.theme import DEFAULT_OWNER, get_dark_mode, toggle_dark_mode
from time_tracking_calendar.view import (
    GridLayout,
    ViewError,
    ViewState,
    navigate,
    page_markup,
    render_state,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _owner(user: Optional[UserProfile]) -> str:
    return user.email if user else DEFAULT_OWNER


def _layout(state: ViewState, settings: Settings) -> GridLayout:
    """Render ``state``; a range past the calendar limits is a 400."""
    try:
        return render_state(state, week_start=settings.week_start)
    except ViewError as e:
        logger.warning("Cannot render %s: %s", state, e)
        raise HTTPException(status_code=400, detail=str(e))


@router.get("")
def get_view(
    date: Optional[str] = Query(None, description="Reference date (YYYY-MM-DD), defaults to today"),
    days: Optional[int] = Query(None, description="Visible days: 1, 3 or 7"),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Grid layout for the requested view."""
    state = parse_view_state(date, days, settings)
    layout = _layout(state, settings)
    return {"state": state.to_api_dict(), "layout": layout.to_api_dict()}


@router.post("/navigate")
def navigate_view(
    request: NavigateRequest,
    settings: Settings = Depends(get_settings),
) -> dict:
    """Apply today / prev / next and return the new state with its layout."""
    current = parse_view_state(request.date, request.days, settings)
    try:
        state = navigate(current, request.action)
    except ViewError as e:
        logger.warning("Cannot navigate %s from %s: %s", request.action, current, e)
        raise HTTPException(status_code=400, detail=str(e))
    layout = _layout(state, settings)
    return {"state": state.to_api_dict(), "layout": layout.to_api_dict()}


@router.get("/page", response_class=HTMLResponse)
def get_view_page(
    date: Optional[str] = Query(None),
    days: Optional[int] = Query(None),
    color: Optional[str] = Query(None, description="Override the source color"),
    settings: Settings = Depends(get_settings),
    user: Optional[UserProfile] = Depends(get_optional_user),
) -> HTMLResponse:
    """Full HTML page: themed header, controls and grid."""
    state = parse_view_state(date, days, settings)
    layout = _layout(state, settings)
    theme = resolve_theme(color, settings)
    is_dark = get_dark_mode(_owner(user))
    return HTMLResponse(page_markup(state, layout, theme, is_dark=is_dark, user=user))


@router.post("/page/theme-toggle")
def toggle_page_theme(
    date: Optional[str] = Query(None),
    days: Optional[int] = Query(None),
    settings: Settings = Depends(get_settings),
    user: Optional[UserProfile] = Depends(get_optional_user),
) -> RedirectResponse:
    """Form target of the page's theme button: flip the mode, then show the page again."""
    state = parse_view_state(date, days, settings)
    toggle_dark_mode(_owner(user))
    query = urlencode({"date": state.reference_date.isoformat(), "days": state.visible_days})
    return RedirectResponse(url=f"/view/page?{query}", status_code=303)
