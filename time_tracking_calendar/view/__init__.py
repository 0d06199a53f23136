"""Calendar view: grid layout, navigation state and HTML output."""
from __future__ import annotations

from .grid import (
    CAPTIONS,
    HOURS_PER_DAY,
    GridCell,
    GridLayout,
    ViewError,
    caption_for,
    check_visible_days,
    compute_range_start,
    hour_label,
    render,
    shift_date,
)
from .state import (
    NAVIGATION_ACTIONS,
    ViewState,
    go_next,
    go_prev,
    go_today,
    initial_state,
    navigate,
    render_state,
    select_view,
)
from .markup import auth_markup, grid_markup, page_markup, theme_toggle_markup

__all__ = [
    # Grid
    "CAPTIONS",
    "HOURS_PER_DAY",
    "GridCell",
    "GridLayout",
    "ViewError",
    "caption_for",
    "check_visible_days",
    "compute_range_start",
    "hour_label",
    "render",
    "shift_date",
    # State
    "NAVIGATION_ACTIONS",
    "ViewState",
    "go_next",
    "go_prev",
    "go_today",
    "initial_state",
    "navigate",
    "render_state",
    "select_view",
    # Markup
    "auth_markup",
    "grid_markup",
    "page_markup",
    "theme_toggle_markup",
]
