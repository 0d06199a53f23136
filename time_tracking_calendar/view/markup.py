"""HTML output for grid layouts and themes.

Everything here is a pure string builder; the web layer decides where the
markup goes. A grid is always written out whole, never patched.
"""
from __future__ import annotations

from html import escape
from typing import Optional
from urllib.parse import urlencode

from ..api.auth import UserProfile
from ..theme.palette import STYLE_ELEMENT_ID, Theme, theme_stylesheet
from .grid import GridCell, GridLayout, ViewError, shift_date
from .state import ViewState, go_next, go_prev

PAGE_SHELL = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>__TITLE__</title>
<style id="__STYLE_ID__">
__THEME_CSS__
</style>
</head>
<body__BODY_ATTRS__>
<header class="app-header">
__AUTH_MARKUP__
__THEME_TOGGLE__
</header>
<nav class="view-controls">
__VIEW_BUTTONS__
__PERIOD_BUTTONS__
</nav>
<section class="calendar">
<div class="calendar-header"><h2>__CAPTION__</h2></div>
__GRID_MARKUP__
</section>
</body>
</html>
"""

VIEW_BUTTONS = (
    ("day-view", 1, "Day"),
    ("three-day-view", 3, "3 Day"),
    ("week-view", 7, "Week"),
)


def _icon(name: str) -> str:
    return f'<span class="material-symbols-outlined">{escape(name)}</span>'


def _cell_markup(cell: GridCell) -> str:
    if cell.kind == "corner":
        return '<div class="grid-cell corner-cell"></div>'
    if cell.kind == "day-header":
        classes = "grid-cell day-header today" if cell.is_today else "grid-cell day-header"
        return (
            f'<div class="{classes}" data-date="{cell.day.isoformat()}">'
            f'<span class="day-name">{escape(cell.day_name or "")}</span>'
            f'<span class="day-number">{cell.day_number}</span>'
            "</div>"
        )
    if cell.kind == "time-label":
        return f'<div class="grid-cell time-label">{escape(cell.label)}</div>'
    return (
        f'<div class="grid-cell time-slot" data-hour="{cell.hour}" '
        f'data-date="{cell.day.isoformat()}"></div>'
    )


def grid_markup(layout: GridLayout) -> str:
    """Markup for the whole ``.calendar-grid`` element."""
    cells = "\n".join(_cell_markup(cell) for cell in layout.cells)
    return (
        f'<div class="calendar-grid populated" '
        f'style="grid-template-columns: {layout.column_template}">\n'
        f"{cells}\n"
        "</div>"
    )


def _page_href(base_path: str, state: ViewState) -> str:
    query = urlencode({"date": state.reference_date.isoformat(), "days": state.visible_days})
    return escape(f"{base_path}?{query}")


def _view_buttons(state: ViewState, base_path: str) -> str:
    buttons = []
    for element_id, days, label in VIEW_BUTTONS:
        active = " active" if days == state.visible_days else ""
        target = ViewState(state.reference_date, days)
        buttons.append(
            f'<a id="{element_id}" class="pill-button{active}" '
            f'href="{_page_href(base_path, target)}">{label}</a>'
        )
    return "\n".join(buttons)


def _period_buttons(state: ViewState, layout: GridLayout, base_path: str) -> str:
    today_query = escape(urlencode({"days": state.visible_days}))
    buttons = [
        f'<a id="today-btn" class="pill-button" href="{escape(base_path)}?{today_query}">Today</a>'
    ]
    steps = (
        ("prev-period-btn", "chevron_left", go_prev, layout.range_start, -state.visible_days),
        ("next-period-btn", "chevron_right", go_next, layout.range_end, state.visible_days),
    )
    for element_id, icon, step, edge, delta in steps:
        try:
            # The neighbouring range must fit inside the calendar as well.
            shift_date(edge, delta)
            target = step(state)
        except ViewError:
            buttons.append(
                f'<span id="{element_id}" class="icon-button disabled" '
                f'aria-disabled="true">{_icon(icon)}</span>'
            )
            continue
        buttons.append(
            f'<a id="{element_id}" class="icon-button" '
            f'href="{_page_href(base_path, target)}">{_icon(icon)}</a>'
        )
    return "\n".join(buttons)


def theme_toggle_markup(is_dark: bool, action: Optional[str] = None) -> str:
    """Sun icon while dark (switch to light), moon icon while light.

    With ``action`` the button submits a POST form to that URL.
    """
    icon = "light_mode" if is_dark else "dark_mode"
    label = "Switch to light mode" if is_dark else "Switch to dark mode"
    if action is None:
        return f'<button class="theme-toggle" type="button" aria-label="{label}">{_icon(icon)}</button>'
    return (
        f'<form class="theme-toggle-form" method="post" action="{escape(action)}">'
        f'<button class="theme-toggle" type="submit" aria-label="{label}">{_icon(icon)}</button>'
        "</form>"
    )


def auth_markup(user: Optional[UserProfile]) -> str:
    """Sign-in button, or the profile button with its popup.

    The popup is a ``<details>`` element so it opens without script. The
    identity provider flow itself runs client side, keyed on
    ``data-auth-action``.
    """
    if user is None:
        return (
            '<div class="auth-container">'
            '<button class="auth-button" type="button" data-auth-action="sign-in" '
            f'aria-label="Log in with Google">{_icon("account_circle")}</button></div>'
        )
    name = escape(user.display_name or user.email)
    if user.photo_url:
        photo = escape(user.photo_url)
        avatar = f'<img src="{photo}" alt="{name}" class="auth-avatar">'
        popup_avatar = f'<img src="{photo}" alt="{name}" class="auth-popup-avatar">'
    else:
        avatar = _icon("account_circle")
        popup_avatar = ""
    return (
        '<details class="auth-container">'
        f'<summary class="auth-button" aria-label="View profile for {name}">{avatar}</summary>'
        '<div class="auth-popup">'
        f"{popup_avatar}"
        '<div class="auth-popup-user-info">'
        f'<span class="auth-popup-name">{name}</span>'
        f'<span class="auth-popup-email">{escape(user.email)}</span>'
        "</div>"
        '<button class="auth-popup-signout" type="button" data-auth-action="sign-out">Sign Out</button>'
        "</div></details>"
    )


def page_markup(
    state: ViewState,
    layout: GridLayout,
    theme: Theme,
    *,
    is_dark: bool = False,
    user: Optional[UserProfile] = None,
    base_path: str = "/view/page",
    title: str = "Time Tracking Calendar",
) -> str:
    """Full HTML document for one view of the calendar."""
    toggle_action = f"{base_path}/theme-toggle?" + urlencode(
        {"date": state.reference_date.isoformat(), "days": state.visible_days}
    )
    replacements = {
        "__TITLE__": escape(title),
        "__STYLE_ID__": STYLE_ELEMENT_ID,
        "__THEME_CSS__": theme_stylesheet(theme),
        "__BODY_ATTRS__": ' data-theme="dark"' if is_dark else "",
        "__AUTH_MARKUP__": auth_markup(user),
        "__THEME_TOGGLE__": theme_toggle_markup(is_dark, toggle_action),
        "__VIEW_BUTTONS__": _view_buttons(state, base_path),
        "__PERIOD_BUTTONS__": _period_buttons(state, layout, base_path),
        "__CAPTION__": escape(layout.caption),
        "__GRID_MARKUP__": grid_markup(layout),
    }
    html = PAGE_SHELL
    for marker, value in replacements.items():
        html = html.replace(marker, value)
    return html
