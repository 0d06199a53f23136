"""View state and navigation.

The state is an immutable value owned by the caller (one per session); every
navigation helper returns a new ``ViewState`` rather than mutating it.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Literal, Optional

from .grid import DateLike, GridLayout, as_date, check_visible_days, render, shift_date

NavigationAction = Literal["today", "prev", "next"]
NAVIGATION_ACTIONS = ("today", "prev", "next")


@dataclass(frozen=True)
class ViewState:
    reference_date: date
    visible_days: int = 7

    def __post_init__(self) -> None:
        check_visible_days(self.visible_days)
        object.__setattr__(self, "reference_date", as_date(self.reference_date))

    def to_api_dict(self) -> Dict[str, Any]:
        return {
            "date": self.reference_date.isoformat(),
            "days": self.visible_days,
        }


def initial_state(visible_days: int = 7, today: Optional[DateLike] = None) -> ViewState:
    return ViewState(as_date(today) if today is not None else date.today(), visible_days)


def go_today(state: ViewState, today: Optional[DateLike] = None) -> ViewState:
    """Reset the reference date to the current date, keeping the width."""
    return replace(state, reference_date=as_date(today) if today is not None else date.today())


def go_prev(state: ViewState) -> ViewState:
    return replace(state, reference_date=shift_date(state.reference_date, -state.visible_days))


def go_next(state: ViewState) -> ViewState:
    return replace(state, reference_date=shift_date(state.reference_date, state.visible_days))


def select_view(state: ViewState, visible_days: int) -> ViewState:
    return replace(state, visible_days=check_visible_days(visible_days))


def navigate(
    state: ViewState,
    action: NavigationAction,
    *,
    today: Optional[DateLike] = None,
) -> ViewState:
    """Apply one of the "today" / "prev" / "next" buttons."""
    if action == "today":
        return go_today(state, today)
    if action == "prev":
        return go_prev(state)
    if action == "next":
        return go_next(state)
    raise ValueError(f"Unknown navigation action: {action!r}")


def render_state(
    state: ViewState,
    *,
    today: Optional[DateLike] = None,
    week_start: int = calendar.SUNDAY,
) -> GridLayout:
    return render(state.reference_date, state.visible_days, today=today, week_start=week_start)
