"""Calendar grid renderer.

``render`` turns a reference date and a view width into a ``GridLayout``: a
corner cell, one header cell per visible day, then 24 hour rows, each made of
an hour label and one time slot per visible day. The layout is a plain
description; writing it out as markup is the job of ``view.markup``.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from ..config import VIEW_DAY_CHOICES

HOURS_PER_DAY = 24
LABEL_COLUMN_WIDTH = "55px"

# Fixed English labels so the grid does not depend on the process locale.
SHORT_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

CAPTIONS = {
    1: "Day View",
    3: "3-Day View",
    7: "Week View",
}

CellKind = Literal["corner", "day-header", "time-label", "time-slot"]
DateLike = Union[date, datetime]


class ViewError(ValueError):
    """Raised for a view width outside 1, 3 or 7, or a range past the calendar limits."""


@dataclass(frozen=True)
class GridCell:
    """One positioned cell of the grid.

    ``row`` is None for the header row, otherwise the hour (0-23).
    ``column`` is None for the label column, otherwise the day index.
    """

    kind: CellKind
    row: Optional[int]
    column: Optional[int]
    label: str = ""
    day_name: Optional[str] = None
    day_number: Optional[int] = None
    day: Optional[date] = None
    hour: Optional[int] = None
    is_today: bool = False

    def to_api_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "row": self.row,
            "column": self.column,
            "label": self.label,
            "dayName": self.day_name,
            "dayNumber": self.day_number,
            "date": self.day.isoformat() if self.day else None,
            "hour": self.hour,
            "isToday": self.is_today,
        }


@dataclass(frozen=True)
class GridLayout:
    """Full description of one rendered grid."""

    range_start: date
    visible_days: int
    caption: str
    cells: Tuple[GridCell, ...]

    @property
    def range_end(self) -> date:
        """Exclusive end of the visible range."""
        return self.range_start + timedelta(days=self.visible_days)

    @property
    def days(self) -> List[date]:
        return [self.range_start + timedelta(days=i) for i in range(self.visible_days)]

    @property
    def column_template(self) -> str:
        return f"{LABEL_COLUMN_WIDTH} repeat({self.visible_days}, 1fr)"

    @property
    def header_cells(self) -> List[GridCell]:
        return [cell for cell in self.cells if cell.kind == "day-header"]

    @property
    def hour_labels(self) -> List[GridCell]:
        return [cell for cell in self.cells if cell.kind == "time-label"]

    @property
    def time_slots(self) -> List[GridCell]:
        return [cell for cell in self.cells if cell.kind == "time-slot"]

    @property
    def today_column(self) -> Optional[int]:
        for cell in self.header_cells:
            if cell.is_today:
                return cell.column
        return None

    def rows(self) -> List[List[GridCell]]:
        """Cells grouped into display rows (header row first)."""
        width = self.visible_days + 1
        return [list(self.cells[i:i + width]) for i in range(0, len(self.cells), width)]

    def to_api_dict(self) -> Dict[str, Any]:
        """Convert to API-friendly dict (camelCase for JavaScript)."""
        return {
            "rangeStart": self.range_start.isoformat(),
            "rangeEnd": self.range_end.isoformat(),
            "visibleDays": self.visible_days,
            "caption": self.caption,
            "columnTemplate": self.column_template,
            "todayColumn": self.today_column,
            "cells": [cell.to_api_dict() for cell in self.cells],
        }


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def shift_date(day: date, days: int) -> date:
    """``day`` moved by ``days``; ViewError past ``date.min`` / ``date.max``."""
    try:
        return day + timedelta(days=days)
    except OverflowError as exc:
        raise ViewError(
            f"{day.isoformat()} moved by {days} days is outside the supported date range"
        ) from exc


def check_visible_days(visible_days: int) -> int:
    if isinstance(visible_days, bool) or visible_days not in VIEW_DAY_CHOICES:
        raise ViewError(
            f"visible_days must be one of {VIEW_DAY_CHOICES}, got {visible_days!r}"
        )
    return visible_days


def caption_for(visible_days: int) -> str:
    return CAPTIONS[check_visible_days(visible_days)]


def compute_range_start(
    reference_date: DateLike,
    visible_days: int,
    week_start: int = calendar.SUNDAY,
) -> date:
    """First visible day: the week start for week view, else the date itself."""
    reference = as_date(reference_date)
    if check_visible_days(visible_days) == 7:
        offset = (reference.weekday() - week_start) % 7
        return shift_date(reference, -offset)
    return reference


def hour_label(hour: int) -> str:
    """12-hour clock label: 0 -> "12 AM", 9 -> "9 AM", 13 -> "1 PM"."""
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {suffix}"


def render(
    reference_date: DateLike,
    visible_days: int,
    *,
    today: Optional[DateLike] = None,
    week_start: int = calendar.SUNDAY,
) -> GridLayout:
    """Build the grid for ``visible_days`` days around ``reference_date``.

    Args:
        reference_date: Any date inside the wanted period; time is ignored.
        visible_days: 1, 3 or 7.
        today: Date flagged as today (defaults to the current local date).
        week_start: First weekday of week view (``calendar.MONDAY`` .. ``SUNDAY``).
    """
    start = compute_range_start(reference_date, visible_days, week_start)
    current = as_date(today) if today is not None else date.today()
    # The exclusive end must exist too, so range_end never overflows.
    shift_date(start, visible_days)
    days = [start + timedelta(days=i) for i in range(visible_days)]

    cells: List[GridCell] = [GridCell(kind="corner", row=None, column=None)]

    for index, day in enumerate(days):
        name = SHORT_WEEKDAYS[day.weekday()]
        cells.append(
            GridCell(
                kind="day-header",
                row=None,
                column=index,
                label=f"{name} {day.day}",
                day_name=name,
                day_number=day.day,
                day=day,
                is_today=day == current,
            )
        )

    for hour in range(HOURS_PER_DAY):
        cells.append(
            GridCell(kind="time-label", row=hour, column=None, label=hour_label(hour), hour=hour)
        )
        for index, day in enumerate(days):
            cells.append(
                GridCell(kind="time-slot", row=hour, column=index, day=day, hour=hour)
            )

    return GridLayout(
        range_start=start,
        visible_days=visible_days,
        caption=CAPTIONS[visible_days],
        cells=tuple(cells),
    )
