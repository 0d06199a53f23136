"""Calendar data types."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(slots=True)
class CalendarEvent:
    """One event as returned by the Calendar API.

    All-day events keep naive midnight bounds (``end`` exclusive); timed
    events keep the offset Google sent, with the IANA zone names alongside.
    """

    id: str
    calendar_id: str
    summary: str
    start: datetime
    end: datetime
    description: Optional[str] = None
    location: Optional[str] = None
    start_timezone: Optional[str] = None
    end_timezone: Optional[str] = None
    is_all_day: bool = False
    status: str = "confirmed"
    html_link: Optional[str] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def occupies(self, day: date, hour: int) -> bool:
        """True if the event overlaps the one-hour slot ``hour`` on ``day``.

        Bounds are compared in the event's own offset, which is how the
        time slots of the grid are labelled.
        """
        slot_start = datetime.combine(day, time(hour), tzinfo=self.start.tzinfo)
        slot_end = slot_start + timedelta(hours=1)
        return self.start < slot_end and slot_start < self.end

    def to_api_dict(self) -> Dict[str, Any]:
        """Convert to API-friendly dict (camelCase for JavaScript)."""
        return {
            "id": self.id,
            "calendarId": self.calendar_id,
            "summary": self.summary,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "startTimezone": self.start_timezone,
            "endTimezone": self.end_timezone,
            "isAllDay": self.is_all_day,
            "durationMinutes": self.duration_minutes,
            "description": self.description,
            "location": self.location,
            "status": self.status,
            "htmlLink": self.html_link,
            "created": _iso(self.created),
            "updated": _iso(self.updated),
        }


@dataclass(slots=True)
class EventListResponse:
    """One page of events for a date range."""

    events: List[CalendarEvent] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.events)

    def in_slot(self, day: date, hour: int) -> List[CalendarEvent]:
        """Timed events overlapping one grid time slot."""
        return [
            event
            for event in self.events
            if not event.is_all_day and event.occupies(day, hour)
        ]
