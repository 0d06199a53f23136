"""Google Calendar integration.

Thin request/response wrappers around the Calendar v3 events API:
list for a date range, insert, update and delete on one calendar.
"""
from __future__ import annotations

from .types import CalendarEvent, EventListResponse

from .google_calendar import (
    CALENDAR_SCOPE,
    PRIMARY_CALENDAR,
    CalendarAccountConfig,
    CalendarError,
    account_from_access_token,
    create_event,
    delete_event,
    list_events,
    load_account_from_env,
    update_event,
)


__all__ = [
    # Types
    "CalendarEvent",
    "EventListResponse",
    # API Client
    "CALENDAR_SCOPE",
    "PRIMARY_CALENDAR",
    "CalendarAccountConfig",
    "CalendarError",
    "account_from_access_token",
    "create_event",
    "delete_event",
    "list_events",
    "load_account_from_env",
    "update_event",
]
