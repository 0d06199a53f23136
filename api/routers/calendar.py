"""Calendar Router - Google Calendar event CRUD.

Every endpoint makes one upstream call. A failing call is logged and
answered with HTTP 502 whose ``detail`` is the message to show the user.
"""
from __future__ import annotations

import logging
from datetime import date as date_type, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import (
    UserProfile,
    get_calendar_account,
    get_current_user,
    get_settings,
    parse_view_state,
)
from api.models import EventPayload
from time_tracking_calendar.calendar import (
    CalendarAccountConfig,
    CalendarError,
    create_event,
    delete_event,
    list_events,
    update_event,
)
from time_tracking_calendar.config import Settings
from time_tracking_calendar.view import ViewError, compute_range_start, shift_date

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_bound(value: str) -> datetime | date_type:
    try:
        if "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        return date_type.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date or time: {value}")


def _upstream_error(action: str, e: CalendarError) -> HTTPException:
    logger.warning("Calendar %s failed: %s", action, e)
    return HTTPException(status_code=502, detail=e.user_message)


@router.get("/events")
def list_events_endpoint(
    start: Optional[str] = Query(None, description="Start of range (ISO format)"),
    end: Optional[str] = Query(None, description="End of range (ISO format)"),
    date: Optional[str] = Query(None, description="Reference date of a view, instead of start/end"),
    days: Optional[int] = Query(None, description="Visible days of that view"),
    max_results: int = Query(250, alias="maxResults", ge=1, le=2500),
    user: UserProfile = Depends(get_current_user),
    account: CalendarAccountConfig = Depends(get_calendar_account),
    settings: Settings = Depends(get_settings),
) -> dict:
    """List events for an explicit range or for the range a view shows."""
    if start and end:
        start_bound, end_bound = _parse_bound(start), _parse_bound(end)
    elif start or end:
        raise HTTPException(status_code=400, detail="Both start and end are required.")
    else:
        state = parse_view_state(date, days, settings)
        try:
            start_bound = compute_range_start(
                state.reference_date, state.visible_days, settings.week_start
            )
            end_bound = shift_date(start_bound, state.visible_days)
        except ViewError as e:
            logger.warning("Cannot list events for %s: %s", state, e)
            raise HTTPException(status_code=400, detail=str(e))

    try:
        response = list_events(account, start_bound, end_bound, max_results=max_results)
    except CalendarError as e:
        raise _upstream_error("list", e)

    return {
        "events": [event.to_api_dict() for event in response.events],
        "count": response.count,
        "rangeStart": start_bound.isoformat(),
        "rangeEnd": end_bound.isoformat(),
    }


@router.post("/events")
def create_event_endpoint(
    request: EventPayload,
    user: UserProfile = Depends(get_current_user),
    account: CalendarAccountConfig = Depends(get_calendar_account),
) -> dict:
    """Create a new calendar event."""
    try:
        event = create_event(account, request.to_resource())
    except CalendarError as e:
        raise _upstream_error("create", e)

    return {"event": event.to_api_dict(), "created": True}


@router.put("/events/{event_id}")
def update_event_endpoint(
    event_id: str,
    request: EventPayload,
    user: UserProfile = Depends(get_current_user),
    account: CalendarAccountConfig = Depends(get_calendar_account),
) -> dict:
    """Replace an existing calendar event."""
    try:
        event = update_event(account, event_id, request.to_resource())
    except CalendarError as e:
        raise _upstream_error(f"update of {event_id}", e)

    return {"event": event.to_api_dict(), "updated": True}


@router.delete("/events/{event_id}")
def delete_event_endpoint(
    event_id: str,
    user: UserProfile = Depends(get_current_user),
    account: CalendarAccountConfig = Depends(get_calendar_account),
) -> dict:
    """Delete a calendar event."""
    try:
        delete_event(account, event_id)
    except CalendarError as e:
        raise _upstream_error(f"delete of {event_id}", e)

    return {"deleted": True, "eventId": event_id}
