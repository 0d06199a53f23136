"""Google Calendar API client.

Every call is one request/response round-trip. Failures raise
``CalendarError`` carrying a message fit to show the user; nothing is
retried.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Tuple, Union
from urllib import error as urlerror
from urllib import parse as urlparse
from urllib import request as urlrequest

from google.auth.exceptions import RefreshError
from google.auth.transport import requests as google_requests
from google.oauth2.credentials import Credentials

from .types import CalendarEvent, EventListResponse

logger = logging.getLogger(__name__)

TOKEN_URL = "https://oauth2.googleapis.com/token"
CALENDAR_API_BASE = "https://www.googleapis.com/calendar/v3"
CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
PRIMARY_CALENDAR = "primary"

FETCH_FAILED = (
    "Could not fetch Google Calendar events. "
    "Please ensure you have granted calendar permissions."
)
CREATE_FAILED = "Could not create the event in Google Calendar."
UPDATE_FAILED = "Could not update the event in Google Calendar."
DELETE_FAILED = "Could not delete the event from Google Calendar."


class CalendarError(RuntimeError):
    """Raised when Calendar API operations fail."""

    def __init__(self, message: str, user_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.user_message = user_message or message


@dataclass(slots=True)
class CalendarAccountConfig:
    """Google Calendar credentials.

    Either a ready ``access_token`` (forwarded from the user's sign-in) or an
    OAuth client plus refresh token used to mint one per request.
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    refresh_token: Optional[str] = None
    access_token: Optional[str] = None
    calendar_id: str = PRIMARY_CALENDAR


def load_account_from_env() -> CalendarAccountConfig:
    """Load Calendar credentials from TTC_CALENDAR_* environment variables."""
    client_id = os.getenv("TTC_CALENDAR_CLIENT_ID") or os.getenv("GOOGLE_OAUTH_CLIENT_ID")
    client_secret = os.getenv("TTC_CALENDAR_CLIENT_SECRET")
    refresh_token = os.getenv("TTC_CALENDAR_REFRESH_TOKEN")

    missing = [
        label
        for label, value in [
            ("CLIENT_ID", client_id),
            ("CLIENT_SECRET", client_secret),
            ("REFRESH_TOKEN", refresh_token),
        ]
        if not value
    ]
    if missing:
        raise CalendarError(
            f"Missing Calendar env vars: {', '.join(missing)}. Set TTC_CALENDAR_* env vars.",
            "Google Calendar is not connected. Please sign in again.",
        )

    return CalendarAccountConfig(
        client_id=client_id,
        client_secret=client_secret,
        refresh_token=refresh_token,
        calendar_id=os.getenv("TTC_CALENDAR_ID", PRIMARY_CALENDAR),
    )


def account_from_access_token(access_token: str, calendar_id: str = PRIMARY_CALENDAR) -> CalendarAccountConfig:
    return CalendarAccountConfig(access_token=access_token, calendar_id=calendar_id)


def _credentials(account: CalendarAccountConfig) -> Credentials:
    if account.access_token:
        return Credentials(token=account.access_token)
    return Credentials(
        token=None,
        refresh_token=account.refresh_token,
        client_id=account.client_id,
        client_secret=account.client_secret,
        token_uri=TOKEN_URL,
        scopes=[CALENDAR_SCOPE],
    )


def _access_token(account: CalendarAccountConfig) -> str:
    """Bearer token for one request; a forwarded token is used as is."""
    creds = _credentials(account)
    if not creds.valid:
        try:
            creds.refresh(google_requests.Request())
        except RefreshError as exc:
            raise CalendarError(f"Calendar token refresh failed: {exc}") from exc
    if not creds.token:
        raise CalendarError("Calendar token refresh returned no access token.")
    return creds.token


def _make_request(
    account: CalendarAccountConfig,
    endpoint: str,
    method: str = "GET",
    params: Optional[dict] = None,
    body: Optional[dict] = None,
) -> dict:
    """Send one authenticated Calendar API request and decode the JSON reply."""
    query = f"?{urlparse.urlencode(params)}" if params else ""
    req = urlrequest.Request(
        f"{CALENDAR_API_BASE}{endpoint}{query}",
        data=None if body is None else json.dumps(body).encode("utf-8"),
        headers={
            "Authorization": f"Bearer {_access_token(account)}",
            "Content-Type": "application/json",
        },
        method=method,
    )

    try:
        with urlrequest.urlopen(req, timeout=30) as resp:
            raw = b"" if resp.status == 204 else resp.read()
    except urlerror.HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore")
        raise CalendarError(f"{method} {endpoint} returned {exc.code}: {detail}") from exc
    except urlerror.URLError as exc:
        raise CalendarError(f"{method} {endpoint} failed: {exc.reason}") from exc

    return json.loads(raw.decode("utf-8")) if raw else {}


def _events_path(account: CalendarAccountConfig, event_id: Optional[str] = None) -> str:
    path = f"/calendars/{urlparse.quote(account.calendar_id, safe='')}/events"
    if event_id is not None:
        path = f"{path}/{urlparse.quote(event_id, safe='')}"
    return path


def _timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _event_bound(data: Dict[str, Any]) -> Tuple[datetime, Optional[str]]:
    """(moment, zone name) of an event's start or end object."""
    if "date" in data:
        return datetime.fromisoformat(data["date"]), None
    return _timestamp(data.get("dateTime")), data.get("timeZone")


def _parse_event(item: dict, calendar_id: str) -> CalendarEvent:
    start, start_tz = _event_bound(item.get("start", {}))
    end, end_tz = _event_bound(item.get("end", {}))
    return CalendarEvent(
        id=item["id"],
        calendar_id=calendar_id,
        summary=item.get("summary", "(No title)"),
        start=start,
        end=end,
        description=item.get("description"),
        location=item.get("location"),
        start_timezone=start_tz,
        end_timezone=end_tz,
        is_all_day="date" in item.get("start", {}),
        status=item.get("status", "confirmed"),
        html_link=item.get("htmlLink"),
        created=_timestamp(item.get("created")),
        updated=_timestamp(item.get("updated")),
    )


def _as_utc_bound(value: Union[date, datetime]) -> str:
    """RFC 3339 timestamp for a list bound; plain dates mean local midnight."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc).isoformat()


# ============================================================================
# Event Operations
# ============================================================================


def list_events(
    account: CalendarAccountConfig,
    start: Union[date, datetime],
    end: Union[date, datetime],
    *,
    max_results: int = 250,
) -> EventListResponse:
    """List events between ``start`` and ``end``.

    Recurring events are expanded into single instances, ordered by start
    time, and deleted events are left out.
    """
    params = {
        "timeMin": _as_utc_bound(start),
        "timeMax": _as_utc_bound(end),
        "showDeleted": "false",
        "singleEvents": "true",
        "orderBy": "startTime",
        "maxResults": str(min(max_results, 2500)),
    }

    try:
        response = _make_request(account, _events_path(account), params=params)
    except CalendarError as exc:
        logger.error("Error fetching calendar events: %s", exc)
        raise CalendarError(str(exc), FETCH_FAILED) from exc

    events = [
        _parse_event(item, account.calendar_id)
        for item in response.get("items", [])
        if item.get("status") != "cancelled"
    ]
    return EventListResponse(events=events, next_page_token=response.get("nextPageToken"))


def create_event(account: CalendarAccountConfig, resource: Dict[str, Any]) -> CalendarEvent:
    """Insert ``resource`` (a Calendar API event body) and return the created event."""
    try:
        response = _make_request(account, _events_path(account), method="POST", body=resource)
    except CalendarError as exc:
        logger.error("Error creating event: %s", exc)
        raise CalendarError(str(exc), CREATE_FAILED) from exc

    event = _parse_event(response, account.calendar_id)
    logger.info("Event created: %s", event.id)
    return event


def update_event(
    account: CalendarAccountConfig,
    event_id: str,
    resource: Dict[str, Any],
) -> CalendarEvent:
    """Replace event ``event_id`` with ``resource`` and return the updated event."""
    try:
        response = _make_request(
            account, _events_path(account, event_id), method="PUT", body=resource
        )
    except CalendarError as exc:
        logger.error("Error updating event %s: %s", event_id, exc)
        raise CalendarError(str(exc), UPDATE_FAILED) from exc

    event = _parse_event(response, account.calendar_id)
    logger.info("Event updated: %s", event.id)
    return event


def delete_event(account: CalendarAccountConfig, event_id: str) -> bool:
    """Delete event ``event_id``; returns True once the API accepts it."""
    try:
        _make_request(account, _events_path(account, event_id), method="DELETE")
    except CalendarError as exc:
        logger.error("Error deleting event %s: %s", event_id, exc)
        raise CalendarError(str(exc), DELETE_FAILED) from exc

    logger.info("Event deleted: %s", event_id)
    return True
