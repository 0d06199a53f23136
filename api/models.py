"""Pydantic request models shared by the API routers."""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventTime(BaseModel):
    """Start or end of an event, in Calendar API shape."""
    date_time: Optional[str] = Field(None, alias="dateTime", description="ISO 8601 timestamp")
    date: Optional[str] = Field(None, description="YYYY-MM-DD for all-day events")
    time_zone: Optional[str] = Field(None, alias="timeZone", description="IANA time zone")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _one_of_date_or_datetime(self) -> "EventTime":
        if not self.date_time and not self.date:
            raise ValueError("Either dateTime or date is required")
        return self


class EventPayload(BaseModel):
    """Request body for creating or replacing a calendar event."""
    summary: str = Field(..., description="Event title")
    location: Optional[str] = Field(None, description="Event location")
    description: Optional[str] = Field(None, description="Event description")
    start: EventTime
    end: EventTime

    model_config = ConfigDict(populate_by_name=True)

    def to_resource(self) -> Dict[str, Any]:
        """Calendar API event resource (camelCase, unset fields dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class NavigateRequest(BaseModel):
    """Request body for period navigation."""
    date: Optional[str] = Field(None, description="Current reference date (YYYY-MM-DD)")
    days: Optional[int] = Field(None, description="Visible days: 1, 3 or 7")
    action: Literal["today", "prev", "next"]


class ThemeModeRequest(BaseModel):
    """Request body for setting the theme mode."""
    is_dark_mode: bool = Field(..., alias="isDarkMode")

    model_config = ConfigDict(populate_by_name=True)
