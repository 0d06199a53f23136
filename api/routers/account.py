"""Account Router - the signed-in user's profile."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import UserProfile, get_optional_user
from time_tracking_calendar.calendar import CALENDAR_SCOPE

router = APIRouter()


@router.get("/me")
def get_me(user: Optional[UserProfile] = Depends(get_optional_user)) -> dict:
    """Profile of the signed-in user, or ``signedIn: false``."""
    if user is None:
        return {"signedIn": False, "scopes": [CALENDAR_SCOPE]}
    return {**user.to_api_dict(), "scopes": [CALENDAR_SCOPE]}
