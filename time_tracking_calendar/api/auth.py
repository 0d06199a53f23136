"""Google / Firebase ID token verification helpers."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Header, HTTPException, status
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

logger = logging.getLogger(__name__)

DEV_BYPASS_ENV = "TTC_DEV_AUTH_BYPASS"
CLIENT_ID_ENV = "GOOGLE_OAUTH_CLIENT_ID"
ALLOWED_AUDIENCE_ENV = "GOOGLE_OAUTH_AUDIENCE"
FIREBASE_PROJECT_ENV = "TTC_FIREBASE_PROJECT_ID"


class AuthError(HTTPException):
    def __init__(self, detail: str, code: int = status.HTTP_401_UNAUTHORIZED) -> None:
        super().__init__(status_code=code, detail=detail)


@dataclass(slots=True)
class UserProfile:
    """Signed-in user as reported by the identity provider."""

    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    def to_api_dict(self) -> Dict[str, Any]:
        return {
            "signedIn": True,
            "email": self.email,
            "displayName": self.display_name,
            "photoURL": self.photo_url,
        }


@lru_cache
def _audiences() -> list[str]:
    audience = os.getenv(ALLOWED_AUDIENCE_ENV) or os.getenv(CLIENT_ID_ENV)
    if not audience:
        return []
    return [aud.strip() for aud in audience.split(",") if aud.strip()]


def _verify(token: str) -> dict:
    request = google_requests.Request()

    firebase_project = os.getenv(FIREBASE_PROJECT_ENV)
    if firebase_project:
        try:
            return id_token.verify_firebase_token(token, request, audience=firebase_project)
        except ValueError as exc:
            raise AuthError(f"Invalid token: {exc}") from exc

    audiences = _audiences()
    if not audiences:
        raise AuthError(
            "Server missing GOOGLE_OAUTH_CLIENT_ID, audience or Firebase project config."
        )

    validation_error: ValueError | None = None
    for audience in audiences:
        try:
            return id_token.verify_oauth2_token(token, request, audience)
        except ValueError as exc:
            validation_error = exc
    raise AuthError(f"Invalid token: {validation_error}")


def get_current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    dev_user: str | None = Header(default=None, alias="X-User-Email"),
    dev_name: str | None = Header(default=None, alias="X-User-Name"),
    dev_photo: str | None = Header(default=None, alias="X-User-Photo"),
) -> UserProfile:
    """Return the authenticated user's profile.

    During development/testing set TTC_DEV_AUTH_BYPASS=1 and supply X-User-Email.
    """

    if os.getenv(DEV_BYPASS_ENV) == "1":
        if dev_user:
            return UserProfile(email=dev_user, display_name=dev_name, photo_url=dev_photo)
        raise AuthError(
            "Auth bypass enabled but X-User-Email header missing (dev only)."
        )

    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Missing Bearer token.")

    token = authorization.split(" ", 1)[1].strip()
    idinfo = _verify(token)

    email = idinfo.get("email")
    if not email:
        raise AuthError("Token missing email claim.")
    return UserProfile(
        email=email,
        display_name=idinfo.get("name"),
        photo_url=idinfo.get("picture"),
    )


def get_optional_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    dev_user: str | None = Header(default=None, alias="X-User-Email"),
    dev_name: str | None = Header(default=None, alias="X-User-Name"),
    dev_photo: str | None = Header(default=None, alias="X-User-Photo"),
) -> Optional[UserProfile]:
    """Like ``get_current_user`` but a signed-out request yields None."""
    try:
        return get_current_user(authorization, dev_user, dev_name, dev_photo)
    except AuthError as exc:
        logger.debug("Treating request as signed out: %s", exc.detail)
        return None
