"""FastAPI service for the Time Tracking Calendar."""
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from api.dependencies import ALLOWED_ORIGINS, get_settings
from api.routers import account_router, calendar_router, theme_router, view_router

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Time Tracking Calendar API",
    version="0.1.0",
    description="Calendar grid, dynamic theme and Google Calendar access.",
)

origins = [origin for origin in ALLOWED_ORIGINS if origin]

if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(view_router, prefix="/view", tags=["view"])
app.include_router(theme_router, prefix="/theme", tags=["theme"])
app.include_router(calendar_router, prefix="/calendar", tags=["calendar"])
app.include_router(account_router, prefix="/account", tags=["account"])


@app.get("/")
def index() -> RedirectResponse:
    return RedirectResponse(url="/view/page")


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint with service configuration status."""
    settings = get_settings()

    services = {
        "calendar": "configured" if all([
            os.getenv("TTC_CALENDAR_CLIENT_SECRET"),
            os.getenv("TTC_CALENDAR_REFRESH_TOKEN"),
        ]) else "token_forwarding",
        "identity": "configured" if (
            os.getenv("TTC_FIREBASE_PROJECT_ID") or os.getenv("GOOGLE_OAUTH_CLIENT_ID")
        ) else "not_configured",
        "preferences": "file" if os.getenv("TTC_PREFERENCES_FORCE_FILE") == "1" else "firestore",
    }

    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "sourceColor": settings.source_color,
        "services": services,
    }
