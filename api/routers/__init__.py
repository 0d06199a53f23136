"""API Routers Package.

Each router handles one area of the service:
- view.py: grid layouts, navigation and the rendered page
- theme.py: generated palettes, stylesheet and the dark-mode flag
- calendar.py: Google Calendar event CRUD
- account.py: the signed-in user's profile

Usage in main.py:
    from api.routers import view_router, theme_router, calendar_router, account_router

    app.include_router(view_router, prefix="/view", tags=["view"])
    app.include_router(theme_router, prefix="/theme", tags=["theme"])
    app.include_router(calendar_router, prefix="/calendar", tags=["calendar"])
    app.include_router(account_router, prefix="/account", tags=["account"])
"""

from .view import router as view_router
from .theme import router as theme_router
from .calendar import router as calendar_router
from .account import router as account_router

__all__ = [
    "view_router",
    "theme_router",
    "calendar_router",
    "account_router",
]
