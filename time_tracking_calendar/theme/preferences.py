"""Theme preference store - persists the dark-mode flag.

The flag is a single key-value entry, ``isDarkMode``, holding the string
"true" or "false". Anything else (including a missing entry) reads as light
mode.

Firestore Structure:
    users/{owner}/preferences/theme -> {"isDarkMode": "true", "updated_at": ...}

File Storage Structure:
    preferences/{owner}.json  (owner percent-encoded, "@" kept)

Environment Variables:
    TTC_PREFERENCES_FORCE_FILE: Set to "1" to use local file storage (dev mode)
    TTC_PREFERENCES_DIR: Directory for file-based storage (default: preferences/)
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote

from ..firestore import get_firestore_client

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "isDarkMode"
DEFAULT_OWNER = "local"


@dataclass(slots=True)
class ThemePreference:
    """Persisted theme preference for one owner."""

    is_dark: bool = False
    updated_at: Optional[datetime] = None

    def to_api_dict(self) -> Dict[str, Any]:
        return {
            "isDarkMode": self.is_dark,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


# ============================================================================
# Configuration Helpers
# ============================================================================


def _force_file_fallback() -> bool:
    """Check if file-based storage should be used (dev mode)."""
    return os.getenv("TTC_PREFERENCES_FORCE_FILE", "0") == "1"


def _preferences_dir() -> Path:
    """Return the directory for file-based preference storage."""
    return Path(
        os.getenv(
            "TTC_PREFERENCES_DIR",
            Path(__file__).resolve().parents[2] / "preferences",
        )
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _owner_file(owner: str) -> Path:
    return _preferences_dir() / f"{quote(owner, safe='@')}.json"


def _to_record(preference: ThemePreference) -> Dict[str, Any]:
    return {
        DARK_MODE_KEY: "true" if preference.is_dark else "false",
        "updated_at": preference.updated_at.isoformat() if preference.updated_at else None,
    }


def _from_record(data: Dict[str, Any]) -> ThemePreference:
    updated_at = None
    if data.get("updated_at"):
        updated_at = datetime.fromisoformat(data["updated_at"])
    return ThemePreference(
        is_dark=str(data.get(DARK_MODE_KEY, "false")) == "true",
        updated_at=updated_at,
    )


# ============================================================================
# Backends
# ============================================================================


def _get_file(owner: str) -> ThemePreference:
    file_path = _owner_file(owner)
    if not file_path.exists():
        return ThemePreference()

    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return _from_record(data)


def _save_file(owner: str, preference: ThemePreference) -> None:
    file_path = _owner_file(owner)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(_to_record(preference), f, indent=2)


def _document(db, owner: str):
    return (
        db.collection("users")
        .document(owner)
        .collection("preferences")
        .document("theme")
    )


def _get_firestore(owner: str) -> ThemePreference:
    db = get_firestore_client()
    if db is None:
        return _get_file(owner)

    doc = _document(db, owner).get()
    if not doc.exists:
        return ThemePreference()
    return _from_record(doc.to_dict())


def _save_firestore(owner: str, preference: ThemePreference) -> None:
    db = get_firestore_client()
    if db is None:
        _save_file(owner, preference)
        return
    _document(db, owner).set(_to_record(preference))


# ============================================================================
# Public API
# ============================================================================


def get_preference(owner: str = DEFAULT_OWNER) -> ThemePreference:
    """Return the stored preference for ``owner`` (light mode if none)."""
    if _force_file_fallback():
        return _get_file(owner)
    return _get_firestore(owner)


def get_dark_mode(owner: str = DEFAULT_OWNER) -> bool:
    return get_preference(owner).is_dark


def set_dark_mode(owner: str, is_dark: bool) -> ThemePreference:
    """Persist the dark-mode flag and return the stored preference."""
    preference = ThemePreference(is_dark=bool(is_dark), updated_at=_now())
    if _force_file_fallback():
        _save_file(owner, preference)
    else:
        _save_firestore(owner, preference)
    logger.info("Theme preference for %s set to %s", owner, "dark" if is_dark else "light")
    return preference


def toggle_dark_mode(owner: str = DEFAULT_OWNER) -> ThemePreference:
    """Flip the persisted flag."""
    return set_dark_mode(owner, not get_dark_mode(owner))
