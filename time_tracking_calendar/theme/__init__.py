"""Dynamic theming: source color to light/dark color roles, plus the mode flag."""
from __future__ import annotations

from .colors import HSL, ColorError, hex_to_hsl, hsl_css
from .palette import (
    DARK_SELECTOR,
    ROLE_NAMES,
    ROLE_PREFIX,
    ROLE_TONES,
    STYLE_ELEMENT_ID,
    Theme,
    derive_theme,
    normalize_source_color,
    theme_stylesheet,
)
from .preferences import (
    DARK_MODE_KEY,
    DEFAULT_OWNER,
    ThemePreference,
    get_dark_mode,
    get_preference,
    set_dark_mode,
    toggle_dark_mode,
)

__all__ = [
    # Colors
    "HSL",
    "ColorError",
    "hex_to_hsl",
    "hsl_css",
    # Palette
    "DARK_SELECTOR",
    "ROLE_NAMES",
    "ROLE_PREFIX",
    "ROLE_TONES",
    "STYLE_ELEMENT_ID",
    "Theme",
    "derive_theme",
    "normalize_source_color",
    "theme_stylesheet",
    # Preference Store
    "DARK_MODE_KEY",
    "DEFAULT_OWNER",
    "ThemePreference",
    "get_dark_mode",
    "get_preference",
    "set_dark_mode",
    "toggle_dark_mode",
]
