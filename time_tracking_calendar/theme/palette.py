"""Theme generator: one source color to light and dark color-role tables.

Each role is derived from the source hue and saturation by a fixed
saturation offset and a fixed, mode-specific lightness. Both tables are
written into one stylesheet; the light rules live on ``:root`` and the dark
rules override them under ``body[data-theme="dark"]``, so switching modes
only flips an attribute and never recomputes the palette.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple, Tuple

from .colors import HSL, hex_to_hsl, hsl_css

ROLE_PREFIX = "--md-sys-color-"
STYLE_ELEMENT_ID = "dynamic-theme-styles"
DARK_SELECTOR = 'body[data-theme="dark"]'


class RoleTone(NamedTuple):
    saturation_delta: float
    lightness: float


# (role, light tone, dark tone)
ROLE_TONES: Tuple[Tuple[str, RoleTone, RoleTone], ...] = (
    ("primary", RoleTone(0, 40), RoleTone(0, 80)),
    ("on-primary", RoleTone(0, 100), RoleTone(0, 20)),
    ("primary-container", RoleTone(0, 90), RoleTone(0, 30)),
    ("on-primary-container", RoleTone(0, 10), RoleTone(0, 90)),
    ("secondary", RoleTone(-10, 40), RoleTone(-10, 80)),
    ("on-secondary", RoleTone(0, 100), RoleTone(-10, 20)),
    ("secondary-container", RoleTone(-10, 90), RoleTone(-10, 30)),
    ("on-secondary-container", RoleTone(-10, 10), RoleTone(-10, 90)),
    ("surface", RoleTone(0, 99), RoleTone(0, 6)),
    ("on-surface", RoleTone(0, 10), RoleTone(0, 90)),
    ("surface-variant", RoleTone(-5, 90), RoleTone(-5, 30)),
    ("on-surface-variant", RoleTone(-5, 30), RoleTone(-5, 80)),
    ("surface-container", RoleTone(-15, 95), RoleTone(-15, 12)),
    ("surface-container-high", RoleTone(-15, 92), RoleTone(-15, 17)),
    ("surface-container-highest", RoleTone(-15, 90), RoleTone(-15, 22)),
    ("outline", RoleTone(-10, 50), RoleTone(-10, 60)),
    ("outline-variant", RoleTone(-10, 80), RoleTone(-10, 30)),
)

ROLE_NAMES: Tuple[str, ...] = tuple(role for role, _, _ in ROLE_TONES)


@dataclass(frozen=True)
class Theme:
    """Light and dark role tables derived from one source color."""

    source_color: str
    base: HSL
    light: Mapping[str, str]
    dark: Mapping[str, str]

    def roles(self, is_dark: bool) -> Mapping[str, str]:
        return self.dark if is_dark else self.light

    def to_api_dict(self) -> Dict[str, Any]:
        """Convert to API-friendly dict (camelCase for JavaScript)."""
        return {
            "sourceColor": self.source_color,
            "base": {
                "hue": self.base.hue,
                "saturation": self.base.saturation,
                "lightness": self.base.lightness,
            },
            "light": dict(self.light),
            "dark": dict(self.dark),
        }


def normalize_source_color(source_hex: str) -> str:
    """Drop the alpha pair of an ``#RRGGBBAA`` color."""
    source_hex = source_hex.strip()
    if len(source_hex) == 9:
        return source_hex[:7]
    return source_hex


def _role_table(base: HSL, mode: int) -> Mapping[str, str]:
    table = {}
    for role, *tones in ROLE_TONES:
        tone = tones[mode]
        table[f"{ROLE_PREFIX}{role}"] = hsl_css(
            base.hue, base.saturation + tone.saturation_delta, tone.lightness
        )
    return MappingProxyType(table)


def derive_theme(source_hex: str, *, strict: bool = False) -> Theme:
    """Derive the light and dark role tables for ``source_hex``."""
    source = normalize_source_color(source_hex)
    base = hex_to_hsl(source, strict=strict)
    return Theme(
        source_color=source,
        base=base,
        light=_role_table(base, 0),
        dark=_role_table(base, 1),
    )


def _rules(roles: Mapping[str, str], indent: str) -> str:
    return "\n".join(f"{indent}{name}: {value};" for name, value in roles.items())


def theme_stylesheet(theme: Theme) -> str:
    """Render the stylesheet holding both palettes."""
    return (
        ":root {\n"
        f"{_rules(theme.light, '    ')}\n"
        "}\n"
        f"{DARK_SELECTOR} {{\n"
        f"{_rules(theme.dark, '    ')}\n"
        "}\n"
    )
