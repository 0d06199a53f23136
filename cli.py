#!/usr/bin/env python3
"""Time Tracking Calendar CLI."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date

from time_tracking_calendar.config import VIEW_DAY_CHOICES, ConfigError, Settings, load_settings
from time_tracking_calendar.theme import (
    DEFAULT_OWNER,
    ColorError,
    derive_theme,
    get_dark_mode,
    set_dark_mode,
    theme_stylesheet,
    toggle_dark_mode,
)
from time_tracking_calendar.view import GridLayout, ViewError, ViewState, navigate, render_state


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="time-tracking-calendar",
        description="Calendar grid and theme tools.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    grid_parser = subparsers.add_parser(
        "grid",
        help="Print the time grid for a day, 3-day or week view.",
    )
    grid_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Reference date (YYYY-MM-DD). Defaults to today.",
    )
    grid_parser.add_argument(
        "--days",
        type=int,
        choices=VIEW_DAY_CHOICES,
        default=None,
        help="Visible days. Defaults to TTC_DEFAULT_VIEW_DAYS.",
    )
    grid_parser.add_argument(
        "--go",
        choices=("today", "prev", "next"),
        action="append",
        default=[],
        help="Apply a navigation step before printing (repeatable).",
    )

    theme_parser = subparsers.add_parser(
        "theme",
        help="Print the light and dark color roles for a source color.",
    )
    theme_parser.add_argument("--color", help="Source color. Defaults to TTC_SOURCE_COLOR.")
    theme_parser.add_argument(
        "--mode",
        choices=("light", "dark", "both"),
        default="both",
        help="Which palette to print.",
    )

    css_parser = subparsers.add_parser(
        "css",
        help="Print the generated theme stylesheet.",
    )
    css_parser.add_argument("--color", help="Source color. Defaults to TTC_SOURCE_COLOR.")

    mode_parser = subparsers.add_parser(
        "dark-mode",
        help="Show, set or toggle the persisted dark-mode preference.",
    )
    mode_parser.add_argument(
        "action",
        nargs="?",
        choices=("show", "on", "off", "toggle"),
        default="show",
    )
    mode_parser.add_argument(
        "--owner",
        default=DEFAULT_OWNER,
        help="Preference owner (user email). Defaults to the local owner.",
    )

    return parser


def format_grid(layout: GridLayout) -> str:
    """Plain-text table of a grid layout."""
    width = 10
    lines = [layout.caption, ""]
    for row in layout.rows():
        parts = []
        for cell in row:
            if cell.kind == "day-header":
                text = f"*{cell.label}" if cell.is_today else cell.label
            elif cell.kind == "time-slot":
                text = "."
            else:
                text = cell.label
            parts.append(text.ljust(width))
        lines.append("".join(parts).rstrip())
    return "\n".join(lines)


def _cmd_grid(settings: Settings, ref: date | None, days: int | None, steps: list[str]) -> int:
    state = ViewState(ref or date.today(), days or settings.default_view_days)
    try:
        for step in steps:
            state = navigate(state, step)
        layout = render_state(state, week_start=settings.week_start)
    except ViewError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(format_grid(layout))
    print()
    print(
        "Range:",
        layout.range_start.isoformat(),
        "to",
        layout.range_end.isoformat(),
        "(exclusive)",
    )
    return 0


def _cmd_theme(settings: Settings, color: str | None, mode: str) -> int:
    try:
        theme = derive_theme(color or settings.source_color, strict=settings.strict_colors)
    except ColorError as exc:
        print(exc, file=sys.stderr)
        return 1

    base = theme.base
    print(f"Source {theme.source_color} -> hsl({base.hue}, {base.saturation}%, {base.lightness}%)")
    for name, roles in (("light", theme.light), ("dark", theme.dark)):
        if mode not in (name, "both"):
            continue
        print(f"\n[{name}]")
        for role, value in roles.items():
            print(f"  {role}: {value}")
    return 0


def _cmd_css(settings: Settings, color: str | None) -> int:
    try:
        theme = derive_theme(color or settings.source_color, strict=settings.strict_colors)
    except ColorError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(theme_stylesheet(theme), end="")
    return 0


def _cmd_dark_mode(action: str, owner: str) -> int:
    if action == "on":
        preference = set_dark_mode(owner, True)
    elif action == "off":
        preference = set_dark_mode(owner, False)
    elif action == "toggle":
        preference = toggle_dark_mode(owner)
    else:
        print("dark" if get_dark_mode(owner) else "light")
        return 0
    print("dark" if preference.is_dark else "light")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=os.getenv("TTC_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.command == "grid":
        return _cmd_grid(settings, args.date, args.days, args.go)
    if args.command == "theme":
        return _cmd_theme(settings, args.color, args.mode)
    if args.command == "css":
        return _cmd_css(settings, args.color)
    if args.command == "dark-mode":
        return _cmd_dark_mode(args.action, args.owner)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
