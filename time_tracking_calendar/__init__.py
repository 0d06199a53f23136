"""Time Tracking Calendar: calendar grid, dynamic theme and Google Calendar access."""

__version__ = "0.1.0"
