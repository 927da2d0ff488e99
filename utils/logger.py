"""
Logging utilities.
"""

import html
import time
from enum import Enum


class LogLevel(Enum):
    """Log level enumeration."""
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


LOG_COLORS = {
    LogLevel.ERROR: "#e53935",
    LogLevel.WARNING: "#f0a000",
    LogLevel.SUCCESS: "#2e9d5b",
    LogLevel.INFO: None,  # palette text colour
}


def parse_level(level):
    """Map a level string to LogLevel, defaulting to INFO."""
    try:
        return LogLevel(level)
    except ValueError:
        return LogLevel.INFO


def get_log_color(level):
    """
    Get HTML color code for log level.

    Args:
        level: LogLevel enum value

    Returns:
        HTML color code string, or None for the default text colour
    """
    return LOG_COLORS.get(level)


def format_log_html(message, level, timestamp=None):
    """Render one activity log line as HTML."""
    log_level = parse_level(level)
    stamp = timestamp or time.strftime("%H:%M:%S")
    color = get_log_color(log_level)
    message = html.escape(message)
    if color is None:
        return f'[{stamp}] {message}'
    return f'<span style="color:{color};">[{stamp}] {message}</span>'
