#!/usr/bin/env python3
"""
Tests for activity log formatting.
"""

from utils.logger import LogLevel, parse_level, get_log_color, format_log_html


def test_parse_level_defaults_to_info():
    assert parse_level("error") is LogLevel.ERROR
    assert parse_level("verbose") is LogLevel.INFO


def test_info_uses_palette_colour():
    assert get_log_color(LogLevel.INFO) is None
    assert format_log_html("ready", "info", timestamp="12:00:00") == "[12:00:00] ready"


def test_levels_are_coloured_and_escaped():
    line = format_log_html("A → <Hello>", "error", timestamp="12:00:00")
    assert line.startswith(f'<span style="color:{get_log_color(LogLevel.ERROR)};">')
    assert "&lt;Hello&gt;" in line
