#!/usr/bin/env python3
"""
Tests for command-line handling.
"""

from config import CONNECTION_SERIAL, CONNECTION_VIRTUAL, GLOVE_DEVICE_NAME, PREFS_FILE
from main import parse_args, connection_options_from_args


def test_defaults_keep_bluetooth_mode():
    args = parse_args([])
    options = connection_options_from_args(args)

    assert 'mode' not in options
    assert options['device_name'] == GLOVE_DEVICE_NAME
    assert options['mac'] is None
    assert args.prefs == PREFS_FILE
    assert args.gesture_map is None


def test_virtual_flag():
    options = connection_options_from_args(parse_args(["--virtual", "--port", "/dev/rfcomm1"]))
    assert options['mode'] == CONNECTION_VIRTUAL
    assert 'port' not in options


def test_port_selects_serial_mode():
    options = connection_options_from_args(parse_args(["--port", "COM5", "--baud", "115200"]))
    assert options['mode'] == CONNECTION_SERIAL
    assert options['port'] == "COM5"
    assert options['baud'] == 115200


def test_direct_mac_and_channel():
    options = connection_options_from_args(
        parse_args(["--mac", "98:D3:31:F5:1A:2B", "--channel", "3", "--device-name", "Glove2"]))
    assert options['mac'] == "98:D3:31:F5:1A:2B"
    assert options['channel'] == 3
    assert options['device_name'] == "Glove2"
