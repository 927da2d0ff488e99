"""
HandSpeak - Main Entry Point

Desktop companion for the GestureGlove: receives gesture codes over
Bluetooth, shows and speaks the matching phrases, and keeps a history.
"""

import argparse
import sys

from PySide6.QtWidgets import QApplication

from config import (PREFS_FILE, GLOVE_DEVICE_NAME, BLUETOOTH_BAUD, DEFAULT_RFCOMM_CHANNEL,
                    CONNECTION_SERIAL, CONNECTION_VIRTUAL)
from core import GloveBackend, Preferences
from ui import SignalEmitter, HandSpeakWindow


def parse_args(argv=None):
    """Command-line options controlling how the glove is reached."""
    parser = argparse.ArgumentParser(description="HandSpeak gesture glove companion")
    parser.add_argument("--virtual", action="store_true",
                        help="use the simulated glove instead of hardware")
    parser.add_argument("--port", help="serial port bound to the glove (e.g. /dev/rfcomm0, COM5)")
    parser.add_argument("--baud", type=int, default=BLUETOOTH_BAUD, help="serial baud rate")
    parser.add_argument("--device-name", default=GLOVE_DEVICE_NAME,
                        help="name of the paired glove to look up")
    parser.add_argument("--mac", help="glove MAC address (skips the paired device lookup)")
    parser.add_argument("--channel", type=int, default=DEFAULT_RFCOMM_CHANNEL,
                        help="RFCOMM channel")
    parser.add_argument("--prefs", default=PREFS_FILE, help="preferences file")
    parser.add_argument("--gesture-map", help="JSON file with gesture code to phrase mapping")
    return parser.parse_args(argv)


def connection_options_from_args(args):
    options = {
        'device_name': args.device_name,
        'mac': args.mac,
        'channel': args.channel,
        'baud': args.baud,
    }
    if args.virtual:
        options['mode'] = CONNECTION_VIRTUAL
    elif args.port:
        options['mode'] = CONNECTION_SERIAL
        options['port'] = args.port
    return options


def main():
    """Main application entry point."""
    app = QApplication(sys.argv)
    args = parse_args(app.arguments()[1:])

    # Create signal emitter (for thread-safe communication)
    signals = SignalEmitter()

    # Create backend
    backend = GloveBackend(
        signals,
        preferences=Preferences(args.prefs),
        gesture_map_file=args.gesture_map,
        connection_options=connection_options_from_args(args),
    )

    # Create and show main window
    window = HandSpeakWindow(backend)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
