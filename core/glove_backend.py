"""
Main HandSpeak backend.
"""

import os
import threading

from config import (PREFS_FILE, GESTURE_MAP_FILE, GLOVE_DEVICE_NAME, DEFAULT_RFCOMM_CHANNEL,
                    BLUETOOTH_PORT, BLUETOOTH_BAUD, PLACEHOLDER_PHRASE,
                    CONNECTION_BLUETOOTH, CONNECTION_SERIAL, CONNECTION_VIRTUAL,
                    STATUS_DISCONNECTED, STATUS_CONNECTING, CONNECT_JOIN_TIMEOUT)
from .bluetooth_manager import BluetoothManager, find_paired_device
from .gesture_map import GestureMap
from .gesture_processor import GestureProcessor
from .history_manager import HistoryManager
from .preferences import Preferences
from .settings_manager import SettingsManager
from .speech_engine import SpeechEngine


class GloveBackend:
    """Owns the glove link, speech, history and settings, and the app state."""

    CONNECTION_MODES = (CONNECTION_BLUETOOTH, CONNECTION_SERIAL, CONNECTION_VIRTUAL)

    def __init__(self, signal_emitter, preferences=None, speech_engine=None,
                 gesture_map_file=None, connection_options=None):
        self.signals = signal_emitter

        # Persistence
        self.preferences = preferences if preferences is not None else Preferences(PREFS_FILE)
        self.settings_manager = SettingsManager(self.preferences)
        self.history = HistoryManager(self.preferences)

        # Gesture decoding
        self.gesture_map = GestureMap()
        self._load_gesture_map(gesture_map_file)
        self.processor = GestureProcessor(self.gesture_map)

        # Platform integrations
        self.bluetooth = BluetoothManager(signal_emitter)
        self.speech = speech_engine if speech_engine is not None else SpeechEngine(signal_emitter)
        self.speech.apply_settings(self.settings)

        # State
        self.connection_options = {
            'mode': CONNECTION_BLUETOOTH,
            'device_name': GLOVE_DEVICE_NAME,
            'mac': None,
            'channel': DEFAULT_RFCOMM_CHANNEL,
            'port': BLUETOOTH_PORT,
            'baud': BLUETOOTH_BAUD,
        }
        if connection_options:
            self.set_connection_options(**connection_options)

        self.status = STATUS_DISCONNECTED
        self.current_phrase = PLACEHOLDER_PHRASE
        self.connect_thread = None

        self.signals.status_signal.connect(self._on_status)

    @property
    def settings(self):
        return self.settings_manager.settings

    def _load_gesture_map(self, path):
        """Load a gesture table override, if one is configured or present."""
        if path is None:
            if not os.path.exists(GESTURE_MAP_FILE):
                return
            path = GESTURE_MAP_FILE

        if self.gesture_map.load_file(path):
            self.signals.log_signal.emit(
                f"Loaded {len(self.gesture_map)} gestures from {path}", "info")
        else:
            self.signals.log_signal.emit(
                f"Could not load gesture map {path} - using built-in gestures", "warning")

    def _on_status(self, status):
        self.status = status

    # ========================================================
    #                  CONNECTION
    # ========================================================

    def set_connection_options(self, **options):
        """Update how connect() reaches the glove."""
        for key, value in options.items():
            if key not in self.connection_options:
                raise KeyError(f"Unknown connection option: {key}")
            if key == 'mode' and value not in self.CONNECTION_MODES:
                raise ValueError(f"Unknown connection mode: {value}")
            self.connection_options[key] = value

    def is_connected(self):
        return self.bluetooth.is_connected()

    def is_connecting(self):
        return self.status == STATUS_CONNECTING

    def connect(self, wait=False):
        """
        Connect to the glove according to the connection options.

        Blocking connects run on a background thread unless `wait` is set.
        """
        if self.is_connected() or self.is_connecting():
            return

        mode = self.connection_options['mode']
        if mode == CONNECTION_VIRTUAL:
            self.bluetooth.connect_virtual()
            return

        self.signals.status_signal.emit(STATUS_CONNECTING)
        if wait:
            self._connect_worker()
        else:
            self.connect_thread = threading.Thread(target=self._connect_worker, daemon=True)
            self.connect_thread.start()

    def _connect_worker(self):
        options = self.connection_options
        try:
            if options['mode'] == CONNECTION_SERIAL:
                success = self.bluetooth.connect_serial(options['port'], options['baud'])
            else:
                mac = options['mac'] or find_paired_device(options['device_name'])
                if mac is None:
                    self.signals.log_signal.emit(
                        f"Device {options['device_name']} not paired", "error")
                    self.signals.status_signal.emit(STATUS_DISCONNECTED)
                    return
                success = self.bluetooth.connect_direct(mac, options['channel'])

            if success:
                self.signals.log_signal.emit(
                    f"Connected to {options['device_name']}", "success")

        except Exception as e:
            self.signals.log_signal.emit(f"Connection error: {e}", "error")
            self.signals.status_signal.emit(STATUS_DISCONNECTED)

    def toggle_connection(self):
        """Connect when disconnected, disconnect otherwise."""
        if self.is_connected():
            self.disconnect()
        else:
            self.connect()

    def disconnect(self):
        """Close the link and reset the recognition state."""
        self.bluetooth.disconnect()
        self.processor.reset()
        self._set_phrase(PLACEHOLDER_PHRASE)

    def handle_connection_lost(self):
        """Called on the UI thread after the reader gave up on the link."""
        self.signals.log_signal.emit("Glove connection lost", "warning")
        self.disconnect()

    # ========================================================
    #                  GESTURES & SPEECH
    # ========================================================

    def _set_phrase(self, phrase):
        self.current_phrase = phrase
        self.signals.phrase_signal.emit(phrase)

    def process_gesture_data(self, raw):
        """
        Handle one token received from the glove.

        Args:
            raw: Text read from the link

        Returns:
            GestureResult
        """
        result = self.processor.process(raw)
        self._set_phrase(result.phrase)

        if result.should_speak:
            self.speech.speak(result.phrase)
            self.history.add(result.phrase)
            self.signals.history_signal.emit()
            self.signals.log_signal.emit(f"{result.code} → {result.phrase}", "info")

        return result

    def repeat_current(self):
        """Speak the current phrase again."""
        if self.current_phrase == PLACEHOLDER_PHRASE:
            return False
        return self.speech.speak(self.current_phrase)

    # ========================================================
    #                  HISTORY
    # ========================================================

    def speak_history_item(self, item_id):
        item = self.history.get(item_id)
        if item is None:
            return False
        return self.speech.speak(item.text)

    def delete_history_item(self, item_id):
        removed = self.history.remove(item_id)
        if removed:
            self.signals.history_signal.emit()
        return removed

    def clear_history(self):
        self.history.clear()
        self.signals.history_signal.emit()
        self.signals.log_signal.emit("History cleared", "info")

    # ========================================================
    #                  SETTINGS
    # ========================================================

    def update_settings(self, **changes):
        """Validate, persist and apply settings changes."""
        rejected = self.settings_manager.update(**changes)
        for key, message in rejected:
            self.signals.log_signal.emit(f"Setting not changed: {message}", "warning")
        self._apply_settings()
        return rejected

    def reset_settings(self):
        self.settings_manager.reset()
        self._apply_settings()
        self.signals.log_signal.emit("Settings reset to defaults", "success")

    def _apply_settings(self):
        settings = self.settings.copy()
        self.speech.apply_settings(settings)
        self.signals.settings_signal.emit(settings)

    # ========================================================
    #                  SHUTDOWN
    # ========================================================

    def cleanup(self):
        """Cleanup all resources."""
        # let a pending connect finish so its link is closed below
        if self.connect_thread is not None and self.connect_thread.is_alive():
            self.connect_thread.join(timeout=CONNECT_JOIN_TIMEOUT)
        self.connect_thread = None

        try:
            self.bluetooth.disconnect()
        except Exception as e:
            self.signals.log_signal.emit(f"Error disconnecting glove: {e}", "warning")

        try:
            self.speech.shutdown()
        except Exception as e:
            self.signals.log_signal.emit(f"Error stopping speech: {e}", "warning")

        self.signals.log_signal.emit("Cleanup complete", "info")
