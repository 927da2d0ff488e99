"""
Shared test fixtures.
"""

import os
import threading
import time

import pytest

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


class FakeSignal:
    """Records emissions and calls connected callbacks synchronously."""

    def __init__(self):
        self.calls = []
        self.callbacks = []
        self.lock = threading.Lock()

    def connect(self, callback):
        self.callbacks.append(callback)

    def emit(self, *args):
        with self.lock:
            self.calls.append(args)
        for callback in list(self.callbacks):
            callback(*args)

    def values(self):
        """First argument of every emission."""
        with self.lock:
            return [args[0] if args else None for args in self.calls]


class FakeSignals:
    """Stand-in for ui.SignalEmitter without a Qt event loop."""

    def __init__(self):
        self.log_signal = FakeSignal()
        self.status_signal = FakeSignal()
        self.data_signal = FakeSignal()
        self.connection_lost_signal = FakeSignal()
        self.phrase_signal = FakeSignal()
        self.history_signal = FakeSignal()
        self.settings_signal = FakeSignal()

    def messages(self, level=None):
        return [msg for msg, lvl in self.log_signal.calls if level is None or lvl == level]


class FakeSpeech:
    """Records what would have been spoken."""

    def __init__(self):
        self.spoken = []
        self.settings = None
        self.shut_down = False

    def speak(self, text):
        if not text or not text.strip():
            return False
        self.spoken.append(text)
        return True

    def apply_settings(self, settings):
        self.settings = settings

    def shutdown(self):
        self.shut_down = True


def wait_for(predicate, timeout=2.0):
    """Poll until predicate() is true or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def signals():
    return FakeSignals()


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def prefs_path(tmp_path):
    return str(tmp_path / "prefs.json")


@pytest.fixture
def backend(signals, speech, prefs_path, monkeypatch, tmp_path):
    from core import GloveBackend, Preferences

    # keep a stray gesture_map.json in the working directory out of the tests
    monkeypatch.chdir(tmp_path)
    glove = GloveBackend(signals, preferences=Preferences(prefs_path), speech_engine=speech)
    yield glove
    glove.bluetooth.disconnect(quiet=True)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app
