"""
Qt signal emitter for thread-safe UI updates.
"""

from PySide6.QtCore import QObject, Signal


class SignalEmitter(QObject):
    """Qt signal emitter for thread-safe UI updates between threads."""

    log_signal = Signal(str, str)  # message, level
    status_signal = Signal(str)  # connection status
    data_signal = Signal(str)  # raw text received from the glove
    connection_lost_signal = Signal()
    phrase_signal = Signal(str)  # phrase shown on the home screen
    history_signal = Signal()  # history list changed
    settings_signal = Signal(object)  # Settings snapshot
