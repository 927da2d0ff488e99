#!/usr/bin/env python3
"""
Widget tests for the HandSpeak window, run on the offscreen Qt platform.
"""

import time

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QMessageBox

from config import (PLACEHOLDER_PHRASE, STATUS_CONNECTED, STATUS_CONNECTING, STATUS_DISCONNECTED,
                    STATUS_LOST, CONNECTION_BLUETOOTH, CONNECTION_VIRTUAL)
from conftest import FakeSpeech
from core import GloveBackend, Preferences, Settings
from ui import (SignalEmitter, HandSpeakWindow, ConnectionDialog, VirtualGloveMonitor,
                ThemeManager)
from ui.home_screen import SCREEN_HISTORY, SCREEN_SETTINGS


def process_until(app, predicate, timeout=2.0):
    """Run the Qt event loop until predicate() holds."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        app.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def window(qapp, prefs_path, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    backend = GloveBackend(SignalEmitter(), preferences=Preferences(prefs_path),
                           speech_engine=FakeSpeech())
    win = HandSpeakWindow(backend)
    yield win
    backend.bluetooth.disconnect(quiet=True)
    win.deleteLater()


def test_window_starts_on_home_screen(window):
    assert window.stack.currentWidget() is window.home
    assert window.home.phrase_label.text() == PLACEHOLDER_PHRASE
    assert window.home.status_label.text() == "Disconnected"
    assert not window.home.repeat_btn.isEnabled()
    assert window.log_dock.isHidden()


def test_navigation_and_escape(window):
    window.home.history_btn.click()
    assert window.stack.currentWidget() is window.history_screen

    QTest.keyClick(window, Qt.Key.Key_Escape)
    assert window.stack.currentWidget() is window.home

    window.home.settings_btn.click()
    assert window.stack.currentWidget() is window.settings_screen
    window.settings_screen.back_btn.click()
    assert window.stack.currentWidget() is window.home


def test_show_screen_unknown_name_goes_home(window):
    window.show_screen(SCREEN_SETTINGS)
    window.show_screen("nowhere")
    assert window.stack.currentWidget() is window.home


def test_gesture_updates_phrase_and_history(window):
    window.backend.process_gesture_data("A")
    window.backend.process_gesture_data("B")

    assert window.home.phrase_label.text() == "Thank you"
    window.show_screen(SCREEN_HISTORY)
    assert window.history_screen.list_widget.count() == 2
    assert window.history_screen.empty_label.isHidden()

    window.history_screen.clear_btn.click()
    assert window.history_screen.list_widget.count() == 0
    assert not window.history_screen.clear_btn.isEnabled()


def test_status_updates_connect_button(window):
    window.backend.signals.status_signal.emit(STATUS_CONNECTED)
    assert "Disconnect" in window.home.connect_btn.text()
    assert window.home.repeat_btn.isEnabled()

    window.backend.signals.status_signal.emit(STATUS_LOST)
    assert window.home.status_label.text() == STATUS_LOST
    assert not window.home.repeat_btn.isEnabled()


def test_settings_controls_update_backend(window):
    window.settings_screen.language_combo.setCurrentText("Hindi")
    window.settings_screen.theme_switch.setChecked(True)
    window.home.volume_slider.slider.setValue(50)

    settings = window.backend.settings
    assert settings.language == "Hindi"
    assert settings.dark_theme is True
    assert settings.volume == pytest.approx(0.5)
    assert window.backend.speech.settings.language == "Hindi"


def test_reset_asks_for_confirmation(window, monkeypatch):
    window.backend.update_settings(voice_type="Female", font_size="Small")

    monkeypatch.setattr(QMessageBox, "question",
                        lambda *args, **kwargs: QMessageBox.StandardButton.No)
    assert not window.settings_screen.confirm_reset()
    assert window.backend.settings.voice_type == "Female"

    monkeypatch.setattr(QMessageBox, "question",
                        lambda *args, **kwargs: QMessageBox.StandardButton.Yes)
    assert window.settings_screen.confirm_reset()
    assert window.backend.settings.voice_type == "Male"
    assert window.settings_screen.voice_combo.currentText() == "Male"
    assert window.settings_screen.font_combo.currentText() == "Large"


def test_log_is_bounded(window, monkeypatch):
    monkeypatch.setattr("ui.main_window.MAX_LOG_LINES", 5)
    for i in range(20):
        window.add_log(f"message {i}", "info")
    assert window.log_display.document().blockCount() <= 5
    assert "message 19" in window.log_display.toPlainText()


def test_connection_dialog_sets_options(window):
    dialog = ConnectionDialog(window.backend, window)
    dialog.virtual_radio.setChecked(True)
    dialog.accept()

    assert window.backend.connection_options['mode'] == CONNECTION_VIRTUAL


def test_virtual_glove_monitor_drives_the_app(qapp, window):
    window.backend.set_connection_options(mode=CONNECTION_VIRTUAL)
    window.backend.connect()
    monitor = VirtualGloveMonitor(window.backend, window)

    assert monitor.send_code("C")
    assert process_until(qapp, lambda: window.home.phrase_label.text() == "I need help")
    assert window.backend.speech.spoken == ["I need help"]
    assert monitor.stats_label.text() == "Codes sent: 1"

    monitor.hang_up()
    assert process_until(qapp, lambda: not window.backend.is_connected()
                         and window.home.phrase_label.text() == PLACEHOLDER_PHRASE)
    assert window.home.status_label.text() == STATUS_LOST


class FakeApp:
    def __init__(self):
        self.styles = []
        self.palettes = []

    def setStyle(self, style):
        self.styles.append(style)

    def setPalette(self, palette):
        self.palettes.append(palette)


def test_theme_reapplied_only_on_change(qapp):
    app = FakeApp()
    theme = ThemeManager()
    theme.setup(app)

    assert theme.apply(app, Settings())
    assert not theme.apply(app, Settings(volume=0.2, speech_speed=1.5))
    assert theme.apply(app, Settings(dark_theme=True))
    assert theme.get_color('background') == ThemeManager.THEMES['dark'].colors['background']
    assert theme.apply(app, Settings(dark_theme=True, font_size="Small"))

    assert app.styles == ["Fusion"]
    assert len(app.palettes) == 3


def test_slider_changes_do_not_restyle(window, monkeypatch):
    refreshes = []
    monkeypatch.setattr(window.history_screen, "refresh", lambda: refreshes.append(1))

    window.home.volume_slider.slider.setValue(30)
    window.home.speed_slider.slider.setValue(80)
    assert refreshes == []

    window.backend.update_settings(font_size="Medium")
    assert refreshes == [1]


def test_virtual_monitor_blocked_while_connecting(window):
    window.backend.signals.status_signal.emit(STATUS_CONNECTING)
    assert not window.monitor_action.isEnabled()

    assert window._open_virtual_monitor() is None
    assert window.backend.connection_options['mode'] == CONNECTION_BLUETOOTH
    assert "Wait for the current connection attempt" in window.log_display.toPlainText()

    window.backend.signals.status_signal.emit(STATUS_DISCONNECTED)
    assert window.monitor_action.isEnabled()


def test_close_cleans_up_backend(window):
    window.closeEvent(QCloseEvent())
    assert window.backend.speech.shut_down


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
