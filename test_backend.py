#!/usr/bin/env python3
"""
Backend tests: gesture pipeline, connection handling, history and settings.
"""

import json
import time

from config import (PLACEHOLDER_PHRASE, STATUS_CONNECTED, STATUS_DISCONNECTED, STATUS_LOST,
                    CONNECTION_VIRTUAL, CONNECTION_SERIAL)
from conftest import wait_for
from core import GloveBackend, Preferences
import core.glove_backend as glove_backend


def test_mapped_gesture_is_shown_spoken_and_recorded(backend, signals, speech):
    result = backend.process_gesture_data("a")

    assert result.phrase == "Hello"
    assert backend.current_phrase == "Hello"
    assert signals.phrase_signal.values()[-1] == "Hello"
    assert speech.spoken == ["Hello"]
    assert [item.text for item in backend.history.items()] == ["Hello"]
    assert len(signals.history_signal.calls) == 1


def test_unknown_gesture_fallback(backend, speech):
    backend.process_gesture_data("zq")
    assert backend.current_phrase == "Unknown: zq"
    assert speech.spoken == ["Unknown: zq"]


def test_repeated_gesture_within_cooldown_only_updates_display(backend, speech):
    backend.process_gesture_data("A")
    backend.process_gesture_data("A")

    assert backend.current_phrase == "Hello"
    assert speech.spoken == ["Hello"]
    assert len(backend.history) == 1


def test_disconnect_resets_phrase_and_cooldown(backend, speech):
    backend.process_gesture_data("A")
    backend.disconnect()

    assert backend.current_phrase == PLACEHOLDER_PHRASE
    backend.process_gesture_data("A")
    assert speech.spoken == ["Hello", "Hello"]


def test_repeat_current(backend, speech):
    assert not backend.repeat_current()

    backend.process_gesture_data("B")
    assert backend.repeat_current()
    assert speech.spoken == ["Thank you", "Thank you"]
    assert len(backend.history) == 1


def test_virtual_end_to_end(backend, signals, speech):
    # data_signal is wired to the backend by the main window
    signals.data_signal.connect(backend.process_gesture_data)
    signals.connection_lost_signal.connect(backend.handle_connection_lost)

    backend.set_connection_options(mode=CONNECTION_VIRTUAL)
    backend.toggle_connection()
    assert backend.is_connected()
    assert backend.status == STATUS_CONNECTED

    backend.bluetooth.inject("C")
    assert wait_for(lambda: speech.spoken)
    assert speech.spoken == ["I need help"]

    backend.bluetooth.connection.hang_up()
    assert wait_for(lambda: not backend.is_connected()
                    and backend.current_phrase == PLACEHOLDER_PHRASE)
    assert backend.status == STATUS_LOST


def test_toggle_disconnects_when_connected(backend):
    backend.set_connection_options(mode=CONNECTION_VIRTUAL)
    backend.connect()
    backend.toggle_connection()

    assert not backend.is_connected()
    assert backend.status == STATUS_DISCONNECTED


def test_unpaired_device_reported(backend, signals, monkeypatch):
    monkeypatch.setattr(glove_backend, "find_paired_device", lambda name: None)

    backend.connect(wait=True)

    assert not backend.is_connected()
    assert backend.status == STATUS_DISCONNECTED
    assert "Device GestureGlove not paired" in signals.messages("error")


def test_paired_device_connects_by_mac(backend, monkeypatch):
    monkeypatch.setattr(glove_backend, "find_paired_device", lambda name: "98:D3:31:F5:1A:2B")
    calls = []
    monkeypatch.setattr(backend.bluetooth, "connect_direct",
                        lambda mac, channel: calls.append((mac, channel)) or False)

    backend.connect(wait=True)
    assert calls == [("98:D3:31:F5:1A:2B", 1)]


def test_serial_mode_uses_port(backend, monkeypatch):
    calls = []
    monkeypatch.setattr(backend.bluetooth, "connect_serial",
                        lambda port, baud: calls.append((port, baud)) or False)

    backend.set_connection_options(mode=CONNECTION_SERIAL, port="/dev/rfcomm3", baud=115200)
    backend.connect(wait=True)
    assert calls == [("/dev/rfcomm3", 115200)]


def test_history_operations(backend, speech, signals):
    backend.process_gesture_data("A")
    backend.process_gesture_data("B")
    newest, oldest = backend.history.items()

    assert backend.speak_history_item(oldest.id)
    assert speech.spoken[-1] == "Hello"

    assert backend.delete_history_item(newest.id)
    assert not backend.delete_history_item(newest.id)
    assert [item.text for item in backend.history.items()] == ["Hello"]

    backend.clear_history()
    assert len(backend.history) == 0
    assert len(signals.history_signal.calls) == 4


def test_update_settings_applies_to_speech(backend, speech, signals):
    rejected = backend.update_settings(volume=0.3, language="Hindi")

    assert rejected == []
    assert speech.settings.volume == 0.3
    assert speech.settings.language == "Hindi"
    assert signals.settings_signal.values()[-1].language == "Hindi"


def test_invalid_setting_logged(backend, signals):
    backend.update_settings(font_size="Gigantic")
    assert backend.settings.font_size == "Large"
    assert any("Setting not changed" in msg for msg in signals.messages("warning"))


def test_reset_settings(backend, speech):
    backend.update_settings(dark_theme=True, voice_type="Female")
    backend.reset_settings()

    assert backend.settings.dark_theme is False
    assert speech.settings.voice_type == "Male"


def test_state_survives_restart(signals, speech, prefs_path, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = GloveBackend(signals, preferences=Preferences(prefs_path), speech_engine=speech)
    first.process_gesture_data("A")
    first.update_settings(speech_speed=1.5)

    second = GloveBackend(signals, preferences=Preferences(prefs_path), speech_engine=speech)
    assert [item.text for item in second.history.items()] == ["Hello"]
    assert second.settings.speech_speed == 1.5


def test_gesture_map_file_override(signals, speech, prefs_path, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"keys": ["Q"], "values": ["Custom phrase"]}))

    glove = GloveBackend(signals, preferences=Preferences(prefs_path), speech_engine=speech,
                         gesture_map_file=str(path))
    assert glove.process_gesture_data("q").phrase == "Custom phrase"
    assert glove.process_gesture_data("A").phrase == "Unknown: A"


def test_cleanup_disconnects_and_stops_speech(backend, speech):
    backend.set_connection_options(mode=CONNECTION_VIRTUAL)
    backend.connect()
    backend.cleanup()

    assert not backend.is_connected()
    assert speech.shut_down


def test_cleanup_waits_for_pending_connect(backend, monkeypatch):
    def slow_connect(port, baud):
        time.sleep(0.2)
        return backend.bluetooth.connect_virtual()

    monkeypatch.setattr(backend.bluetooth, "connect_serial", slow_connect)
    backend.set_connection_options(mode=CONNECTION_SERIAL)
    backend.connect()
    worker = backend.connect_thread

    backend.cleanup()

    assert not worker.is_alive()
    assert not backend.is_connected()


def test_bad_connection_mode_rejected(backend):
    import pytest
    with pytest.raises(ValueError):
        backend.set_connection_options(mode="carrier-pigeon")
    with pytest.raises(KeyError):
        backend.set_connection_options(speed=9)


if __name__ == "__main__":
    import pytest
    raise SystemExit(pytest.main([__file__, "-v"]))
