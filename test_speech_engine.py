#!/usr/bin/env python3
"""
Tests for the text-to-speech worker and voice selection.
"""

from types import SimpleNamespace

from config import BASE_SPEECH_RATE_WPM
from core.settings_manager import Settings
from core.speech_engine import SpeechEngine, choose_voice, voice_matches_language


class FakeTTSEngine:
    """Minimal pyttsx3 engine."""

    def __init__(self, voices=()):
        self.properties = {'voices': list(voices)}
        self.spoken = []
        self.stopped = False

    def setProperty(self, name, value):
        self.properties[name] = value

    def getProperty(self, name):
        return self.properties.get(name)

    def say(self, text):
        self.spoken.append((text, self.properties.get('volume'), self.properties.get('rate')))

    def runAndWait(self):
        pass

    def stop(self):
        self.stopped = True


VOICES = [
    SimpleNamespace(id="gmw/en", name="English", languages=[b'\x05en-gb'], gender="male"),
    SimpleNamespace(id="en-female", name="English Female", languages=["en_US"], gender="female"),
    SimpleNamespace(id="inc/hi", name="Hindi", languages=[b'\x05hi'], gender=None),
]


def test_voice_language_matching():
    assert voice_matches_language(VOICES[0], "en")
    assert voice_matches_language(VOICES[1], "en")
    assert not voice_matches_language(VOICES[2], "en")
    assert voice_matches_language(VOICES[2], "hi")


def test_voice_language_matching_from_id():
    voice = SimpleNamespace(id="HKEY_LOCAL_MACHINE\\Speech\\Voices\\TTS_MS_EN-US_ZIRA_11.0",
                            name="Microsoft Zira", languages=[], gender=None)
    assert voice_matches_language(voice, "en")


def test_choose_voice_prefers_voice_type():
    assert choose_voice(VOICES, "English", "Male") == "gmw/en"
    assert choose_voice(VOICES, "English", "Female") == "en-female"


def test_choose_voice_falls_back_to_language_match():
    assert choose_voice(VOICES, "Hindi", "Female") == "inc/hi"


def test_choose_voice_none_when_language_missing():
    assert choose_voice(VOICES, "Tamil", "Male") is None


def test_speak_applies_volume_rate_and_voice(signals):
    fake = FakeTTSEngine(VOICES)
    engine = SpeechEngine(signals, engine_factory=lambda: fake)
    engine.apply_settings(Settings(volume=0.5, speech_speed=2.0, voice_type="Female"))

    assert engine.speak("Hello")
    engine.wait_until_idle()
    engine.shutdown()

    assert fake.spoken == [("Hello", 0.5, BASE_SPEECH_RATE_WPM * 2)]
    assert fake.properties['voice'] == "en-female"
    assert fake.stopped


def test_speak_queues_in_order(signals):
    fake = FakeTTSEngine(VOICES)
    engine = SpeechEngine(signals, engine_factory=lambda: fake)

    for text in ("one", "two", "three"):
        engine.speak(text)
    engine.wait_until_idle()
    engine.shutdown()

    assert [text for text, _, _ in fake.spoken] == ["one", "two", "three"]


def test_blank_text_not_queued(signals):
    engine = SpeechEngine(signals, engine_factory=lambda: FakeTTSEngine(VOICES))
    assert not engine.speak("   ")
    engine.shutdown()


def test_missing_language_voice_logs_warning(signals):
    fake = FakeTTSEngine(VOICES)
    engine = SpeechEngine(signals, engine_factory=lambda: fake)
    engine.apply_settings(Settings(language="Telugu"))

    engine.speak("Hello")
    engine.wait_until_idle()
    engine.shutdown()

    assert 'voice' not in fake.properties
    assert any("No Telugu voice" in msg for msg in signals.messages("warning"))


def test_engine_failure_makes_speech_unavailable(signals):
    def broken_factory():
        raise RuntimeError("no driver")

    engine = SpeechEngine(signals, engine_factory=broken_factory)
    assert not engine.is_available()
    assert not engine.speak("Hello")
    assert any("failed to start" in msg for msg in signals.messages("error"))
    engine.shutdown()


if __name__ == "__main__":
    import pytest
    raise SystemExit(pytest.main([__file__, "-v"]))
