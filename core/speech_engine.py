"""
Text-to-speech output through pyttsx3.

pyttsx3 engines are not thread-safe, so a single worker thread owns the engine
and plays queued utterances in order.
"""

import queue
import re
import threading

import pyttsx3

from config import BASE_SPEECH_RATE_WPM, LANGUAGE_CODES
from .settings_manager import Settings

_STOP = object()


def _language_tags(voice):
    """Normalized language tags advertised by a pyttsx3 voice."""
    tags = []
    for lang in getattr(voice, 'languages', None) or []:
        if isinstance(lang, bytes):
            # espeak reports b'\x05en-gb' (priority byte + tag)
            lang = lang.decode('utf-8', errors='ignore')
        lang = re.sub(r'^[^A-Za-z]+', '', str(lang)).lower().replace('_', '-')
        if lang:
            tags.append(lang)
    return tags


def voice_matches_language(voice, code):
    """Check whether a voice speaks the language with ISO code `code`."""
    for tag in _language_tags(voice):
        if tag == code or tag.startswith(code + '-'):
            return True

    tokens = re.split(r'[\\/_\-.\s]+', str(getattr(voice, 'id', '')).lower())
    return code in tokens


def voice_matches_type(voice, voice_type):
    """Check a voice against "Male"/"Female" using gender metadata or its name."""
    wanted = voice_type.lower()
    gender = str(getattr(voice, 'gender', '') or '').lower().replace('voicegender', '')
    if gender:
        return gender == wanted
    name = str(getattr(voice, 'name', '') or '').lower()
    return re.search(rf'\b{wanted}\b', name) is not None


def choose_voice(voices, language, voice_type):
    """
    Pick the best voice for a language and voice type.

    Args:
        voices: Voices reported by the engine
        language: Language name, e.g. "Hindi"
        voice_type: "Male" or "Female"

    Returns:
        Voice id, or None when no voice speaks the language
    """
    code = LANGUAGE_CODES.get(language)
    if code is None:
        return None

    candidates = [v for v in voices if voice_matches_language(v, code)]
    if not candidates:
        return None

    for voice in candidates:
        if voice_matches_type(voice, voice_type):
            return voice.id
    return candidates[0].id


class SpeechEngine:
    """Non-blocking speech output with queue-add semantics."""

    def __init__(self, signal_emitter, engine_factory=None):
        self.signals = signal_emitter
        self.engine_factory = engine_factory or pyttsx3.init
        self.settings = Settings()
        self.jobs = queue.Queue()
        self.ready = threading.Event()
        self.available = False

        self._engine = None
        self._voice_key = None

        self.worker = threading.Thread(target=self._run, daemon=True)
        self.worker.start()

    def is_available(self):
        """True once the engine started successfully."""
        self.ready.wait(timeout=5.0)
        return self.available

    def apply_settings(self, settings):
        """Use these settings for every utterance queued from now on."""
        self.settings = settings.copy()

    def speak(self, text):
        """
        Queue text for speech.

        Returns:
            True if queued, False if empty or the engine is unavailable
        """
        if not text or not text.strip():
            return False

        if self.ready.is_set() and not self.available:
            self.signals.log_signal.emit(f"Speech unavailable, not spoken: {text}", "warning")
            return False

        self.jobs.put((text.strip(), self.settings.copy()))
        return True

    def wait_until_idle(self):
        """Block until every queued utterance has been played."""
        self.jobs.join()

    def shutdown(self):
        """Stop the worker thread and release the engine."""
        self.jobs.put(_STOP)
        self.worker.join(timeout=2.0)

    def _run(self):
        try:
            self._engine = self.engine_factory()
            self.available = True
        except Exception as e:
            self.signals.log_signal.emit(f"Text-to-speech failed to start: {e}", "error")
            self.signals.log_signal.emit("Check: espeak-ng (Linux) or SAPI5 voices installed", "warning")
        finally:
            self.ready.set()

        while True:
            job = self.jobs.get()
            try:
                if job is _STOP:
                    break
                if self.available:
                    text, settings = job
                    self._say(text, settings)
            except Exception as e:
                self.signals.log_signal.emit(f"Speech error: {e}", "error")
            finally:
                self.jobs.task_done()

        if self._engine is not None:
            try:
                self._engine.stop()
            except Exception as e:
                self.signals.log_signal.emit(f"Error stopping speech engine: {e}", "warning")

    def _say(self, text, settings):
        engine = self._engine
        engine.setProperty('volume', float(settings.volume))
        engine.setProperty('rate', int(BASE_SPEECH_RATE_WPM * settings.speech_speed))
        self._select_voice(settings)
        engine.say(text)
        engine.runAndWait()

    def _select_voice(self, settings):
        key = (settings.language, settings.voice_type)
        if key == self._voice_key:
            return
        self._voice_key = key

        voice_id = choose_voice(self._engine.getProperty('voices') or [],
                                settings.language, settings.voice_type)
        if voice_id is None:
            self.signals.log_signal.emit(
                f"No {settings.language} voice installed - using default voice", "warning"
            )
            return
        self._engine.setProperty('voice', voice_id)
