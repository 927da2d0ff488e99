"""
Turns raw glove tokens into phrases and decides when to speak them.
"""

import time

from config import SPEECH_COOLDOWN
from .gesture_map import normalize_code


class GestureResult:
    """Outcome of processing one token."""

    def __init__(self, raw, code, phrase, should_speak):
        self.raw = raw
        self.code = code
        self.phrase = phrase
        self.should_speak = should_speak

    def __repr__(self):
        return (f"GestureResult(code={self.code!r}, phrase={self.phrase!r}, "
                f"should_speak={self.should_speak})")


class GestureProcessor:
    """Gesture lookup plus the speech cooldown rule.

    A phrase is spoken (and recorded) unless it repeats the last spoken phrase
    within ``cooldown`` seconds.
    """

    def __init__(self, gesture_map, cooldown=SPEECH_COOLDOWN, clock=time.monotonic):
        self.gesture_map = gesture_map
        self.cooldown = cooldown
        self.clock = clock
        self.last_spoken = None
        self.last_speech_time = None

    def process(self, raw):
        phrase = self.gesture_map.lookup(raw)
        now = self.clock()

        should_speak = (
            phrase != self.last_spoken
            or self.last_speech_time is None
            or now - self.last_speech_time > self.cooldown
        )

        if should_speak:
            self.last_spoken = phrase
            self.last_speech_time = now

        return GestureResult(raw, normalize_code(raw), phrase, should_speak)

    def reset(self):
        """Forget the last spoken phrase."""
        self.last_spoken = None
        self.last_speech_time = None
