"""
User settings: speech parameters and display preferences.
"""

from config import (DEFAULT_SETTINGS, LANGUAGE_OPTIONS, VOICE_TYPE_OPTIONS,
                    FONT_SIZE_OPTIONS, VOLUME_RANGE, SPEECH_SPEED_RANGE)


def clamp(value, bounds):
    low, high = bounds
    return max(low, min(high, float(value)))


class Settings:
    """Flat settings record."""

    def __init__(self, volume=DEFAULT_SETTINGS["volume"],
                 speech_speed=DEFAULT_SETTINGS["speech_speed"],
                 language=DEFAULT_SETTINGS["language"],
                 voice_type=DEFAULT_SETTINGS["voice_type"],
                 font_size=DEFAULT_SETTINGS["font_size"],
                 dark_theme=DEFAULT_SETTINGS["dark_theme"]):
        self.volume = volume
        self.speech_speed = speech_speed
        self.language = language
        self.voice_type = voice_type
        self.font_size = font_size
        self.dark_theme = dark_theme

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return {
            'volume': self.volume,
            'speech_speed': self.speech_speed,
            'language': self.language,
            'voice_type': self.voice_type,
            'font_size': self.font_size,
            'dark_theme': self.dark_theme,
        }

    @classmethod
    def from_dict(cls, data):
        """Create settings from dictionary, falling back to defaults."""
        settings = cls()
        for key in DEFAULT_SETTINGS:
            if key in data:
                setattr(settings, key, data[key])
        return settings

    def copy(self):
        return Settings.from_dict(self.to_dict())

    def __eq__(self, other):
        return isinstance(other, Settings) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Settings({self.to_dict()})"


class SettingsManager:
    """Loads, validates and persists the settings record."""

    OPTIONS = {
        'language': LANGUAGE_OPTIONS,
        'voice_type': VOICE_TYPE_OPTIONS,
        'font_size': FONT_SIZE_OPTIONS,
    }

    def __init__(self, preferences):
        self.preferences = preferences
        self.settings = Settings()
        self.load()

    def load(self):
        """Read settings from preferences, keeping defaults for bad values."""
        prefs = self.preferences
        loaded = Settings(
            volume=prefs.get_float('volume', DEFAULT_SETTINGS['volume']),
            speech_speed=prefs.get_float('speech_speed', DEFAULT_SETTINGS['speech_speed']),
            language=prefs.get_str('language', DEFAULT_SETTINGS['language']),
            voice_type=prefs.get_str('voice_type', DEFAULT_SETTINGS['voice_type']),
            font_size=prefs.get_str('font_size', DEFAULT_SETTINGS['font_size']),
            dark_theme=prefs.get_bool('dark_theme', DEFAULT_SETTINGS['dark_theme']),
        )

        loaded.volume = clamp(loaded.volume, VOLUME_RANGE)
        loaded.speech_speed = clamp(loaded.speech_speed, SPEECH_SPEED_RANGE)
        for key, options in self.OPTIONS.items():
            if getattr(loaded, key) not in options:
                setattr(loaded, key, DEFAULT_SETTINGS[key])

        self.settings = loaded
        return loaded

    def validate(self, key, value):
        """
        Validate a single setting.

        Returns:
            The accepted (possibly clamped) value

        Raises:
            KeyError: unknown setting name
            ValueError: value not allowed for this setting
        """
        if key not in DEFAULT_SETTINGS:
            raise KeyError(f"Unknown setting: {key}")

        if key == 'volume':
            return clamp(value, VOLUME_RANGE)
        if key == 'speech_speed':
            return clamp(value, SPEECH_SPEED_RANGE)
        if key == 'dark_theme':
            return bool(value)

        if value not in self.OPTIONS[key]:
            raise ValueError(f"Invalid {key}: {value!r}")
        return value

    def update(self, **changes):
        """
        Apply changes and save the whole record.

        Invalid values are skipped; the previous value is kept.

        Returns:
            List of (key, error message) for rejected changes
        """
        rejected = []
        for key, value in changes.items():
            try:
                setattr(self.settings, key, self.validate(key, value))
            except (KeyError, ValueError, TypeError) as e:
                rejected.append((key, str(e)))

        self.save()
        return rejected

    def reset(self):
        """Restore every setting to its default and save."""
        self.settings = Settings()
        self.save()
        return self.settings

    def save(self):
        self.preferences.put(**self.settings.to_dict())
        return self.preferences.save()
