"""
Key-value preference storage backed by a JSON file.
"""

import json
import os
import tempfile
import threading


class Preferences:
    """Flat key-value store, saved wholesale on every change."""

    def __init__(self, path):
        self.path = path
        self.values = {}
        self.lock = threading.Lock()
        self.load()

    def load(self):
        """Load values from disk. Missing or unreadable files give an empty store."""
        self.values = {}
        if not os.path.exists(self.path):
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                self.values = data
            else:
                print(f"Ignoring preferences file {self.path}: not a JSON object")
        except (OSError, ValueError) as e:
            print(f"Error loading preferences: {e}")

    def get(self, key, default=None):
        return self.values.get(key, default)

    def get_float(self, key, default):
        value = self.values.get(key)
        # bool is an int subclass
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return default

    def get_str(self, key, default):
        value = self.values.get(key)
        return value if isinstance(value, str) else default

    def get_bool(self, key, default):
        value = self.values.get(key)
        return value if isinstance(value, bool) else default

    def put(self, **values):
        """Stage values. Call save() to persist."""
        with self.lock:
            self.values.update(values)

    def remove(self, key):
        with self.lock:
            self.values.pop(key, None)

    def save(self):
        """
        Write all values to disk atomically.

        Returns:
            True if successful, False otherwise
        """
        with self.lock:
            snapshot = dict(self.values)

        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".prefs-", suffix=".json", dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(snapshot, f, indent=2)
            os.replace(tmp_path, self.path)
            return True

        except (OSError, TypeError, ValueError) as e:
            print(f"Error saving preferences: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            return False
