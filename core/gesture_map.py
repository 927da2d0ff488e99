"""
Gesture code to phrase lookup table.
"""

import json
import os

from config import DEFAULT_GESTURE_MAPPING, UNKNOWN_PREFIX


def normalize_code(raw):
    """Trim surrounding whitespace and upper-case a received token."""
    return raw.strip().upper()


class GestureMap:
    """Static table mapping glove gesture codes to human-readable phrases."""

    def __init__(self, mapping=None):
        self.mapping = {}
        self.set_mapping(DEFAULT_GESTURE_MAPPING if mapping is None else mapping)

    def set_mapping(self, mapping):
        """Replace the table. Codes are normalized, empty codes dropped."""
        table = {}
        for code, phrase in mapping.items():
            key = normalize_code(str(code))
            if key:
                table[key] = str(phrase)
        self.mapping = table

    def lookup(self, raw):
        """
        Resolve a received token.

        Args:
            raw: Token as read from the link

        Returns:
            Mapped phrase, or "Unknown: <token>" for unmapped codes
        """
        token = raw.strip()
        phrase = self.mapping.get(token.upper())
        if phrase is None:
            return f"{UNKNOWN_PREFIX}{token}"
        return phrase

    def load_file(self, path):
        """
        Load the table from a JSON file.

        Accepts either a plain object ``{"A": "Hello"}`` or the parallel-array
        form ``{"keys": [...], "values": [...]}``. Entries without a partner
        in the other array are ignored.

        Returns:
            True if the table was replaced, False otherwise
        """
        if not os.path.exists(path):
            return False

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError("gesture map must be a JSON object")

            if isinstance(data.get('keys'), list) and isinstance(data.get('values'), list):
                mapping = dict(zip(data['keys'], data['values']))
            else:
                mapping = data

            self.set_mapping(mapping)
            return True

        except (OSError, ValueError) as e:
            print(f"Error loading gesture map: {e}")
            return False

    def codes(self):
        """Get sorted list of known codes."""
        return sorted(self.mapping.keys())

    def to_dict(self):
        return dict(self.mapping)

    def __len__(self):
        return len(self.mapping)

    def __contains__(self, raw):
        return normalize_code(raw) in self.mapping
