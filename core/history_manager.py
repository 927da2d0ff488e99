"""
Spoken phrase history.
"""

import time
from datetime import datetime

from config import HISTORY_KEY


def format_time(moment):
    """Format a datetime as e.g. "3:07 PM"."""
    return moment.strftime("%I:%M %p").lstrip("0")


class HistoryItem:
    """A single spoken phrase."""

    def __init__(self, item_id, text, time_str):
        self.id = item_id
        self.text = text
        self.time = time_str

    def to_dict(self):
        return {'id': self.id, 'text': self.text, 'time': self.time}

    @classmethod
    def from_dict(cls, data):
        return cls(int(data['id']), str(data['text']), str(data.get('time', '')))

    def __eq__(self, other):
        return isinstance(other, HistoryItem) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"HistoryItem(id={self.id}, text={self.text!r}, time={self.time!r})"


class HistoryManager:
    """Ordered history (newest first), saved wholesale on every mutation."""

    def __init__(self, preferences, clock=time.time):
        self.preferences = preferences
        self.clock = clock
        self.history = []
        self.load()

    def load(self):
        """Load history from preferences. Malformed entries are skipped."""
        self.history = []
        raw_items = self.preferences.get(HISTORY_KEY, [])
        if not isinstance(raw_items, list):
            print("Ignoring stored history: not a list")
            return self.history

        for entry in raw_items:
            try:
                self.history.append(HistoryItem.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                print(f"Skipping malformed history entry: {e}")

        return self.history

    def _next_id(self):
        item_id = int(self.clock() * 1000)
        if self.history:
            # ids stay unique even for items added within the same millisecond
            highest = max(item.id for item in self.history)
            if item_id <= highest:
                item_id = highest + 1
        return item_id

    def add(self, text):
        """Insert a phrase at the top of the history and save."""
        now = self.clock()
        item = HistoryItem(self._next_id(), text, format_time(datetime.fromtimestamp(now)))
        self.history.insert(0, item)
        self.save()
        return item

    def get(self, item_id):
        for item in self.history:
            if item.id == item_id:
                return item
        return None

    def remove(self, item_id):
        """Remove one item. Returns True if it existed."""
        item = self.get(item_id)
        if item is None:
            return False
        self.history.remove(item)
        self.save()
        return True

    def clear(self):
        self.history = []
        self.save()

    def items(self):
        return list(self.history)

    def __len__(self):
        return len(self.history)

    def save(self):
        self.preferences.put(**{HISTORY_KEY: [item.to_dict() for item in self.history]})
        return self.preferences.save()
