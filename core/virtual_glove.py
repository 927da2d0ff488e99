"""
Virtual glove connection for testing and simulation.
Stands in for the RFCOMM link without physical hardware.
"""

import threading
from collections import deque
from datetime import datetime


class VirtualGloveConnection:
    """Simulates the glove's serial stream in memory."""

    def __init__(self):
        self.connected = False
        self.pending = bytearray()
        self.sent_history = deque(maxlen=1000)  # last 1000 injected codes
        self.hung_up = False
        self.lock = threading.Lock()

    def connect(self):
        with self.lock:
            self.connected = True
            self.hung_up = False
            self.pending.clear()
        return True

    def inject(self, code):
        """
        Queue a gesture code as if the glove had sent it.

        Args:
            code: Gesture code string or raw bytes
        """
        data = code.encode('ascii', errors='replace') if isinstance(code, str) else bytes(code)
        with self.lock:
            if not self.connected:
                return False
            self.pending.extend(data)
            timestamp = datetime.now()
            self.sent_history.append({
                'code': data.decode('ascii', errors='replace'),
                'timestamp': timestamp,
                'timestamp_str': timestamp.strftime("%H:%M:%S.%f")[:-3],
            })
        return True

    def hang_up(self):
        """Simulate the glove closing the stream."""
        with self.lock:
            self.hung_up = True

    def read(self, size):
        """
        Drain up to `size` pending bytes.

        Returns:
            Bytes read (possibly empty), or None at end of stream
        """
        with self.lock:
            if not self.connected:
                raise OSError("Virtual glove not connected")
            if not self.pending and self.hung_up:
                return None
            chunk = bytes(self.pending[:size])
            del self.pending[:size]
            return chunk

    def close(self):
        with self.lock:
            self.connected = False
            self.pending.clear()

    def get_history(self):
        with self.lock:
            return list(self.sent_history)

    def is_connected(self):
        return self.connected
