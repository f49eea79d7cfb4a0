"""
GamePalette Request ID Utilities
Request IDs for tracing and a last-request-wins sequencer for re-extraction.
"""
import itertools
import threading
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "pal") -> str:
    """
    Generate a unique request ID for tracking.

    Returns:
        ID shaped like ``pal-20260101120000-1a2b3c4d``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


class RequestSequencer:
    """
    Hands out increasing tokens so a caller can drop stale results.

    Each new extraction request takes a token; when its result arrives the
    caller keeps it only if ``is_current(token)``. In-flight work is never
    cancelled, a newer request just makes older results obsolete.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._latest = 0

    def next_token(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest
