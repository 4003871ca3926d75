"""Process-wide slot holding the most recently generated text."""
from __future__ import annotations
import threading

class LatestResultCache:
    """
    Single-slot, last-write-wins store.

    Sync FastAPI endpoints run on a thread pool, so reads and writes go through a lock.
    The lock is never held across an upstream call.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._text: str | None = None

    def set(self, text: str) -> None:
        with self._lock:
            self._text = text

    def get(self) -> str | None:
        """Return the latest text, or None if nothing was generated yet."""
        with self._lock:
            return self._text
