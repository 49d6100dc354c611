# -*- coding: utf-8 -*-

import time


class ErrorThrottle:
    """In-memory error notification throttle.

    Dedup key: ``{ExceptionType}:{context}``
    Throttle window: 15 minutes (``THROTTLE_WINDOW`` seconds).
    """

    THROTTLE_WINDOW = 900  # 15 minutes

    def __init__(self):
        self._last_notified: dict[str, float] = {}
        self._suppressed_count: dict[str, int] = {}

    @staticmethod
    def _make_key(context: str, error: Exception) -> str:
        return f"{type(error).__name__}:{context}"

    def should_notify(self, context: str, error: Exception) -> bool:
        """Return True if this error should trigger a DM notification."""
        key = self._make_key(context, error)
        now = time.monotonic()
        last = self._last_notified.get(key)

        if last is not None and (now - last) < self.THROTTLE_WINDOW:
            self._suppressed_count[key] = self._suppressed_count.get(key, 0) + 1
            return False

        self._last_notified[key] = now
        self._suppressed_count[key] = 0
        return True

    def suppressed_count(self, context: str, error: Exception) -> int:
        """Number of notifications swallowed for this key since the last one went out."""
        return self._suppressed_count.get(self._make_key(context, error), 0)
