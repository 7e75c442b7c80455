"""
Request generations.

When a caller starts a new request for the same logical query (the user
switched view or window while the previous graph was still loading), the
older request must not be able to deliver its result.  Each call to
:meth:`RequestTracker.begin` bumps the generation for its key; a token
from an earlier generation is stale and :meth:`RequestToken.ensure_current`
raises :class:`SupersededRequestError` for it.

Orchestrators check their token after every fetch stage and once more
before returning.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from training_analytics.core.exceptions import SupersededRequestError


@dataclass(frozen=True)
class RequestToken:
    key: str
    generation: int
    tracker: "RequestTracker"

    @property
    def is_current(self) -> bool:
        return self.tracker.current_generation(self.key) == self.generation

    def ensure_current(self) -> None:
        current = self.tracker.current_generation(self.key)
        if current != self.generation:
            raise SupersededRequestError(self.key, self.generation, current)


class RequestTracker:
    """Thread-safe generation counter per request key."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generations: dict[str, int] = {}

    def begin(self, key: str) -> RequestToken:
        """Start a request for *key*, superseding any earlier one."""
        with self._lock:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
        return RequestToken(key=key, generation=generation, tracker=self)

    def current_generation(self, key: str) -> int:
        with self._lock:
            return self._generations.get(key, 0)

