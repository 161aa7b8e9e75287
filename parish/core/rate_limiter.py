"""
In-memory throttling for the public forms.

Each form has a named policy (submissions per window). Hits are kept per
``scope:client-ip`` in a sliding window, so a burst at the end of one window
still counts against the next.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Dict, Tuple

from fastapi import HTTPException, Request

# scope -> (max submissions, window seconds)
FORM_POLICIES: Dict[str, Tuple[int, int]] = {
    "contact": (5, 600),
    "newsletter": (5, 600),
    "prayer": (5, 600),
    "venue": (3, 600),
    "intention": (3, 600),
    "registration": (5, 600),
    "accessibility": (60, 60),
}
DEFAULT_POLICY = (10, 600)


class SlidingWindowLimiter:
    def __init__(self) -> None:
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, limit: int, window_seconds: int, now: float | None = None) -> bool:
        """Record a hit; return False when the key is over its limit."""
        now = time.monotonic() if now is None else now
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= now - window_seconds:
                hits.popleft()
            if len(hits) >= limit:
                return False
            hits.append(now)
            return True

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_limiter = SlidingWindowLimiter()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def limit_form(request: Request, scope: str) -> None:
    """Raise 429 when the client exceeded the policy for ``scope``."""
    limit, window = FORM_POLICIES.get(scope, DEFAULT_POLICY)
    if not _limiter.hit(f"{scope}:{client_ip(request)}", limit, window):
        raise HTTPException(429, "Too many submissions. Please try again in a few minutes.")


def reset_limits() -> None:
    _limiter.reset()
