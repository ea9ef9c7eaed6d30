# backend/app/core/ratelimit.py
"""
In-process sliding window limiter for the login endpoint.
Each client address gets a fixed number of attempts per window; once the
budget is spent, further attempts are rejected until old ones age out.
"""
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict

from fastapi import Request

from app.config import settings
from app.core.logging_config import ERRLOG_LOGGER
from app.services.exceptions import TooManyAttemptsError

LOGIN_LIMIT_MESSAGE = "Too many attemps from this IP. Please try again after one minute"

errlog = logging.getLogger(ERRLOG_LOGGER)


class LoginLimiter:
    """
    Sliding window counter keyed by client address.

    Data structure:
    - _hits: Dict[client_key, deque[timestamp]] of attempts still inside the window
      Keys whose attempts have all expired are dropped every ``sweep_every`` hits.
    """

    def __init__(self, max_attempts: int, window_sec: float,
                 clock: Callable[[], float] = time.monotonic, sweep_every: int = 256):
        self.max_attempts = max_attempts
        self.window_sec = window_sec
        self.sweep_every = sweep_every
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._calls = 0

    def hit(self, key: str) -> bool:
        """
        Record one attempt for ``key``.

        Returns:
            True if the attempt is allowed, False if the window budget is spent.
            Rejected attempts are not recorded.
        """
        now = self._clock()
        self._calls += 1
        if self._calls % self.sweep_every == 0:
            self._sweep(now)

        hits = self._hits.setdefault(key, deque())
        self._expire(hits, now)
        if len(hits) >= self.max_attempts:
            return False
        hits.append(now)
        return True

    def _expire(self, hits: Deque[float], now: float) -> None:
        while hits and now - hits[0] >= self.window_sec:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Drop every key with no attempt left inside the window."""
        for key in list(self._hits):
            hits = self._hits[key]
            self._expire(hits, now)
            if not hits:
                del self._hits[key]

    def reset(self) -> None:
        self._hits.clear()
        self._calls = 0


login_limiter = LoginLimiter(settings.login_max_attempts, settings.login_window_sec)


async def limit_login(request: Request) -> None:
    """
    FastAPI dependency guarding the login route.

    Raises:
        TooManyAttemptsError (429): When the caller exceeded its attempt budget
    """
    key = request.client.host if request.client else "unknown"
    if login_limiter.hit(key):
        return
    errlog.warning(
        "Too many requests: %s\t%s\t%s\t%s",
        LOGIN_LIMIT_MESSAGE,
        request.method,
        request.url.path,
        request.headers.get("origin"),
    )
    raise TooManyAttemptsError(LOGIN_LIMIT_MESSAGE)
