"""
Time-boxed session cache and the provider that fills it.

A login is reused for ``COOKIE_TTL`` seconds. The cache is an ordinary
object passed to whoever needs it, so tests can swap it or drive its
clock. It takes no locks: two requests missing at the same moment may
both log in, and the later one simply overwrites the earlier cookies.
"""

import time
from typing import Callable, Optional

import requests

from ..config import COOKIE_TTL
from ..logging_setup import log
from ..session import build_session
from .login import login_and_get_cookies


class SessionCache:
    """Last acquired cookies plus the time they were acquired."""

    def __init__(
        self,
        ttl: float = COOKIE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.clock = clock
        self.cookies: Optional[dict[str, str]] = None
        self.timestamp: float = 0.0

    def is_valid(self, now: Optional[float] = None) -> bool:
        if self.cookies is None:
            return False
        if now is None:
            now = self.clock()
        return now - self.timestamp < self.ttl

    def store(self, cookies: dict[str, str]) -> None:
        self.cookies = dict(cookies)
        self.timestamp = self.clock()

    def clear(self) -> None:
        self.cookies = None
        self.timestamp = 0.0


class SessionProvider:
    """Hands out session cookies, logging in only on a cache miss."""

    def __init__(
        self,
        email: str,
        password: str,
        cache: Optional[SessionCache] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.email = email
        self.password = password
        self.cache = cache if cache is not None else SessionCache()
        self.session = session if session is not None else build_session()

    def acquire(self) -> dict[str, str]:
        if self.cache.is_valid():
            log.debug("Reusing cached session cookies")
            return dict(self.cache.cookies)

        log.info("Session cache empty or expired; logging in")
        cookies = login_and_get_cookies(self.session, self.email, self.password)
        self.cache.store(cookies)
        return dict(cookies)
