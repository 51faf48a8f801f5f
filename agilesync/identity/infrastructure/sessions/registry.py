"""
In-memory session registry.

Maps opaque bearer tokens to a principal and an expiry instant. One instance per
principal class; the application owns the instances, there is no module-level state.
"""
from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Generic, Optional, TypeVar

from agilesync.shared.domain.base_entity import utcnow

P = TypeVar("P")

DEFAULT_TTL = timedelta(hours=8)


def generate_token() -> str:
    """256 bits from the OS CSPRNG, URL-safe."""
    return secrets.token_urlsafe(32)


@dataclass(frozen=True, slots=True)
class Session(Generic[P]):
    principal: P
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionRegistry(Generic[P]):
    """
    Thread-safe token -> (principal, expiry) map.

    Every public method takes the lock for its whole critical section, so each
    call is linearizable. Expired entries are dropped when they are looked up;
    purge_expired() is available for an explicit sweep.
    """

    def __init__(
        self,
        name: str,
        ttl: timedelta = DEFAULT_TTL,
        *,
        clock: Callable[[], datetime] = utcnow,
        token_factory: Callable[[], str] = generate_token,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("Session TTL must be positive")
        self.name = name
        self._ttl = ttl
        self._clock = clock
        self._token_factory = token_factory
        self._sessions: Dict[str, Session[P]] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, principal: P) -> str:
        with self._lock:
            token = self._token_factory()
            while token in self._sessions:
                token = self._token_factory()
            self._sessions[token] = Session(principal, self._clock() + self._ttl)
            return token

    def resolve(self, token: str) -> Optional[P]:
        session = self.lookup(token)
        return session.principal if session is not None else None

    def lookup(self, token: str) -> Optional[Session[P]]:
        """Like resolve, but returns the whole session (principal and expiry)."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self._clock()):
                del self._sessions[token]
                return None
            return session

    def revoke(self, token: str) -> bool:
        """Remove the token. Returns False if it was not registered; never raises."""
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._sessions

    def __repr__(self) -> str:
        return f"SessionRegistry(name={self.name!r}, ttl={self._ttl})"
