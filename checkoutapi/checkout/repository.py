"""Session storage."""

from __future__ import annotations

from typing import Protocol

from checkoutapi.checkout.session import CheckoutSession
from checkoutapi.core.locks import ReadWriteLock
from checkoutapi.errors import SessionNotFoundError


class SessionRepository(Protocol):
    """Keyed store of checkout sessions."""

    def get(self, checkout_id: str) -> CheckoutSession:
        ...

    def save(self, session: CheckoutSession) -> None:
        ...

    def __len__(self) -> int:
        ...


class InMemorySessionRepository:
    """Process-local session store. Sessions live until the process exits."""

    def __init__(self):
        self._sessions: dict[str, CheckoutSession] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._sessions)

    def get(self, checkout_id: str) -> CheckoutSession:
        with self._lock.read_locked():
            session = self._sessions.get(checkout_id)
        if session is None:
            raise SessionNotFoundError(checkout_id)
        return session

    def save(self, session: CheckoutSession) -> None:
        with self._lock.write_locked():
            self._sessions[session.id] = session
