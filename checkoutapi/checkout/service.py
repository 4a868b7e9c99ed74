"""Checkout operations exposed to the request layer (create, scan, total)."""

from __future__ import annotations

import logging

from checkoutapi.checkout.repository import SessionRepository
from checkoutapi.checkout.session import CheckoutSession, RulesProvider
from checkoutapi.errors import StorageWriteError
from checkoutapi.models import CheckoutSummary

logger = logging.getLogger(__name__)


class CheckoutService:
    """Ties the session store to the pricing rules.

    Each call is a full get -> mutate -> save round trip against the store.
    """

    def __init__(self, repository: SessionRepository, pricer: RulesProvider):
        self.repository = repository
        self.pricer = pricer

    def create_checkout(self) -> CheckoutSession:
        """Open a new, empty session.

        Raises:
            StorageWriteError: If the store cannot save the session
        """
        session = CheckoutSession(self.pricer)
        self._save(session)
        logger.info(f"Created checkout session {session.id}")
        return session

    def scan(self, checkout_id: str, sku: str) -> None:
        """Scan one unit of `sku` into an existing session.

        Raises:
            SessionNotFoundError: If no session has this id
            UnknownSKUError: If `sku` is not in the current pricing rules
            StorageWriteError: If the store cannot save the session
        """
        session = self.repository.get(checkout_id)
        session.scan(sku)
        self._save(session)

    def get_total(self, checkout_id: str) -> CheckoutSummary:
        """Raises SessionNotFoundError if no session has this id."""
        session = self.repository.get(checkout_id)
        return CheckoutSummary(checkout_id=session.id, total_price=session.get_total_price())

    def get_items(self, checkout_id: str) -> dict[str, int]:
        return self.repository.get(checkout_id).scanned_items()

    def _save(self, session: CheckoutSession) -> None:
        try:
            self.repository.save(session)
        except Exception as e:
            logger.error(f"Failed to save session {session.id}: {e}")
            raise StorageWriteError(f"could not save session {session.id}") from e
