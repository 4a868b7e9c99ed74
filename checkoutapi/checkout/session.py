"""Checkout session: scanned item counts priced against the live catalog."""

from __future__ import annotations

import logging
import threading
from typing import Mapping, Protocol, runtime_checkable
from uuid import uuid4

from checkoutapi.errors import UnknownSKUError
from checkoutapi.models import PricingRule

logger = logging.getLogger(__name__)


@runtime_checkable
class RulesProvider(Protocol):
    """Source of the current pricing rules (the catalog, or a stub in tests)."""

    def get_rules(self) -> Mapping[str, PricingRule]:
        ...


class CheckoutSession:
    """A single customer's in-progress checkout.

    Every scan and total re-reads the provider, so price changes apply to a
    session that is already open. The rule in force at a SKU's latest scan
    is remembered and used when the catalog has since dropped that SKU.

    Each session guards its own counts, so concurrent scans of the same
    session never lose an increment.
    """

    def __init__(self, pricer: RulesProvider, session_id: str | None = None):
        self._id = session_id or str(uuid4())
        self._pricer = pricer
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}
        self._scanned_rules: dict[str, PricingRule] = {}

    def __repr__(self) -> str:
        return f"CheckoutSession(id={self._id!r}, items={self.scanned_items()!r})"

    @property
    def id(self) -> str:
        return self._id

    def get_id(self) -> str:
        return self._id

    def scan(self, sku: str) -> None:
        """Add one unit of `sku`.

        Raises:
            UnknownSKUError: If the current catalog has no rule for `sku`;
                the session is left unchanged
        """
        rule = self._pricer.get_rules().get(sku)
        if rule is None:
            raise UnknownSKUError(sku)

        with self._lock:
            self._counts[sku] = self._counts.get(sku, 0) + 1
            self._scanned_rules[sku] = rule
            count = self._counts[sku]
        logger.debug(f"Scanned {sku} into {self._id} (count={count})")

    def get_total_price(self) -> int:
        """Total for everything scanned so far, offers applied."""
        rules = self._pricer.get_rules()
        with self._lock:
            lines = [(sku, count, self._scanned_rules[sku]) for sku, count in self._counts.items()]

        total = 0
        for sku, count, scanned_rule in lines:
            rule = rules.get(sku)
            if rule is None:
                logger.warning(
                    f"SKU {sku} in session {self._id} is no longer priced; "
                    "using the rule from its last scan"
                )
                rule = scanned_rule
            total += rule.price_for(count)
        return total

    def scanned_items(self) -> dict[str, int]:
        """Copy of the SKU -> count mapping."""
        with self._lock:
            return dict(self._counts)
