"""Exception hierarchy for the checkout core.

Every error the pricing and session code raises derives from
CheckoutAPIError so the web layer can map each kind to its own status code.
"""

from __future__ import annotations


class CheckoutAPIError(Exception):
    """Base class for checkout API errors."""


class PricingSourceError(CheckoutAPIError):
    """Raised when a pricing source cannot be read or parsed."""


class CatalogLoadError(CheckoutAPIError):
    """Raised when the initial pricing load fails; the catalog cannot be built."""


class CatalogReloadError(CheckoutAPIError):
    """Raised when a reload fails; the previously loaded rules stay active."""


class UnknownSKUError(CheckoutAPIError):
    """Raised when a scan references a SKU absent from the current catalog."""

    def __init__(self, sku: str):
        super().__init__(f"sku '{sku}' not found in pricing rules")
        self.sku = sku


class SessionNotFoundError(CheckoutAPIError):
    """Raised when a checkout session id is not in the store."""

    def __init__(self, checkout_id: str):
        super().__init__(f"session with id '{checkout_id}' not found")
        self.checkout_id = checkout_id


class StorageWriteError(CheckoutAPIError):
    """Raised when the session store fails to persist a session."""
