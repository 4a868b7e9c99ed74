"""Checkout sessions, their store and the operations built on them."""

from checkoutapi.checkout.repository import InMemorySessionRepository, SessionRepository
from checkoutapi.checkout.service import CheckoutService
from checkoutapi.checkout.session import CheckoutSession, RulesProvider

__all__ = [
    "CheckoutService",
    "CheckoutSession",
    "InMemorySessionRepository",
    "RulesProvider",
    "SessionRepository",
]
