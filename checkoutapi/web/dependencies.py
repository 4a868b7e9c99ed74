"""Shared dependencies for checkout web routes.

The app factory stores the catalog, repository and service on `app.state`;
these providers hand them to route handlers through FastAPI's Depends().

Usage:
    from fastapi import Depends
    from checkoutapi.web.dependencies import get_checkout_service

    @router.get("/checkouts/{checkout_id}")
    def get_checkout(
        checkout_id: str,
        service: CheckoutService = Depends(get_checkout_service),
    ):
        ...
"""

from __future__ import annotations

from fastapi import Request

from checkoutapi.checkout import CheckoutService, SessionRepository
from checkoutapi.pricing import PricingCatalog


def get_checkout_service(request: Request) -> CheckoutService:
    return request.app.state.service


def get_catalog(request: Request) -> PricingCatalog:
    return request.app.state.catalog


def get_repository(request: Request) -> SessionRepository:
    return request.app.state.repository
