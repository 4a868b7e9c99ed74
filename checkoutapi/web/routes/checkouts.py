"""Checkout session routes.

Routes:
- POST /checkouts                    - Open a new checkout session
- POST /checkouts/{checkout_id}/scan - Scan one item into a session
- GET  /checkouts/{checkout_id}      - Current total for a session
- GET  /checkouts/{checkout_id}/items - Scanned SKU counts for a session

Handlers are plain functions so FastAPI runs them in its thread pool; the
session store and catalog do their own locking.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Response, status

from checkoutapi.checkout import CheckoutService
from checkoutapi.web.dependencies import get_checkout_service
from checkoutapi.web.models import CheckoutCreated, CheckoutItems, CheckoutTotal, ScanRequest

logger = structlog.get_logger()

router = APIRouter(prefix="/checkouts", tags=["checkouts"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CheckoutCreated)
def create_checkout(service: CheckoutService = Depends(get_checkout_service)):
    """Open a new checkout session and return its id."""
    session = service.create_checkout()
    return CheckoutCreated(checkout_id=session.id)


@router.post("/{checkout_id}/scan", status_code=status.HTTP_204_NO_CONTENT)
def scan_item(
    checkout_id: str,
    body: ScanRequest,
    service: CheckoutService = Depends(get_checkout_service),
):
    """Scan one unit of a SKU.

    400 for a SKU with no pricing rule, 404 for an unknown session.
    """
    service.scan(checkout_id, body.sku)
    logger.debug("item_scanned", checkout_id=checkout_id, sku=body.sku)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{checkout_id}", response_model=CheckoutTotal)
def get_total_price(
    checkout_id: str,
    service: CheckoutService = Depends(get_checkout_service),
):
    summary = service.get_total(checkout_id)
    return CheckoutTotal(checkout_id=summary.checkout_id, total_price=summary.total_price)


@router.get("/{checkout_id}/items", response_model=CheckoutItems)
def get_scanned_items(
    checkout_id: str,
    service: CheckoutService = Depends(get_checkout_service),
):
    return CheckoutItems(checkout_id=checkout_id, items=service.get_items(checkout_id))
