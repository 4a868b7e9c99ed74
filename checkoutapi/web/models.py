"""Request/response models for the checkout HTTP API.

Field names are snake_case in Python and camelCase on the wire.

Usage:
    from checkoutapi.web.models import ScanRequest

    @router.post("/checkouts/{checkout_id}/scan")
    def scan(checkout_id: str, body: ScanRequest):
        ...
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from checkoutapi.models import PricingRule


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Checkout Models
# ============================================================================


class ScanRequest(APIModel):
    """Used by: POST /checkouts/{checkout_id}/scan"""

    sku: str = Field(min_length=1)


class CheckoutCreated(APIModel):
    """Used by: POST /checkouts"""

    checkout_id: str


class CheckoutTotal(APIModel):
    """Used by: GET /checkouts/{checkout_id}"""

    checkout_id: str
    total_price: int


class CheckoutItems(APIModel):
    """Used by: GET /checkouts/{checkout_id}/items"""

    checkout_id: str
    items: dict[str, int]


# ============================================================================
# Pricing & Health Models
# ============================================================================


class PricingSnapshot(APIModel):
    """Used by: GET /pricing"""

    version: int
    loaded_at: datetime | None
    rules: dict[str, PricingRule]


class HealthStatus(APIModel):
    """Used by: GET /health"""

    status: str
    pricing_version: int
    sku_count: int
    sessions: int


class ErrorResponse(BaseModel):
    error: str
