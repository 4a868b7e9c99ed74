"""Pydantic models for pricing rules.

Prices are integers in the smallest currency unit. Rules are frozen so a
catalog snapshot can be handed to any caller without copying.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictInt, field_validator

logger = logging.getLogger(__name__)


class SpecialOffer(BaseModel):
    """Multi-buy offer: every `quantity` units cost `price`."""

    model_config = ConfigDict(frozen=True)

    quantity: StrictInt = Field(ge=1)
    price: StrictInt = Field(ge=0)


class PricingRule(BaseModel):
    """Unit price for a SKU plus an optional multi-buy offer."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "unitPrice": 50,
                "specialPrice": {"quantity": 3, "price": 130},
            }
        },
    )

    unit_price: StrictInt = Field(alias="unitPrice")
    special_price: SpecialOffer | None = Field(default=None, alias="specialPrice")

    @field_validator("unit_price")
    @classmethod
    def validate_unit_price(cls, v: int) -> int:
        if v < 0:
            raise ValueError("unitPrice must be non-negative")
        return v

    @property
    def offer_is_discount(self) -> bool:
        """False when buying under the offer costs more than paying unit price."""
        offer = self.special_price
        return offer is None or offer.price <= offer.quantity * self.unit_price

    def price_for(self, count: int) -> int:
        """Price `count` units, using the offer as many times as it fits.

        >>> PricingRule(unitPrice=50, specialPrice={"quantity": 3, "price": 130}).price_for(4)
        180
        """
        offer = self.special_price
        if offer is not None and count >= offer.quantity:
            bundles, remainder = divmod(count, offer.quantity)
            return bundles * offer.price + remainder * self.unit_price
        return count * self.unit_price


class PricingTable(RootModel[dict[str, PricingRule]]):
    """Complete SKU -> rule mapping as read from a pricing source."""

    @field_validator("root")
    @classmethod
    def validate_skus(cls, v: dict[str, PricingRule]) -> dict[str, PricingRule]:
        if not v:
            raise ValueError("pricing source defines no rules")
        for sku, rule in v.items():
            if not sku.strip():
                raise ValueError("SKU must be a non-empty string")
            if not rule.offer_is_discount:
                logger.warning(
                    f"Special offer for {sku} costs more than {rule.special_price.quantity} "
                    f"units at unit price ({rule.special_price.price} > "
                    f"{rule.special_price.quantity * rule.unit_price})"
                )
        return v


@dataclass(frozen=True)
class CheckoutSummary:
    """Running total of a checkout session."""

    checkout_id: str
    total_price: int
