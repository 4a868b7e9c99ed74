"""Pricing rules: sources, the versioned catalog and its background watcher."""

from checkoutapi.pricing.catalog import PricingCatalog
from checkoutapi.pricing.source import FilePricingSource, PricingSource
from checkoutapi.pricing.watcher import PricingWatcher

__all__ = [
    "FilePricingSource",
    "PricingCatalog",
    "PricingSource",
    "PricingWatcher",
]
