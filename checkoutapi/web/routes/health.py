"""Health check and pricing inspection routes.

Provides endpoints for monitoring the service and the active price list.
"""

from fastapi import APIRouter, Depends, status

from checkoutapi.checkout import SessionRepository
from checkoutapi.pricing import PricingCatalog
from checkoutapi.web.dependencies import get_catalog, get_repository
from checkoutapi.web.models import HealthStatus, PricingSnapshot

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthStatus)
def health_check(
    catalog: PricingCatalog = Depends(get_catalog),
    repository: SessionRepository = Depends(get_repository),
):
    """Check application health.

    Reports the active pricing version and how many sessions are open.
    """
    return HealthStatus(
        status="ok",
        pricing_version=catalog.version,
        sku_count=len(catalog.get_rules()),
        sessions=len(repository),
    )


@router.get("/pricing", response_model=PricingSnapshot)
def get_pricing(catalog: PricingCatalog = Depends(get_catalog)):
    """Return the pricing rules currently in force."""
    return PricingSnapshot(
        version=catalog.version,
        loaded_at=catalog.loaded_at,
        rules=dict(catalog.get_rules()),
    )
