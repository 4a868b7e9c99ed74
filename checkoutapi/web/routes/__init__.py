"""Checkout API route modules.

Each module exports a `router` object (APIRouter instance) that the app
factory in checkoutapi.web.app includes. Shared dependencies live in
checkoutapi.web.dependencies and request/response models in
checkoutapi.web.models.

Usage:
    from checkoutapi.web.routes import checkouts
    app.include_router(checkouts.router)
"""

from checkoutapi.web.routes import checkouts, health

__all__ = ["checkouts", "health"]
