"""Unit tests for the checkout web layer.

Structure:
    tests/unit/web/
    ├── test_app.py                  # App factory, lifespan, middleware
    ├── test_routes_checkouts.py     # Checkout routes
    ├── test_routes_health.py        # Health and pricing routes
    └── ... (one per module)

Testing pattern:
    - Use FastAPI's TestClient for route testing
    - Build the app with an in-memory repository and a stub pricer
    - Test request/response validation
    - Test error handling
"""
