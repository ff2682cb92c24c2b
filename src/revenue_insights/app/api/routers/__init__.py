"""API routers for UI-facing endpoints."""

from revenue_insights.app.api.routers.customers import router as customers_router

__all__ = ["customers_router"]
