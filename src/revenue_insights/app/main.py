from __future__ import annotations

from fastapi import FastAPI

from revenue_insights.app.api.routers import customers_router
from revenue_insights.app.health import router as health_router
from revenue_insights.observability.logging import configure_logging

configure_logging()

app = FastAPI(title="Revenue Insights")
app.include_router(health_router)
app.include_router(customers_router, prefix="/v1", tags=["customers"])
