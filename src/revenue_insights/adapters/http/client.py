from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx

from revenue_insights.adapters.ingestion.normalize import normalize_customer_detail, normalize_customer_list
from revenue_insights.application.errors import NotFound, TransportError
from revenue_insights.domain.common.customer import Customer
from revenue_insights.domain.common.ids import CorrelationId
from revenue_insights.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_transient(error: TransportError) -> bool:
    """Connection failures, unreadable bodies and 5xx are worth retrying; other statuses are not."""
    return error.status_code is None or error.status_code >= 500


class HttpCustomerSource:
    """Customer source backed by the clustered-data and customer-insights HTTP endpoints."""

    def __init__(
        self,
        settings: Settings,
        correlation_id: Optional[CorrelationId] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.correlation_id = correlation_id
        self._transport = transport

    def _get_log_extra(self) -> dict[str, str]:
        """Get extra context for structured logging."""
        extra = {}
        if self.correlation_id:
            extra["correlation_id"] = self.correlation_id.value
        return extra

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.http_timeout_seconds,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    async def _retry_on_error(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Execute operation with retry logic for transient transport errors."""
        max_retries = max(self.settings.http_max_retries, 1)
        initial_delay = self.settings.http_retry_delay_seconds
        for attempt in range(max_retries):
            try:
                return await operation()
            except TransportError as e:
                if not _is_transient(e):
                    logger.error(f"Fetch failed with non-retryable error: {e}", extra=self._get_log_extra())
                    raise
                if attempt < max_retries - 1:
                    delay = initial_delay * (2**attempt)
                    logger.warning(
                        f"Fetch failed (attempt {attempt + 1}/{max_retries}), retrying in {delay}s: {e}",
                        extra=self._get_log_extra(),
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(
                        f"Fetch failed after {max_retries} attempts: {e}",
                        extra=self._get_log_extra(),
                    )
                    raise
        raise TransportError("No fetch attempts were made")

    async def _get_json(self, url: str, missing_ok: bool = False) -> Any:
        logger.debug(f"GET {url}", extra=self._get_log_extra())
        try:
            async with self._client() as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404 and missing_ok:
            return None
        if not response.is_success:
            raise TransportError(
                f"Request to {url} returned status {response.status_code}",
                status_code=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Response from {url} is not valid JSON: {e}") from e

    async def fetch_customers(self) -> list[Customer]:
        payload = await self._retry_on_error(lambda: self._get_json(self.settings.customers_url))
        customers = normalize_customer_list(payload)
        logger.info(f"Fetched {len(customers)} customers", extra=self._get_log_extra())
        return customers

    async def fetch_customer(self, customer_id: str) -> Customer:
        url = f"{self.settings.customer_detail_url.rstrip('/')}/{customer_id}"
        payload = await self._retry_on_error(lambda: self._get_json(url, missing_ok=True))
        if payload is None:
            raise NotFound(customer_id)
        return normalize_customer_detail(payload, customer_id=customer_id)
