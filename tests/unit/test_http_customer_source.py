import asyncio

import httpx
import pytest

from revenue_insights.adapters.http.client import HttpCustomerSource
from revenue_insights.application.errors import InvalidPayloadError, NotFound, TransportError
from revenue_insights.domain.common.customer import CLUSTER_HIGH, CLUSTER_LOW
from revenue_insights.domain.common.ids import CorrelationId
from revenue_insights.settings import Settings

SETTINGS = Settings(
    customers_url="http://upstream.test/clustered-data",
    customer_detail_url="http://upstream.test/customer-insights/",
    http_max_retries=3,
    http_retry_delay_seconds=0.0,
)


def make_source(handler, settings: Settings = SETTINGS) -> HttpCustomerSource:
    return HttpCustomerSource(settings, CorrelationId("test-corr"), transport=httpx.MockTransport(handler))


def test_fetch_customers_normalizes_both_conventions():
    """Test that the list payload passes through the ingestion boundary."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"customer": "C-1", "cluster_name": "high_revenue", "total_revenue": 100.0},
                {"customerNo": "C-2", "cluster": "Low_Revenue", "totalRevenue": 5.0},
            ],
        )

    customers = asyncio.run(make_source(handler).fetch_customers())
    assert [(c.customer_id, c.cluster_label) for c in customers] == [("C-1", CLUSTER_HIGH), ("C-2", CLUSTER_LOW)]
    assert str(seen[0].url) == "http://upstream.test/clustered-data"
    assert seen[0].headers["accept"] == "application/json"


def test_fetch_customers_retries_transient_failures():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=[])

    assert asyncio.run(make_source(handler).fetch_customers()) == []
    assert calls["count"] == 3


def test_fetch_customers_raises_after_retries_exhausted():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(500)

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(make_source(handler).fetch_customers())
    assert exc_info.value.status_code == 500
    assert calls["count"] == SETTINGS.http_max_retries


def test_connection_errors_become_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        asyncio.run(make_source(handler).fetch_customers())


def test_invalid_json_is_a_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>", headers={"content-type": "application/json"})

    with pytest.raises(TransportError):
        asyncio.run(make_source(handler).fetch_customers())


def test_non_array_list_payload_is_invalid():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "maintenance"})

    with pytest.raises(InvalidPayloadError):
        asyncio.run(make_source(handler).fetch_customers())


def test_missing_list_endpoint_is_a_transport_error():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(404)

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(make_source(handler).fetch_customers())
    assert exc_info.value.status_code == 404
    assert calls["count"] == 1


def test_fetch_customer_builds_detail_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(
            200,
            json={"customer": "C-1", "cluster_name": "High", "revenue_by_quarter": {"2024-Q1": 10, "2024-Q2": 20}},
        )

    customer = asyncio.run(make_source(handler).fetch_customer("C-1"))
    assert seen == ["http://upstream.test/customer-insights/C-1"]
    assert customer.customer_id == "C-1"
    assert customer.total_revenue == 30.0


def test_fetch_customer_404_is_not_found_without_retry():
    """Test that an unknown customer surfaces as NotFound, distinct from transport failures."""
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(404)

    with pytest.raises(NotFound):
        asyncio.run(make_source(handler).fetch_customer("C-404"))
    assert calls["count"] == 1


def test_fetch_customer_empty_body_is_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"")

    with pytest.raises(NotFound):
        asyncio.run(make_source(handler).fetch_customer("C-1"))


def test_fetch_customer_server_error_is_not_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502)

    with pytest.raises(TransportError):
        asyncio.run(make_source(handler).fetch_customer("C-1"))


@pytest.mark.parametrize("status_code", [400, 401, 403, 422])
def test_client_errors_are_not_retried(status_code):
    """Test that a non-transient 4xx status fails on the first attempt."""
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(status_code)

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(make_source(handler).fetch_customers())
    assert exc_info.value.status_code == status_code
    assert calls["count"] == 1


def test_connection_errors_are_retried():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectError("connection reset", request=request)
        return httpx.Response(200, json=[])

    assert asyncio.run(make_source(handler).fetch_customers()) == []
    assert calls["count"] == 2
