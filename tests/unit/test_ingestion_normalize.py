import json
import logging
import math

import pytest

from revenue_insights.adapters.ingestion.normalize import (
    normalize_cluster_label,
    normalize_customer_detail,
    normalize_customer_list,
    normalize_customer_record,
    normalize_notes,
)
from revenue_insights.application.errors import InvalidPayloadError, NotFound
from revenue_insights.application.report import build_customer_report
from revenue_insights.domain.common.customer import (
    CLUSTER_HIGH,
    CLUSTER_LOW,
    CLUSTER_MIXED,
    CLUSTER_UNCLASSIFIED,
    InsightPayload,
    KeyValueNote,
    PriceSuggestion,
)
from revenue_insights.domain.common.revenue import RevenuePoint


def test_snake_and_camel_records_normalize_to_same_customer():
    """Test that both upstream naming conventions yield an identical Customer."""
    snake = {
        "customer": "C-9",
        "cluster_name": "low_revenue",
        "total_revenue": 1200.0,
        "revenue_rank_in_cluster": 4,
        "purchasing_frequency": 3,
    }
    camel = {
        "customerNo": "C-9",
        "cluster": "Low_Revenue",
        "totalRevenue": 1200.0,
        "rankInCluster": 4,
        "purchasingFreq": 3,
    }
    assert normalize_customer_record(snake) == normalize_customer_record(camel)
    customer = normalize_customer_record(snake)
    assert customer.customer_id == "C-9"
    assert customer.cluster_label == CLUSTER_LOW
    assert customer.rank_in_cluster == 4
    assert customer.purchasing_frequency == 3.0


def test_integer_customer_ids_become_strings():
    customer = normalize_customer_record({"customer": 1001, "cluster_name": "High", "total_revenue": 1})
    assert customer.customer_id == "1001"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("high_revenue", CLUSTER_HIGH),
        ("High", CLUSTER_HIGH),
        ("Mixed_Revenue", CLUSTER_MIXED),
        ("LOW", CLUSTER_LOW),
        ("dormant", CLUSTER_UNCLASSIFIED),
        (None, CLUSTER_UNCLASSIFIED),
    ],
)
def test_cluster_label_normalization(raw, expected):
    assert normalize_cluster_label(raw) == expected


def test_record_missing_required_field_is_rejected():
    with pytest.raises(InvalidPayloadError):
        normalize_customer_record({"customer": "C-1", "cluster_name": "High"})


def test_list_payload_must_be_an_array():
    with pytest.raises(InvalidPayloadError):
        normalize_customer_list({"customers": []})


def test_list_skips_invalid_and_duplicate_records(caplog):
    payload = [
        {"customer": "C-1", "cluster_name": "High", "total_revenue": 10},
        {"customer": "C-2", "cluster_name": "Low"},
        {"customer": "C-3", "cluster_name": "Low", "total_revenue": "a lot"},
        "not-a-record",
        {"customerNo": "C-1", "cluster": "Low", "totalRevenue": 99},
        {"customerNo": "C-4", "cluster": "Mixed", "totalRevenue": 20},
    ]
    with caplog.at_level(logging.WARNING):
        customers = normalize_customer_list(payload)
    assert [c.customer_id for c in customers] == ["C-1", "C-4"]
    assert customers[0].cluster_label == CLUSTER_HIGH
    assert "duplicate" in caplog.text


def test_empty_list_is_valid():
    assert normalize_customer_list([]) == []


def test_empty_detail_payload_is_not_found():
    with pytest.raises(NotFound):
        normalize_customer_detail({}, customer_id="C-1")
    with pytest.raises(NotFound):
        normalize_customer_detail(None, customer_id="C-1")


def test_detail_accepts_numeric_strings_and_skips_unparsable_amounts(caplog):
    payload = {
        "customer": "C-1",
        "cluster_name": "Mixed",
        "revenue_by_quarter": {"2024-Q2": "200.5", "2024-Q1": 100, "2024-Q3": "n/a", "2024-Q4": None},
    }
    with caplog.at_level(logging.WARNING):
        customer = normalize_customer_detail(payload)
    assert customer.revenue_by_quarter == (RevenuePoint("2024-Q1", 100.0), RevenuePoint("2024-Q2", 200.5))
    assert "2024-Q3" in caplog.text


def test_detail_total_falls_back_to_series_sum():
    customer = normalize_customer_detail(
        {"customer": "C-1", "revenue_by_quarter": {"2024-Q1": 10, "2024-Q2": 15}}
    )
    assert customer.total_revenue == 25.0


def test_detail_uses_requested_id_when_payload_has_none():
    customer = normalize_customer_detail({"cluster": "High", "totalRevenue": 5}, customer_id="C-77")
    assert customer.customer_id == "C-77"


def test_detail_without_any_id_is_invalid():
    with pytest.raises(InvalidPayloadError):
        normalize_customer_detail({"cluster": "High"})


def test_detail_without_curated_fields_has_no_override():
    customer = normalize_customer_detail({"customer": "C-1", "cluster_name": "High", "total_revenue": 1})
    assert customer.insight_override is None
    assert customer.price_suggestions == ()
    assert customer.observations == ()


def test_nested_insights_object_becomes_override():
    payload = {
        "customer": "C-1",
        "insights": {
            "churnDecision": "Low churn",
            "retentionStrategy": "Keep close",
            "offer": "Free shipping",
            "observation": "Steady",
            "recommendations": ["Call monthly", "Share roadmap"],
        },
        "churn_analysis": "ignored when insights present",
    }
    customer = normalize_customer_detail(payload)
    assert customer.insight_override == InsightPayload(
        churn_decision="Low churn",
        retention_strategy="Keep close",
        offer="Free shipping",
        observation="Steady",
        recommendations=("Call monthly", "Share roadmap"),
    )


def test_flat_curated_fields_become_override():
    payload = {
        "customer": "C-1",
        "churn": "Yes",
        "churn_analysis": "Orders slowed after Q2.",
        "retention_strategies": "Assign an account manager.",
        "Retention_offers": "10% off next order.",
        "trend_of_sales": "Falling since mid-year.",
        "recommendation": [{"key": "Pricing", "value": "Hold prices for two quarters."}],
    }
    customer = normalize_customer_detail(payload)
    override = customer.insight_override
    assert override.churn_decision == "Orders slowed after Q2."
    assert override.offer == "10% off next order."
    assert override.observation == "Falling since mid-year."
    assert override.recommendations == ("Hold prices for two quarters.",)
    assert customer.churn_label == "Yes"
    assert customer.recommendations == (KeyValueNote("Pricing", "Hold prices for two quarters."),)


def test_recommendation_alone_does_not_create_override():
    customer = normalize_customer_detail({"customer": "C-1", "recommendation": "Call them."})
    assert customer.insight_override is None
    assert customer.recommendations == (KeyValueNote("Recommendation", "Call them."),)


def test_detail_sections_are_normalized():
    payload = {
        "customer": "C-1",
        "product_combination": "Cement + Steel",
        "Purchase_details": "Bulk orders in Q4",
        "best_price_by_material": [
            {"material": "Cement", "current_price": "12.5", "suggested_price": 11, "discount": "12%"},
        ],
        "observation": "Orders are seasonal.",
    }
    customer = normalize_customer_detail(payload)
    assert customer.product_combination == "Cement + Steel"
    assert customer.purchase_details == "Bulk orders in Q4"
    assert customer.price_suggestions == (PriceSuggestion("Cement", 12.5, 11.0, "12%"),)
    assert customer.observations == (KeyValueNote("Observation", "Orders are seasonal."),)


def test_notes_accept_key_value_lists_and_blank_keys():
    notes = normalize_notes([{"key": "Volume", "value": "Up"}, {"value": "Flat"}, "Free text", ""], "Note")
    assert notes == (
        KeyValueNote("Volume", "Up"),
        KeyValueNote("Item 2", "Flat"),
        KeyValueNote("Item 3", "Free text"),
    )


def test_list_skips_record_with_non_finite_total_revenue(caplog):
    """Test that a NaN or infinite total revenue rejects only that record."""
    payload = json.loads(
        '[{"customer": "A", "cluster_name": "High", "total_revenue": NaN},'
        ' {"customer": "B", "cluster_name": "Low", "total_revenue": Infinity},'
        ' {"customer": "C", "cluster_name": "Mixed", "total_revenue": 12.5}]'
    )
    with caplog.at_level(logging.WARNING):
        customers = normalize_customer_list(payload)
    assert [c.customer_id for c in customers] == ["C"]
    assert "finite total revenue" in caplog.text


def test_list_tolerates_non_finite_rank_and_frequency():
    payload = json.loads(
        '[{"customer": "A", "cluster_name": "High", "total_revenue": 10,'
        ' "revenue_rank_in_cluster": NaN, "purchasing_frequency": -Infinity},'
        ' {"customerNo": "B", "cluster": "Low", "totalRevenue": 5, "rankInCluster": Infinity}]'
    )
    customers = normalize_customer_list(payload)
    assert [c.customer_id for c in customers] == ["A", "B"]
    assert customers[0].rank_in_cluster == 0
    assert customers[0].purchasing_frequency == 0.0
    assert customers[1].rank_in_cluster == 0


def test_detail_skips_non_finite_revenue_amounts(caplog):
    payload = {
        "customer": "A",
        "cluster": "High",
        "revenue_by_year": {"2024": "NaN", "2025": 100, "2026": "inf"},
        "revenue_by_quarter": {"2025-Q1": "Infinity", "2025-Q2": 60},
    }
    with caplog.at_level(logging.WARNING):
        customer = normalize_customer_detail(payload)
    assert customer.revenue_by_year == (RevenuePoint("2025", 100.0),)
    assert customer.revenue_by_quarter == (RevenuePoint("2025-Q2", 60.0),)
    assert customer.total_revenue == 100.0
    assert "2024" in caplog.text


def test_detail_report_totals_stay_finite_with_non_finite_input():
    customer = normalize_customer_detail(
        {"customer": "A", "cluster": "High", "totalRevenue": float("nan"), "revenue_by_year": {"2024": "NaN", "2025": 100}}
    )
    totals = build_customer_report(customer).totals
    values = (customer.total_revenue, totals.total, totals.latest, totals.previous, totals.delta_abs, totals.delta_pct)
    assert all(math.isfinite(value) for value in values)
    assert totals.delta_pct == 0.0
