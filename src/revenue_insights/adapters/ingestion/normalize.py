"""
Ingestion boundary for customer payloads.

Upstream sources use two field-naming conventions (snake_case and camelCase).
Both are mapped here into the Customer model; nothing past this module sees
raw field names.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from revenue_insights.application.errors import InvalidPayloadError, NotFound
from revenue_insights.domain.common.customer import (
    CLUSTER_HIGH,
    CLUSTER_LOW,
    CLUSTER_MIXED,
    CLUSTER_UNCLASSIFIED,
    Customer,
    InsightPayload,
    KeyValueNote,
    PriceSuggestion,
)
from revenue_insights.domain.common.ids import CustomerId
from revenue_insights.domain.common.revenue import RevenuePoint, series_from_mapping
from revenue_insights.adapters.ingestion.validation import (
    CUSTOMER_DETAIL_SCHEMA,
    CUSTOMER_RECORD_SCHEMA,
    validate_payload,
)

logger = logging.getLogger(__name__)

# (snake_case, camelCase) pairs for the list record fields
ID_KEYS = ("customer", "customerNo")
CLUSTER_KEYS = ("cluster_name", "cluster")
TOTAL_REVENUE_KEYS = ("total_revenue", "totalRevenue")
RANK_KEYS = ("revenue_rank_in_cluster", "rankInCluster")
FREQUENCY_KEYS = ("purchasing_frequency", "purchasingFreq")


def _first(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _finite_float(value: Any) -> Optional[float]:
    """Parse a finite number; None for missing, unparsable, NaN or infinite values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_float(value: Any, default: float = 0.0) -> float:
    number = _finite_float(value)
    return default if number is None else number


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_cluster_label(raw: Any) -> str:
    """Map upstream cluster names ("high_revenue", "Low_Revenue", "Mixed") onto cluster labels."""
    name = str(raw or "").strip().lower()
    if "high" in name:
        return CLUSTER_HIGH
    if "mixed" in name:
        return CLUSTER_MIXED
    if "low" in name:
        return CLUSTER_LOW
    return CLUSTER_UNCLASSIFIED


def normalize_customer_record(record: Any) -> Customer:
    """Normalize one customer list record (either naming convention)."""
    validate_payload(record, CUSTOMER_RECORD_SCHEMA)
    customer_id = str(_first(record, ID_KEYS))
    total_revenue = _finite_float(_first(record, TOTAL_REVENUE_KEYS))
    if total_revenue is None:
        raise InvalidPayloadError(f"Customer {customer_id} has no finite total revenue")
    return Customer(
        customer_id=CustomerId(customer_id),
        cluster_label=normalize_cluster_label(_first(record, CLUSTER_KEYS)),
        total_revenue=total_revenue,
        rank_in_cluster=int(_to_float(_first(record, RANK_KEYS))),
        purchasing_frequency=_to_float(_first(record, FREQUENCY_KEYS)),
    )


def normalize_customer_list(payload: Any) -> list[Customer]:
    """
    Normalize a customer list payload.

    Records that fail validation are logged and skipped; duplicate ids keep
    the first occurrence.
    """
    if not isinstance(payload, list):
        raise InvalidPayloadError(f"Expected a JSON array of customers, got {type(payload).__name__}")

    customers: list[Customer] = []
    seen: set[str] = set()
    for position, record in enumerate(payload):
        try:
            customer = normalize_customer_record(record)
        except InvalidPayloadError as e:
            logger.warning(f"Skipping customer record at position {position}: {e}")
            continue
        if customer.customer_id in seen:
            logger.warning(f"Skipping duplicate customer record {customer.customer_id}")
            continue
        seen.add(customer.customer_id)
        customers.append(customer)
    return customers


def normalize_revenue_mapping(mapping: Any, field_name: str) -> tuple[RevenuePoint, ...]:
    """Turn a period -> amount mapping into an ordered series, skipping unparsable amounts."""
    if not isinstance(mapping, dict):
        return ()
    values: dict[str, float] = {}
    for period_key, raw_value in mapping.items():
        value = _finite_float(raw_value)
        if value is None:
            logger.warning(f"Skipping non-numeric {field_name} value for {period_key}: {raw_value!r}")
            continue
        values[str(period_key)] = value
    return tuple(series_from_mapping(values))


def normalize_notes(value: Any, default_key: str) -> tuple[KeyValueNote, ...]:
    """Accept either a list of {key, value} objects or a single free-text string."""
    if isinstance(value, str):
        text = value.strip()
        return (KeyValueNote(key=default_key, value=text),) if text else ()
    if not isinstance(value, list):
        return ()
    notes: list[KeyValueNote] = []
    for position, item in enumerate(value, start=1):
        if isinstance(item, dict):
            key = _text(item.get("key")) or f"Item {position}"
            notes.append(KeyValueNote(key=key, value=str(item.get("value") or "")))
        elif _text(item):
            notes.append(KeyValueNote(key=f"Item {position}", value=str(item).strip()))
    return tuple(notes)


def normalize_price_suggestions(value: Any) -> tuple[PriceSuggestion, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(
        PriceSuggestion(
            material=str(item.get("material") or ""),
            current_price=_to_float(item.get("current_price")),
            suggested_price=_to_float(item.get("suggested_price")),
            discount=str(item.get("discount") or ""),
        )
        for item in value
        if isinstance(item, dict)
    )


def _recommendation_lines(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else ()
    if isinstance(value, list):
        return tuple(note.value for note in normalize_notes(value, "Recommendation"))
    return ()


def normalize_insight_override(payload: dict[str, Any]) -> Optional[InsightPayload]:
    """
    Build the curated insight, if the payload carries one.

    A nested ``insights`` object wins; otherwise the flat curated fields of the
    detail payload are used. Returns None when neither is present so the
    heuristic fallback runs.
    """
    insights = payload.get("insights")
    if isinstance(insights, dict):
        churn_decision = _text(_first(insights, ("churn_decision", "churnDecision")))
        retention_strategy = _text(_first(insights, ("retention_strategy", "retentionStrategy")))
        offer = _text(_first(insights, ("offer", "offers")))
        observation = _text(insights.get("observation"))
        recommendations = _recommendation_lines(insights.get("recommendations"))
    else:
        churn_decision = _text(payload.get("churn_analysis"))
        retention_strategy = _text(payload.get("retention_strategies"))
        offer = _text(_first(payload, ("Retention_offers", "retention_offers")))
        observation = _text(payload.get("trend_of_sales"))
        curated = any((churn_decision, retention_strategy, offer, observation))
        recommendations = _recommendation_lines(payload.get("recommendation")) if curated else ()

    if not any((churn_decision, retention_strategy, offer, observation, recommendations)):
        return None
    return InsightPayload(
        churn_decision=churn_decision or "",
        retention_strategy=retention_strategy or "",
        offer=offer or "",
        observation=observation or "",
        recommendations=recommendations,
    )


def normalize_customer_detail(payload: Any, customer_id: Optional[str] = None) -> Customer:
    """Normalize a customer detail payload; optional sections missing is not an error."""
    if not payload:
        raise NotFound(customer_id or "")
    validate_payload(payload, CUSTOMER_DETAIL_SCHEMA)

    raw_id = _first(payload, ID_KEYS)
    if raw_id is None and customer_id is None:
        raise InvalidPayloadError("Customer detail payload has no customer id")
    resolved_id = str(raw_id) if raw_id is not None else str(customer_id)

    revenue_by_quarter = normalize_revenue_mapping(payload.get("revenue_by_quarter"), "revenue_by_quarter")
    revenue_by_year = normalize_revenue_mapping(payload.get("revenue_by_year"), "revenue_by_year")

    total_revenue = _finite_float(_first(payload, TOTAL_REVENUE_KEYS))
    if total_revenue is None:
        total_revenue = float(sum(point.value for point in (revenue_by_year or revenue_by_quarter)))

    return Customer(
        customer_id=CustomerId(resolved_id),
        cluster_label=normalize_cluster_label(_first(payload, CLUSTER_KEYS)),
        total_revenue=total_revenue,
        rank_in_cluster=int(_to_float(_first(payload, RANK_KEYS))),
        purchasing_frequency=_to_float(_first(payload, FREQUENCY_KEYS)),
        revenue_by_quarter=revenue_by_quarter,
        revenue_by_year=revenue_by_year,
        insight_override=normalize_insight_override(payload),
        churn_label=_text(payload.get("churn")),
        product_combination=_text(payload.get("product_combination")),
        purchase_details=_text(_first(payload, ("Purchase_details", "purchase_details"))),
        price_suggestions=normalize_price_suggestions(payload.get("best_price_by_material")),
        observations=normalize_notes(payload.get("observation"), "Observation"),
        recommendations=normalize_notes(payload.get("recommendation"), "Recommendation"),
    )
