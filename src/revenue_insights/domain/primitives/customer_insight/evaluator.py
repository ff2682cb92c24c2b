from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from revenue_insights.domain.common.customer import (
    CLUSTER_HIGH,
    CLUSTER_LOW,
    CLUSTER_MIXED,
    Customer,
    InsightPayload,
)
from revenue_insights.domain.common.evidence import Evidence
from revenue_insights.domain.primitives.customer_insight.config import CustomerInsightConfig
from revenue_insights.domain.primitives.customer_insight.models import CustomerInsightResult, InsightRule
from revenue_insights.domain.primitives.customer_insight import rules
from revenue_insights.domain.primitives.revenue_trend.model import TrendClassification

# First match wins; the last rule always applies.
INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        rule_id=rules.RULE_DECLINING,
        applies=lambda customer, trend: trend.declining,
        churn_decision=rules.CHURN_HIGH_RISK,
        retention_strategy=rules.RETAIN_REACTIVATE,
        offer=rules.OFFER_REACTIVATION_COUPON,
        recommendations=rules.RECOMMEND_DECLINING,
    ),
    InsightRule(
        rule_id=rules.RULE_LOW_VALUE,
        applies=lambda customer, trend: customer.cluster_label == CLUSTER_LOW,
        churn_decision=rules.CHURN_HIGH_RISK,
        retention_strategy=rules.RETAIN_SIMPLIFY,
        offer=rules.OFFER_REACTIVATION_BUNDLE,
        recommendations=rules.RECOMMEND_LOW_VALUE,
    ),
    InsightRule(
        rule_id=rules.RULE_MIXED_VALUE,
        applies=lambda customer, trend: customer.cluster_label == CLUSTER_MIXED,
        churn_decision=rules.CHURN_MODERATE_RISK,
        retention_strategy=rules.RETAIN_MONITOR,
        offer=rules.OFFER_COMBO_SEASONAL,
        recommendations=rules.RECOMMEND_MIXED_VALUE,
    ),
    InsightRule(
        rule_id=rules.RULE_HIGH_VALUE,
        applies=lambda customer, trend: customer.cluster_label == CLUSTER_HIGH,
        churn_decision=rules.CHURN_LOW_RISK,
        retention_strategy=rules.RETAIN_PREMIUM,
        offer=rules.OFFER_LOYALTY_EARLY_ACCESS,
        recommendations=rules.RECOMMEND_HIGH_VALUE,
    ),
    InsightRule(
        rule_id=rules.RULE_DEFAULT,
        applies=lambda customer, trend: True,
        churn_decision=rules.CHURN_NEUTRAL,
        retention_strategy=rules.RETAIN_STANDARD,
        offer=rules.OFFER_STANDARD_LOYALTY,
        recommendations=rules.RECOMMEND_DEFAULT,
    ),
)


def match_rule(
    customer: Customer,
    trend: TrendClassification,
    insight_rules: tuple[InsightRule, ...] = INSIGHT_RULES,
) -> InsightRule:
    for rule in insight_rules:
        if rule.applies(customer, trend):
            return rule
    # INSIGHT_RULES ends with a catch-all; custom rule sets may not.
    return INSIGHT_RULES[-1]


def format_amount(amount: float, currency_symbol: str) -> str:
    return f"{currency_symbol}{abs(amount):,.0f}"


def build_observation(trend: TrendClassification, config: CustomerInsightConfig) -> str:
    amount = format_amount(trend.delta, config.currency_symbol)
    if trend.declining:
        return rules.OBSERVATION_DECLINING.format(amount=amount)
    if trend.improving:
        return rules.OBSERVATION_IMPROVING.format(amount=amount)
    return rules.OBSERVATION_STABLE


def evaluate_customer_insight(
    customer: Customer,
    trend: TrendClassification,
    config: Optional[CustomerInsightConfig] = None,
) -> CustomerInsightResult:
    """
    Derive the narrative insight for a customer.

    An upstream-curated insight_override is returned verbatim. Otherwise the
    ordered INSIGHT_RULES are evaluated against the cluster label and the
    trend classification:
    1. DECLINING trend => high churn risk, reactivation
    2. Low cluster => high churn risk, simplified reordering
    3. Mixed cluster => moderate risk, combo/seasonal offers
    4. High cluster => low risk, premium retention
    5. Else => neutral narrative
    """
    config = config or CustomerInsightConfig()

    if customer.insight_override is not None:
        payload = customer.insight_override
        source = rules.SOURCE_OVERRIDE
        rule_id = rules.RULE_OVERRIDE
    else:
        rule = match_rule(customer, trend)
        payload = InsightPayload(
            churn_decision=rule.churn_decision,
            retention_strategy=rule.retention_strategy,
            offer=rule.offer,
            observation=build_observation(trend, config),
            recommendations=tuple(rule.recommendations),
        )
        source = rules.SOURCE_HEURISTIC
        rule_id = rule.rule_id

    evidence = Evidence(
        evidence_id=f"evidence-{customer.customer_id}-insight",
        rule_ids=[rule_id, trend.rule_id],
        thresholds={},
        references={
            "source": source,
            "cluster_label": customer.cluster_label,
            "trend_classification": trend.classification,
            "trend_delta": trend.delta,
            "trend_window_size": trend.window_size,
        },
        observed_at=datetime.now(timezone.utc),
    )
    return CustomerInsightResult(payload=payload, source=source, rule_id=rule_id, evidence=evidence)


def derive_insight(
    customer: Customer,
    trend: TrendClassification,
    config: Optional[CustomerInsightConfig] = None,
) -> InsightPayload:
    return evaluate_customer_insight(customer, trend, config).payload
