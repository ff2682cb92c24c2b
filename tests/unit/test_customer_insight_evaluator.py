from revenue_insights.domain.common.customer import (
    CLUSTER_HIGH,
    CLUSTER_LOW,
    CLUSTER_MIXED,
    CLUSTER_UNCLASSIFIED,
    Customer,
    InsightPayload,
)
from revenue_insights.domain.common.ids import CustomerId
from revenue_insights.domain.primitives.customer_insight.config import CustomerInsightConfig
from revenue_insights.domain.primitives.customer_insight.evaluator import (
    INSIGHT_RULES,
    derive_insight,
    evaluate_customer_insight,
    format_amount,
    match_rule,
)
from revenue_insights.domain.primitives.customer_insight import rules
from revenue_insights.domain.primitives.revenue_trend.model import TrendClassification
from revenue_insights.domain.primitives.revenue_trend import rules as trend_rules

DECLINING = TrendClassification(trend_rules.DECLINING, -340000.0, trend_rules.RULE_ID_REVENUE_FALLING, 4)
IMPROVING = TrendClassification(trend_rules.IMPROVING, 1250.0, trend_rules.RULE_ID_REVENUE_RISING, 4)
STABLE = TrendClassification(trend_rules.STABLE, 0.0, trend_rules.RULE_ID_REVENUE_FLAT, 4)


def make_customer(cluster_label: str = CLUSTER_HIGH, **kwargs) -> Customer:
    return Customer(customer_id=CustomerId("C-1"), cluster_label=cluster_label, total_revenue=1000.0, **kwargs)


def test_override_is_returned_unchanged_regardless_of_trend():
    """Test that a curated insight wins over every heuristic."""
    override = InsightPayload(
        churn_decision="Curated churn",
        retention_strategy="Curated strategy",
        offer="Curated offer",
        observation="Curated observation",
        recommendations=("Curated step",),
    )
    customer = make_customer(CLUSTER_LOW, insight_override=override)
    for trend in (DECLINING, IMPROVING, STABLE):
        result = evaluate_customer_insight(customer, trend)
        assert result.payload == override
        assert result.source == rules.SOURCE_OVERRIDE
        assert result.rule_id == rules.RULE_OVERRIDE


def test_declining_trend_takes_precedence_over_cluster():
    result = evaluate_customer_insight(make_customer(CLUSTER_HIGH), DECLINING)
    assert result.rule_id == rules.RULE_DECLINING
    assert result.payload.churn_decision == rules.CHURN_HIGH_RISK
    assert result.payload.offer == rules.OFFER_REACTIVATION_COUPON
    assert result.payload.recommendations == rules.RECOMMEND_DECLINING


def test_low_cluster_gets_high_churn_risk():
    result = evaluate_customer_insight(make_customer(CLUSTER_LOW), STABLE)
    assert result.rule_id == rules.RULE_LOW_VALUE
    assert result.payload.churn_decision == rules.CHURN_HIGH_RISK
    assert result.payload.retention_strategy == rules.RETAIN_SIMPLIFY


def test_mixed_cluster_gets_moderate_risk():
    result = evaluate_customer_insight(make_customer(CLUSTER_MIXED), IMPROVING)
    assert result.rule_id == rules.RULE_MIXED_VALUE
    assert result.payload.churn_decision == rules.CHURN_MODERATE_RISK
    assert result.payload.offer == rules.OFFER_COMBO_SEASONAL


def test_high_cluster_gets_premium_retention():
    result = evaluate_customer_insight(make_customer(CLUSTER_HIGH), IMPROVING)
    assert result.rule_id == rules.RULE_HIGH_VALUE
    assert result.payload.churn_decision == rules.CHURN_LOW_RISK
    assert result.payload.retention_strategy == rules.RETAIN_PREMIUM


def test_unclassified_cluster_falls_through_to_default():
    result = evaluate_customer_insight(make_customer(CLUSTER_UNCLASSIFIED), STABLE)
    assert result.rule_id == rules.RULE_DEFAULT
    assert result.payload.churn_decision == rules.CHURN_NEUTRAL
    assert result.source == rules.SOURCE_HEURISTIC


def test_match_rule_is_total_for_custom_rule_sets():
    """Test that an empty rule set still resolves to the default rule."""
    assert match_rule(make_customer(CLUSTER_HIGH), STABLE, insight_rules=()) is INSIGHT_RULES[-1]


def test_observation_reports_formatted_drop_for_declining_trend():
    payload = derive_insight(make_customer(CLUSTER_MIXED), DECLINING)
    assert payload.observation == "Revenue dropped by $340,000 in recent quarters; monitor closely."


def test_observation_reports_improvement_with_configured_currency():
    payload = derive_insight(make_customer(CLUSTER_HIGH), IMPROVING, CustomerInsightConfig(currency_symbol="€"))
    assert payload.observation == "Revenue improved by €1,250; growth momentum is positive."


def test_observation_for_stable_trend():
    assert derive_insight(make_customer(CLUSTER_HIGH), STABLE).observation == rules.OBSERVATION_STABLE


def test_format_amount_uses_absolute_value_and_thousands_separator():
    assert format_amount(-1234567.4, "$") == "$1,234,567"


def test_derive_insight_is_deterministic():
    """Test that identical inputs produce value-equal payloads."""
    customer = make_customer(CLUSTER_LOW)
    assert derive_insight(customer, DECLINING) == derive_insight(customer, DECLINING)


def test_evidence_records_both_rule_ids():
    result = evaluate_customer_insight(make_customer(CLUSTER_HIGH), DECLINING)
    assert result.evidence.evidence_id == "evidence-C-1-insight"
    assert result.evidence.rule_ids == [rules.RULE_DECLINING, trend_rules.RULE_ID_REVENUE_FALLING]
