from __future__ import annotations

# Insight sources
SOURCE_OVERRIDE = "OVERRIDE"
SOURCE_HEURISTIC = "HEURISTIC"

# Rule IDs, in evaluation order
RULE_OVERRIDE = "customer_insight.override"
RULE_DECLINING = "customer_insight.declining"
RULE_LOW_VALUE = "customer_insight.low_value"
RULE_MIXED_VALUE = "customer_insight.mixed_value"
RULE_HIGH_VALUE = "customer_insight.high_value"
RULE_DEFAULT = "customer_insight.default"

# Churn narratives
CHURN_HIGH_RISK = "Revenue decline observed; potential churn risk detected."
CHURN_MODERATE_RISK = "Mixed revenue patterns; monitor closely for churn indicators."
CHURN_LOW_RISK = "High-value customer; strong retention likelihood."
CHURN_NEUTRAL = "Stable recent performance with no clear churn signals."

# Retention strategies
RETAIN_REACTIVATE = "Deploy reactivation offers and personalized follow-ups to recover momentum."
RETAIN_SIMPLIFY = "Simplify reordering experience; offer low-commitment bundles."
RETAIN_MONITOR = "Track order cadence each quarter and step in early when volumes soften."
RETAIN_PREMIUM = "Provide premium support and early access privileges."
RETAIN_STANDARD = "Maintain engagement and reinforce product value."

# Offers
OFFER_REACTIVATION_COUPON = "Reactivation coupons with a limited-time incentive."
OFFER_REACTIVATION_BUNDLE = "Reactivation coupons and bundled starter packs."
OFFER_COMBO_SEASONAL = "Introduce combo deals and seasonal offers to stabilize demand."
OFFER_LOYALTY_EARLY_ACCESS = "Loyalty credits and early access to new products."
OFFER_STANDARD_LOYALTY = "Standard loyalty benefits and occasional discounts."

# Recommendations
RECOMMEND_DECLINING = (
    "Launch a targeted reactivation campaign with limited-time incentives.",
    "Follow-up via account managers to rebuild engagement.",
)
RECOMMEND_LOW_VALUE = (
    "Simplify reorder process through subscription or quick checkout.",
    "Send small-value coupons to trigger consistent reorders.",
)
RECOMMEND_MIXED_VALUE = (
    "Deploy quarterly promotions and measure elasticity through A/B testing.",
    "Encourage category diversification via combo deals.",
)
RECOMMEND_HIGH_VALUE = (
    "Offer exclusive previews of upcoming products.",
    "Provide loyalty credits and personalized account support.",
)
RECOMMEND_DEFAULT = (
    "Keep a regular check-in cadence and share relevant product updates.",
)

# Observation templates
OBSERVATION_DECLINING = "Revenue dropped by {amount} in recent quarters; monitor closely."
OBSERVATION_IMPROVING = "Revenue improved by {amount}; growth momentum is positive."
OBSERVATION_STABLE = "Revenue trend stable with minor fluctuations."
