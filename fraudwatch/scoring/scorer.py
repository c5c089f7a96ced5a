"""Score aggregation and risk tier mapping.

The result is DETERMINISTIC: same rule results = same score and tier.
  - Deltas are summed (order does not matter for the score)
  - Alerts are kept in rule evaluation order
  - The total is capped to [0, 1]
  - The tier comes from the first threshold the score strictly exceeds:
    - score > 0.7 -> CRITICAL
    - score > 0.5 -> HIGH
    - score > 0.3 -> MEDIUM
    - otherwise   -> LOW
"""

from fraudwatch.models import Alert, RiskLevel, RuleResult

# Checked top-down; strict ">" so a score exactly on a threshold gets the lower tier
RISK_TIERS: tuple[tuple[float, RiskLevel], ...] = (
    (0.7, "CRITICAL"),
    (0.5, "HIGH"),
    (0.3, "MEDIUM"),
)

# Float noise from summing decimal deltas (0.1 + 0.2 = 0.30000000000000004)
# must not count as exceeding a threshold
SCORE_TOLERANCE = 1e-9


def exceeds(score: float, threshold: float) -> bool:
    """Strict score > threshold, ignoring float summation noise."""
    return score > threshold + SCORE_TOLERANCE


def risk_level_for(score: float) -> RiskLevel:
    """Map a clamped score to its risk tier."""
    for threshold, level in RISK_TIERS:
        if exceeds(score, threshold):
            return level
    return "LOW"


def aggregate_results(
    rule_results: list[RuleResult],
) -> tuple[float, RiskLevel, list[Alert]]:
    """Combine results from all rule checks into a score, tier and alerts.

    Args:
        rule_results: RuleResult from each rule, in evaluation order.

    Returns:
        Tuple of (score, risk_level, alerts).
    """
    total_score = 0.0
    alerts: list[Alert] = []

    for result in rule_results:
        total_score += result.score_delta
        if result.alert is not None:
            alerts.append(result.alert)

    score = min(max(total_score, 0.0), 1.0)

    return score, risk_level_for(score), alerts
