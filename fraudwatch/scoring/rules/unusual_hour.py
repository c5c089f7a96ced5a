"""Unusual hour rule.

Transactions evaluated in the small hours (02:00 up to, not including,
06:00) are more likely to come from a compromised account while the
cardholder is asleep. The hour comes from the evaluation clock, not from
a field on the transaction.
"""

from datetime import datetime

from fraudwatch.models import Alert, RuleResult


def check_unusual_hour(
    now: datetime,
    start_hour: int = 2,
    end_hour: int = 6,
    delta: float = 0.2,
) -> RuleResult:
    """Check if ``now`` falls inside [start_hour, end_hour)."""
    if start_hour <= now.hour < end_hour:
        return RuleResult(
            score_delta=delta,
            alert=Alert(
                type="SUSPICIOUS_PATTERN",
                severity="MEDIUM",
                title="Unusual Time Transaction",
                description=(
                    f"Transaction occurred at {now:%H:%M}, during unusual "
                    f"hours ({start_hour:02d}:00-{end_hour:02d}:00)"
                ),
            ),
        )

    return RuleResult()
