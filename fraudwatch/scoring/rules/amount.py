"""Transaction amount rules.

Flags transactions above two dollar thresholds. The critical rule is
independent of the high rule, so a very large transfer trips both and
the deltas stack (0.3 + 0.4).
"""

from fraudwatch.models import Alert, RuleResult


def check_high_amount(
    amount: float,
    threshold: float = 10_000,
    delta: float = 0.3,
) -> RuleResult:
    """Check if the amount exceeds the high-amount threshold.

    Returns score_delta=0.3 and a HIGH alert when amount > threshold.
    """
    if amount > threshold:
        return RuleResult(
            score_delta=delta,
            alert=Alert(
                type="HIGH_AMOUNT",
                severity="HIGH",
                title="High Amount Transaction",
                description=(
                    f"Transaction amount ${amount:.2f} exceeds "
                    f"threshold of ${threshold:.2f}"
                ),
            ),
        )

    return RuleResult()


def check_critical_amount(
    amount: float,
    threshold: float = 50_000,
    delta: float = 0.4,
) -> RuleResult:
    """Check if the amount exceeds the critical-amount threshold."""
    if amount > threshold:
        return RuleResult(
            score_delta=delta,
            alert=Alert(
                type="HIGH_AMOUNT",
                severity="CRITICAL",
                title="Critical Amount Transaction",
                description=(
                    f"Transaction amount ${amount:.2f} is critically high "
                    f"(threshold ${threshold:.2f})"
                ),
            ),
        )

    return RuleResult()
