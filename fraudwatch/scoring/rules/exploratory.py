"""Exploratory model signal.

Placeholder for a learned-model score. The raw value comes from an
injected signal provider and is bounded to [0, cap) before it is added to
the score. Only a strong contribution (above ``alert_threshold``) raises
an alert; weaker ones still count towards the score silently.
"""

import logging
import math

from fraudwatch.models import Alert, RuleResult

logger = logging.getLogger(__name__)


def bound_signal(value: float, cap: float = 0.3) -> float:
    """Clamp a raw provider value into [0, cap); NaN and infinities count as 0."""
    if not math.isfinite(value) or value < 0:
        return 0.0
    if value >= cap:
        # Largest float strictly below cap, never negative
        return max(math.nextafter(cap, 0.0), 0.0)
    return value


def check_exploratory_signal(
    value: float,
    cap: float = 0.3,
    alert_threshold: float = 0.2,
) -> RuleResult:
    """Fold the provider's value into the score, alerting above the threshold."""
    contribution = bound_signal(value, cap)
    if contribution != value:
        logger.warning(
            "Exploratory signal %.4f outside [0, %.2f); clamped to %.4f",
            value, cap, contribution,
        )

    alert = None
    if contribution > alert_threshold:
        alert = Alert(
            type="ML_PREDICTION",
            severity="MEDIUM",
            title="ML Model Alert",
            description=(
                f"Model signal {contribution:.2f} exceeds alert "
                f"threshold of {alert_threshold:.2f}"
            ),
        )

    return RuleResult(score_delta=contribution, alert=alert)
