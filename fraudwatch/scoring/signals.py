"""Injectable inputs for rules that would otherwise read ambient state.

The unusual-hour rule needs "now" and the exploratory rule needs a model
score. Both are passed in as plain callables so that tests can pin them and
production can swap in a real clock or a learned model.
"""

from datetime import datetime, timezone
from typing import Callable

from fraudwatch.models import TransactionRequest

Clock = Callable[[], datetime]
SignalProvider = Callable[[TransactionRequest], float]


def system_clock() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


class FixedClock:
    """Clock that always reports the same instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FixedSignal:
    """Signal provider returning the same value for every transaction."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def __call__(self, transaction: TransactionRequest) -> float:
        return self.value
