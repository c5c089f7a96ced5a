"""The unit of fraud signal evaluation."""

from dataclasses import dataclass
from typing import Callable

from fraudwatch.models import RuleResult, TransactionRequest


@dataclass(frozen=True)
class Rule:
    """A named, pure check over a transaction.

    ``check`` must only observe the transaction: no mutation, no I/O.
    ``max_delta`` is the most the rule can ever add to the score and must
    be non-negative; the engine enforces this when it is constructed.
    """

    name: str
    check: Callable[[TransactionRequest], RuleResult]
    max_delta: float

    def __call__(self, transaction: TransactionRequest) -> RuleResult:
        return self.check(transaction)
