"""Exception classes for the fraud scoring service.

Scoring itself has no failure mode for a validated transaction, so the
taxonomy only covers the boundaries: bad input, bad rule configuration,
and storage that could not record a decision.
"""

from typing import Any, Dict, List, Optional


class FraudWatchError(Exception):
    """Base exception for all FraudWatch errors."""


class TransactionValidationError(FraudWatchError):
    """Raw transaction input failed validation.

    ``errors`` holds one entry per offending field, in the shape pydantic
    reports them (``loc``, ``msg``, ``type``).
    """

    def __init__(self, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        self.errors = errors or []
        fields = ", ".join(
            ".".join(str(part) for part in e.get("loc", ())) for e in self.errors
        )
        super().__init__(f"Transaction validation failed: {fields or 'unknown'}")


class ConfigurationError(FraudWatchError):
    """The rule set handed to the scoring engine is unusable."""


class PersistenceError(FraudWatchError):
    """The storage collaborator could not record a scored transaction."""
