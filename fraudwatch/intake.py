"""Transaction intake: validate, score, decide blocking, persist.

This is the only place that knows the auto-block policy. The engine just
reports a score; a transaction is blocked when that score is strictly
above ``block_threshold`` (0.8 by default).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Union

from pydantic import ValidationError

from fraudwatch.errors import PersistenceError, TransactionValidationError
from fraudwatch.models import StoredAlert, StoredTransaction, TransactionRequest
from fraudwatch.scoring.engine import ScoringEngine
from fraudwatch.scoring.scorer import exceeds
from fraudwatch.storage.memory import MemoryStore

logger = logging.getLogger(__name__)


def parse_transaction(payload: Mapping[str, Any]) -> TransactionRequest:
    """Validate raw input into a TransactionRequest.

    Raises TransactionValidationError with one entry per offending field.
    """
    try:
        return TransactionRequest.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        raise TransactionValidationError(errors) from exc


class TransactionIntakeService:
    """Front door for new transactions."""

    def __init__(
        self,
        engine: ScoringEngine,
        store: MemoryStore,
        block_threshold: float = 0.8,
    ) -> None:
        self.engine = engine
        self.store = store
        self.block_threshold = block_threshold

    def replace_engine(self, engine: ScoringEngine, block_threshold: float) -> None:
        """Swap in a rebuilt engine after a rule configuration change."""
        self.engine = engine
        self.block_threshold = block_threshold

    def submit_raw(
        self, payload: Union[Mapping[str, Any], TransactionRequest]
    ) -> StoredTransaction:
        """Validate raw input, then score and persist it."""
        if isinstance(payload, TransactionRequest):
            return self.submit(payload)
        return self.submit(parse_transaction(payload))

    def submit(self, request: TransactionRequest) -> StoredTransaction:
        """Score a validated transaction and persist it with its alerts."""
        result = self.engine.evaluate(request)
        is_blocked = exceeds(result.score, self.block_threshold)

        transaction_id = str(uuid.uuid4())
        created_at = datetime.now(timezone.utc)

        stored_alerts = [
            StoredAlert(
                id=str(uuid.uuid4()),
                transaction_id=transaction_id,
                created_at=created_at,
                **alert.model_dump(),
            )
            for alert in result.alerts
        ]

        stored_tx = StoredTransaction(
            id=transaction_id,
            **request.model_dump(),
            fraud_score=result.score,
            risk_level=result.risk_level,
            is_blocked=is_blocked,
            created_at=created_at,
            alerts=stored_alerts,
        )

        try:
            stored_tx = self.store.add(stored_tx)
        except PersistenceError:
            logger.error("Failed to persist transaction %s", transaction_id)
            raise

        logger.info(
            "Transaction %s scored %.4f (%s), blocked=%s, alerts=%d",
            transaction_id,
            result.score,
            result.risk_level,
            is_blocked,
            len(stored_alerts),
        )
        if is_blocked:
            logger.warning(
                "Transaction %s auto-blocked for customer %s (score %.4f > %.2f)",
                transaction_id,
                request.customer_id,
                result.score,
                self.block_threshold,
            )

        return stored_tx
