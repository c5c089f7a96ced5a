"""In-memory storage for scored transactions and their alerts.

Transactions are kept in insertion order and indexed by id; alerts are
indexed by id back to their owning transaction. A single lock guards every
read and write, since this store is the only mutable state shared between
concurrent requests. All data lives in memory and is lost on restart.
"""

import threading
from typing import Dict, List, Optional, Tuple

from fraudwatch.errors import PersistenceError
from fraudwatch.models import (
    AlertStatus,
    RiskLevel,
    StoredAlert,
    StoredTransaction,
    TransactionStats,
)


class MemoryStore:
    """Thread-safe in-memory store for transactions and alerts."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # Transactions by id; dicts keep insertion order
        self._transactions: Dict[str, StoredTransaction] = {}
        # Alert id -> owning transaction id
        self._alert_index: Dict[str, str] = {}

    def add(self, tx: StoredTransaction) -> StoredTransaction:
        """Store a transaction together with its alerts as one unit."""
        with self._lock:
            if tx.id in self._transactions:
                raise PersistenceError(f"Transaction '{tx.id}' already exists")
            for alert in tx.alerts:
                if alert.id in self._alert_index:
                    raise PersistenceError(f"Alert '{alert.id}' already exists")

            self._transactions[tx.id] = tx
            for alert in tx.alerts:
                self._alert_index[alert.id] = tx.id
        return tx

    def get(self, tx_id: str) -> Optional[StoredTransaction]:
        with self._lock:
            return self._transactions.get(tx_id)

    def list_transactions(
        self,
        page: int = 1,
        limit: int = 10,
        risk_level: Optional[RiskLevel] = None,
    ) -> Tuple[List[StoredTransaction], int]:
        """Return one page of transactions (newest first) and the filtered total."""
        with self._lock:
            txns = list(self._transactions.values())

        if risk_level is not None:
            txns = [t for t in txns if t.risk_level == risk_level]

        # Stable sort keeps insertion order between equal timestamps
        txns = sorted(reversed(txns), key=lambda t: t.created_at, reverse=True)
        start = (page - 1) * limit
        return txns[start:start + limit], len(txns)

    def list_alerts(
        self,
        status: Optional[AlertStatus] = None,
        severity: Optional[str] = None,
    ) -> List[StoredAlert]:
        """Return all alerts, optionally filtered by status and/or severity."""
        with self._lock:
            alerts = [a for t in self._transactions.values() for a in t.alerts]

        results: List[StoredAlert] = []
        for alert in alerts:
            if status is not None and alert.status != status:
                continue
            if severity is not None and alert.severity != severity:
                continue
            results.append(alert)
        return results

    def update_alert_status(
        self,
        alert_id: str,
        status: AlertStatus,
    ) -> Optional[StoredAlert]:
        """Change an alert's review disposition; None if the alert is unknown."""
        with self._lock:
            tx_id = self._alert_index.get(alert_id)
            if tx_id is None:
                return None

            tx = self._transactions[tx_id]
            updated: Optional[StoredAlert] = None
            alerts: List[StoredAlert] = []
            for alert in tx.alerts:
                if alert.id == alert_id:
                    alert = alert.model_copy(update={"status": status})
                    updated = alert
                alerts.append(alert)

            self._transactions[tx_id] = tx.model_copy(update={"alerts": alerts})
            return updated

    def stats(self) -> TransactionStats:
        """Headline figures over every stored transaction."""
        with self._lock:
            txns = list(self._transactions.values())

        total = len(txns)
        avg = sum(t.fraud_score for t in txns) / total if total else 0.0
        return TransactionStats(
            total=total,
            high_risk=sum(1 for t in txns if t.risk_level in ("HIGH", "CRITICAL")),
            blocked=sum(1 for t in txns if t.is_blocked),
            avg_fraud_score=round(avg, 4),
        )
