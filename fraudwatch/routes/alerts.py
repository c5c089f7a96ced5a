"""Alert review endpoints."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request

from fraudwatch.models import AlertStatus, AlertStatusUpdate, Severity, StoredAlert
from fraudwatch.storage.memory import MemoryStore

router = APIRouter(prefix="/api")


def _get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


@router.get("/alerts", response_model=List[StoredAlert])
async def list_alerts(
    request: Request,
    status: Optional[AlertStatus] = Query(default=None),
    severity: Optional[Severity] = Query(default=None),
) -> List[StoredAlert]:
    """Retrieve alerts with optional filters.

    Filters:
      - status: review disposition (OPEN, ACKNOWLEDGED, ...)
      - severity: LOW, MEDIUM, HIGH or CRITICAL
    """
    return _get_store(request).list_alerts(status=status, severity=severity)


@router.patch("/alerts/{alert_id}", response_model=StoredAlert)
async def update_alert(
    alert_id: str,
    update: AlertStatusUpdate,
    request: Request,
) -> StoredAlert:
    """Record an analyst's disposition for an alert."""
    alert = _get_store(request).update_alert_status(alert_id, update.status)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert
