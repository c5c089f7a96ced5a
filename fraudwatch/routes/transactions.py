"""Transaction intake, listing and lookup endpoints."""

import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Request

from fraudwatch.intake import TransactionIntakeService
from fraudwatch.models import (
    Pagination,
    RiskLevel,
    StoredTransaction,
    TransactionPage,
    TransactionStats,
)
from fraudwatch.storage.memory import MemoryStore

router = APIRouter(prefix="/api")


def _get_intake(request: Request) -> TransactionIntakeService:
    """Retrieve the intake service from application state."""
    return request.app.state.intake


def _get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


@router.post("/transactions", response_model=StoredTransaction, status_code=201)
async def create_transaction(
    request: Request,
    payload: Dict[str, Any] = Body(...),
) -> StoredTransaction:
    """Score a new transaction and record it with its alerts.

    Validation happens in the intake service so that field errors come
    back as 400 with per-field details.
    """
    return _get_intake(request).submit_raw(payload)


@router.get("/transactions", response_model=TransactionPage)
async def list_transactions(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    risk_level: Optional[RiskLevel] = Query(default=None, alias="riskLevel"),
) -> TransactionPage:
    """List stored transactions newest first, optionally by risk level."""
    items, total = _get_store(request).list_transactions(
        page=page, limit=limit, risk_level=risk_level
    )
    return TransactionPage(
        transactions=items,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


@router.get("/transactions/stats", response_model=TransactionStats)
async def transaction_stats(request: Request) -> TransactionStats:
    """Totals, high-risk count, blocked count and average score."""
    return _get_store(request).stats()


@router.get("/transactions/{transaction_id}", response_model=StoredTransaction)
async def get_transaction(transaction_id: str, request: Request) -> StoredTransaction:
    tx = _get_store(request).get(transaction_id)
    if tx is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return tx
