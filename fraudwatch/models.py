"""Pydantic models for the fraud scoring API."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RiskLevel = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
Severity = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
AlertStatus = Literal["OPEN", "ACKNOWLEDGED", "RESOLVED", "FALSE_POSITIVE"]


class TransactionRequest(BaseModel):
    """Incoming payment transaction to be scored."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    amount: float = Field(ge=0, allow_inf_nan=False)
    currency: str = "USD"
    merchant_id: str = Field(min_length=1)
    merchant_name: Optional[str] = None
    customer_id: str = Field(min_length=1)
    customer_email: Optional[EmailStr] = None
    location: Optional[str] = None
    ip_address: Optional[str] = None
    device_id: Optional[str] = None


class Alert(BaseModel):
    """A single triggered fraud signal."""
    model_config = ConfigDict(frozen=True)

    type: str  # HIGH_AMOUNT, SUSPICIOUS_PATTERN, ML_PREDICTION, ...
    severity: Severity
    title: str
    description: str


class RuleResult(BaseModel):
    """Output of an individual fraud rule check."""
    model_config = ConfigDict(frozen=True)

    score_delta: float = Field(default=0.0, ge=0)
    alert: Optional[Alert] = None


class ScoreResult(BaseModel):
    """Result of scoring a single transaction."""
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0, le=1)
    risk_level: RiskLevel
    alerts: list[Alert]


class StoredAlert(Alert):
    """An alert persisted alongside its transaction."""
    model_config = ConfigDict(frozen=False)

    id: str
    transaction_id: str
    status: AlertStatus = "OPEN"
    created_at: datetime


class StoredTransaction(BaseModel):
    """A scored transaction as persisted by the intake service."""
    id: str
    amount: float
    currency: str
    merchant_id: str
    merchant_name: Optional[str] = None
    customer_id: str
    customer_email: Optional[str] = None
    location: Optional[str] = None
    ip_address: Optional[str] = None
    device_id: Optional[str] = None
    fraud_score: float
    risk_level: RiskLevel
    is_blocked: bool
    created_at: datetime
    alerts: list[StoredAlert] = []


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionPage(BaseModel):
    """One page of stored transactions, newest first."""
    transactions: list[StoredTransaction]
    pagination: Pagination


class TransactionStats(BaseModel):
    """Aggregate figures shown on the review dashboard."""
    total: int
    high_risk: int
    blocked: int
    avg_fraud_score: float


class AlertStatusUpdate(BaseModel):
    status: AlertStatus


class RulesConfig(BaseModel):
    """Tunable thresholds and toggles for all scoring rules."""
    model_config = ConfigDict(allow_inf_nan=False)

    high_amount_enabled: bool = True
    high_amount_threshold: float = Field(default=10_000, ge=0)
    high_amount_delta: float = Field(default=0.3, ge=0, le=1)

    critical_amount_enabled: bool = True
    critical_amount_threshold: float = Field(default=50_000, ge=0)
    critical_amount_delta: float = Field(default=0.4, ge=0, le=1)

    unusual_hour_enabled: bool = True
    unusual_hour_start: int = Field(default=2, ge=0, le=23)
    unusual_hour_end: int = Field(default=6, ge=0, le=24)  # exclusive
    unusual_hour_delta: float = Field(default=0.2, ge=0, le=1)

    exploratory_signal_enabled: bool = True
    exploratory_signal_cap: float = Field(default=0.3, gt=0, le=1)
    exploratory_alert_threshold: float = Field(default=0.2, ge=0, le=1)

    block_threshold: float = Field(default=0.8, ge=0, le=1)
