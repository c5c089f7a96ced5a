"""Shared fixtures for the test suite."""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from fraudwatch.intake import TransactionIntakeService
from fraudwatch.main import app
from fraudwatch.models import RulesConfig, TransactionRequest
from fraudwatch.scoring.engine import ScoringEngine, build_engine
from fraudwatch.scoring.signals import FixedClock, FixedSignal
from fraudwatch.storage.memory import MemoryStore


def at_hour(hour: int, minute: int = 0) -> FixedClock:
    return FixedClock(datetime(2026, 2, 22, hour, minute, tzinfo=timezone.utc))


NOON = at_hour(12)


def make_engine(hour: int = 12, signal: float = 0.0, config=None) -> ScoringEngine:
    if config is None:
        config = RulesConfig()
    return build_engine(config, at_hour(hour), FixedSignal(signal))


@pytest.fixture
def config():
    return RulesConfig()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(config):
    return build_engine(config, NOON, FixedSignal(0.0))


@pytest.fixture
def intake(engine, store):
    return TransactionIntakeService(engine=engine, store=store)


@pytest.fixture
def client():
    with TestClient(app) as c:
        # Pin the clock so results do not depend on when the suite runs
        app.state.clock = NOON
        app.state.signal_provider = FixedSignal(0.0)
        app.state.intake.replace_engine(
            build_engine(app.state.config, NOON, FixedSignal(0.0)),
            app.state.config.block_threshold,
        )
        yield c


def make_request(
    amount=150.0,
    currency="USD",
    merchant_id="merch-001",
    customer_id="cust-001",
    **extra,
) -> TransactionRequest:
    return TransactionRequest(
        amount=amount,
        currency=currency,
        merchant_id=merchant_id,
        customer_id=customer_id,
        **extra,
    )


def make_payload(**overrides) -> dict:
    payload = {
        "amount": 150.0,
        "currency": "USD",
        "merchant_id": "merch-001",
        "merchant_name": "Corner Books",
        "customer_id": "cust-001",
        "customer_email": "jane.doe@shopmail.io",
        "location": "Austin, TX",
        "ip_address": "203.0.113.7",
        "device_id": "dev-42",
    }
    payload.update(overrides)
    return payload
