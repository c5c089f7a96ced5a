"""FraudWatch Transaction Risk API.

Scores incoming payment transactions for fraud risk. Each transaction gets
a score in [0, 1], a risk tier and a list of alerts, and is auto-blocked
when the score is above the configured block threshold.

Run with:
    python3 -m uvicorn fraudwatch.main:app --host 0.0.0.0 --port 8000
"""

import json
import logging
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fraudwatch.config import settings
from fraudwatch.errors import (
    ConfigurationError,
    PersistenceError,
    TransactionValidationError,
)
from fraudwatch.intake import TransactionIntakeService
from fraudwatch.models import RulesConfig
from fraudwatch.routes import alerts, rules, transactions
from fraudwatch.scoring.engine import build_engine
from fraudwatch.scoring.signals import FixedSignal, system_clock
from fraudwatch.storage.memory import MemoryStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description=(
        "Rule-based fraud risk scoring for payment transactions. "
        "Flags high and critical amounts, unusual hours and strong "
        "model signals, and auto-blocks the riskiest transactions."
    ),
    version="1.0.0",
)


def load_rules_config() -> RulesConfig:
    """Load tunable rule thresholds from disk, or fall back to defaults."""
    path = settings.rules_config_path
    if path.exists():
        with open(path, "r") as f:
            logger.info("Loading rules config from %s", path)
            return RulesConfig(**json.load(f))
    return RulesConfig()


@app.on_event("startup")
async def startup() -> None:
    """Load configuration and wire the engine, store and intake service."""
    config = load_rules_config()
    clock = system_clock
    signal_provider = FixedSignal(settings.exploratory_signal)

    # ConfigurationError here is fatal: the service must not start without rules
    engine = build_engine(config, clock, signal_provider)
    store = MemoryStore()
    intake = TransactionIntakeService(
        engine=engine,
        store=store,
        block_threshold=config.block_threshold,
    )

    # Attach to app state for dependency injection in routes
    app.state.config = config
    app.state.clock = clock
    app.state.signal_provider = signal_provider
    app.state.engine = engine
    app.state.store = store
    app.state.intake = intake


def error_details(errors) -> list:
    """Field errors without the rejected input, which may not be JSON-safe (NaN, Infinity)."""
    return jsonable_encoder([{k: v for k, v in e.items() if k != "input"} for e in errors])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": error_details(exc.errors())},
    )


@app.exception_handler(TransactionValidationError)
async def transaction_validation_handler(
    request: Request, exc: TransactionValidationError
) -> JSONResponse:
    logger.warning("%s", exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": error_details(exc.errors)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.warning("Rejected rule configuration: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid rule configuration", "message": str(exc)},
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    logger.error("Persistence failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to create transaction"},
    )


# Mount all API routers
app.include_router(transactions.router)
app.include_router(alerts.router)
app.include_router(rules.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
