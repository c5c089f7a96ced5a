"""Rules configuration endpoints for reading and updating thresholds."""

from fastapi import APIRouter, Request

from fraudwatch.models import RulesConfig
from fraudwatch.scoring.engine import build_engine

router = APIRouter(prefix="/api")


@router.get("/rules", response_model=RulesConfig)
async def get_rules(request: Request) -> RulesConfig:
    """Return the current scoring rules configuration."""
    return request.app.state.config


@router.put("/rules", response_model=RulesConfig)
async def update_rules(
    new_config: RulesConfig,
    request: Request,
) -> RulesConfig:
    """Replace the scoring rules configuration.

    A new engine is built from the config and handed to the intake service,
    so subsequent transactions use the new rules immediately. If the config
    yields an unusable rule set, ConfigurationError propagates and nothing
    is changed.
    """
    state = request.app.state
    engine = build_engine(new_config, state.clock, state.signal_provider)

    state.config = new_config
    state.engine = engine
    state.intake.replace_engine(engine, new_config.block_threshold)
    return new_config
