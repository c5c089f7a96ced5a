"""Application settings read from the environment (or a .env file)."""

from pathlib import Path

from pydantic_settings import BaseSettings

# Resolve the data/ directory relative to this file so the server works
# regardless of which directory uvicorn is launched from.
DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    app_name: str = "FraudWatch Transaction Risk API"
    log_level: str = "INFO"

    # Optional JSON file with RulesConfig overrides
    rules_config_path: Path = DATA_DIR / "rules_config.json"

    # Value returned by the exploratory signal provider until a real
    # model-backed provider is wired in
    exploratory_signal: float = 0.0

    model_config = {"env_prefix": "FRAUDWATCH_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
