# utils/config.py
import os
import secrets
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from utils.errors import ConfigurationError

# load .env so OPENAI_API_KEY is available
load_dotenv()

DEFAULT_MODEL = "gpt-4.1-mini"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=2500, gt=0)
    timeout: float = Field(default=60.0, gt=0)
    mock: bool = False
    secret_key: str = Field(default_factory=lambda: secrets.token_hex(16))
    log_level: str = "INFO"


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def load_settings() -> Settings:
    """
    Read settings from the environment (and .env).
    A missing OPENAI_API_KEY is fatal unless demo mode is switched on.
    """
    mock = (os.getenv("RISK_BRIEF_MOCK") or "").strip().lower() in _TRUTHY
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip() or None

    if not api_key and not mock:
        raise ConfigurationError(
            "API key not configured. Please add OPENAI_API_KEY to your .env file."
        )

    values = {
        "api_key": api_key,
        "base_url": os.getenv("OPENAI_BASE_URL") or None,
        "model": os.getenv("RISK_BRIEF_MODEL") or DEFAULT_MODEL,
        "max_tokens": _env_number("RISK_BRIEF_MAX_TOKENS", int, 2500),
        "timeout": _env_number("RISK_BRIEF_TIMEOUT", float, 60.0),
        "mock": mock,
        "log_level": (os.getenv("RISK_BRIEF_LOG_LEVEL") or "INFO").upper(),
    }
    secret = os.getenv("FLASK_SECRET_KEY")
    if secret:
        values["secret_key"] = secret

    try:
        return Settings(**values)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
