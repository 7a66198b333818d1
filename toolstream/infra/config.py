"""Configuration management for the tool gateway."""

import os
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# This ensures dotenv works regardless of where the script is run from
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# override=False means existing environment variables take precedence
load_dotenv(dotenv_path=env_file, override=False)

DEFAULT_GATEWAY_URL = "https://ai-gateway.vercel.sh/v1"


def _optional_str(name: str) -> Optional[str]:
    """Read an env var, treating blank values as unset."""
    value = os.getenv(name, "").strip()
    return value or None


def _optional_seconds(name: str) -> Optional[float]:
    """Read a positive number of seconds; unset, blank or non-positive means unbounded."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}")
    return seconds if seconds > 0 else None


class Config:
    """Application configuration read from the environment."""
    # AI gateway (OpenAI-compatible endpoint)
    AI_GATEWAY_API_KEY: Optional[str] = _optional_str("AI_GATEWAY_API_KEY")
    AI_GATEWAY_URL: str = _optional_str("AI_GATEWAY_URL") or DEFAULT_GATEWAY_URL
    AI_MODEL_ID: Optional[str] = _optional_str("AI_MODEL_ID")

    # Upstream stream bounds (unset = wait until the client gives up)
    TOOL_FIRST_CHUNK_TIMEOUT: Optional[float] = _optional_seconds("TOOL_FIRST_CHUNK_TIMEOUT")
    TOOL_STREAM_IDLE_TIMEOUT: Optional[float] = _optional_seconds("TOOL_STREAM_IDLE_TIMEOUT")

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")


config = Config()
