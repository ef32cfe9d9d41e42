"""Configuration loading for Wren.

Reads environment variables into a typed settings object using Pydantic v2.
A local .env file is honoured through python-dotenv.

Env variables:
- WN_LOG_LEVEL (default: INFO)
- WN_WAV_SUBTYPE (default: PCM_16)
- WN_RENDER_WORKERS (default: 1)
- WN_ENV (default: development)
"""

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    WN_LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    WN_WAV_SUBTYPE: str = Field(default="PCM_16", description="Default WAV subtype for the codec adapter")
    WN_RENDER_WORKERS: int = Field(default=1, ge=1, description="Default worker threads for batch rendering")
    WN_ENV: str = Field(default="development", description="Environment name")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment and memoize.

    Raises:
        ValueError: if an environment variable holds an invalid value.
    """

    load_dotenv()

    env = {
        "WN_LOG_LEVEL": os.getenv("WN_LOG_LEVEL", "INFO"),
        "WN_WAV_SUBTYPE": os.getenv("WN_WAV_SUBTYPE", "PCM_16"),
        "WN_RENDER_WORKERS": os.getenv("WN_RENDER_WORKERS", "1"),
        "WN_ENV": os.getenv("WN_ENV", "development"),
    }

    return Settings.model_validate(env)


__all__ = ["Settings", "get_settings"]
