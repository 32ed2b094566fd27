"""Centralized configuration using Pydantic Settings

All environment variables are managed here (prefix ROWGUIDE_).
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ResetBehavior = Literal["wrap", "clamp"]


class Settings(BaseSettings):
    """Navigation settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="ROWGUIDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Merge rows 1 and 2 into one zipped row at load time
    combine12: bool = False

    # Steps moved by one multi-advance / multi-retreat
    multiadvance: int = Field(default=3, ge=1)

    # What happens when navigation runs off either end of the pattern
    reset_behavior: ResetBehavior = "wrap"

    # Verify current step against position after every move
    sanity_checks: bool = False

    # Position publisher (ZeroMQ PUB)
    position_port: int = Field(default=5557, ge=1024, le=65535)

    # In-process sink queue size (drop-oldest when full)
    position_queue_size: int = Field(default=64, ge=1)


# Global settings instance
settings = Settings()
