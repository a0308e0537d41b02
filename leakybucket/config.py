"""
Configuration management for the leaky bucket library.
"""

from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings read from LEAKYBUCKET_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEAKYBUCKET_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Storage
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_socket_timeout: float = Field(default=5.0, gt=0)

    # Bucket defaults for hosts that build buckets from settings
    default_capacity: float = Field(default=10, gt=0)
    default_leak: float = Field(default=0.33, gt=0)

    def bucket_defaults(self) -> Dict[str, float]:
        """Bucket overrides built from the configured defaults."""
        return {"capacity": self.default_capacity, "leak": self.default_leak}


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
