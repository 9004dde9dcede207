from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = "check_graphite/httpx-agent/1.0"


class PluginSettings(BaseSettings):
    """Plugin defaults loaded from environment or .env."""

    graphite_url: Optional[str] = Field(default=None, alias="CHECK_GRAPHITE_URL")
    http_timeout_seconds: float = Field(default=5.0, gt=0, alias="CHECK_GRAPHITE_TIMEOUT")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="CHECK_GRAPHITE_USER_AGENT")
    log_level: str = Field(default="WARNING", alias="CHECK_GRAPHITE_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class CheckConfig(BaseModel):
    """Options for a single check invocation, fixed once parsed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="value", description="Label printed in front of the verdict.")
    base_url: str = Field(..., min_length=1, description="Graphite root URL, without /render.")
    target: str = Field(..., min_length=1, description="Metric path or Graphite target expression.")
    from_minutes: int = Field(default=5, gt=0, description="Length of the query window in minutes.")
    warning: float = Field(..., description="Warning threshold; must be non-zero.")
    critical: float = Field(..., description="Critical threshold; must be non-zero.")
    scale: float = Field(default=1.0, gt=0, description="Multiplier applied by Graphite's scale() function.")


@lru_cache
def get_settings() -> PluginSettings:
    """Return cached plugin settings."""
    return PluginSettings()  # type: ignore[call-arg]
