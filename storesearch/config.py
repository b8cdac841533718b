# storesearch/config.py
import os

from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = "StoreSearch/1.0 (+https://github.com/storesearch)"


class SearchSettings(BaseModel):
    """Settings describing the remote catalog endpoint and how to query it."""

    endpoint: str = Field(
        default="https://itunes.apple.com/search",
        description="Base URL of the catalog search endpoint.",
    )
    result_limit: int = Field(default=200, ge=1, description="Maximum number of items requested.")
    timeout_seconds: float = Field(default=15.0, gt=0, description="HTTP timeout for one search.")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent sent with each request.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """Instantiate settings, letting ``STORESEARCH_*`` variables override defaults."""
        overrides = {
            "endpoint": os.getenv("STORESEARCH_ENDPOINT"),
            "result_limit": os.getenv("STORESEARCH_RESULT_LIMIT"),
            "timeout_seconds": os.getenv("STORESEARCH_TIMEOUT"),
            "user_agent": os.getenv("STORESEARCH_USER_AGENT"),
            "log_level": os.getenv("STORESEARCH_LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in overrides.items() if v not in (None, "")})


__all__ = ["SearchSettings"]
