"""HTTP server configuration settings."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class ServerConfig(BaseModel):
    """Configuration for the energy API server.

    Args:
        host: Interface to bind.
        port: Listen port. Overridden by PORT env var.
        cache_file: JSON cache store path. Overridden by ENERGY_CACHE_FILE.
        cors_origins: Allowed CORS origins. Overridden by CORS_ORIGINS
            (comma separated).
    """

    host: str = "0.0.0.0"
    port: int = 3000
    cache_file: Path = Path("data/energy_database.json")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @model_validator(mode="after")
    def load_env_overrides(self) -> "ServerConfig":
        """Override fields from environment variables if set."""
        if env_port := os.environ.get("PORT"):
            self.port = int(env_port)
        if env_cache := os.environ.get("ENERGY_CACHE_FILE"):
            self.cache_file = Path(env_cache)
        if env_origins := os.environ.get("CORS_ORIGINS"):
            self.cors_origins = [o.strip() for o in env_origins.split(",") if o.strip()]
        return self
