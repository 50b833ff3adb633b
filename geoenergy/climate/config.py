"""Climate-specific configuration settings."""

import os

from pydantic import BaseModel, model_validator

NASA_POWER_MONTHLY_URL = "https://power.larc.nasa.gov/api/temporal/monthly/point"


class ClimateConfig(BaseModel):
    """Configuration for NASA POWER data retrieval.

    Args:
        api_url: Monthly point endpoint. Overridden by NASA_POWER_URL env var.
        start_year: First year requested. Overridden by NASA_POWER_START.
        end_year: Last year requested. Overridden by NASA_POWER_END.
        request_timeout_s: Timeout for the upstream HTTP call in seconds.
    """

    api_url: str = NASA_POWER_MONTHLY_URL
    start_year: str = "2012"
    end_year: str = "2022"
    request_timeout_s: float = 60.0

    @model_validator(mode="after")
    def load_env_overrides(self) -> "ClimateConfig":
        """Override fields from environment variables if set."""
        if env_url := os.environ.get("NASA_POWER_URL"):
            self.api_url = env_url
        if env_start := os.environ.get("NASA_POWER_START"):
            self.start_year = env_start
        if env_end := os.environ.get("NASA_POWER_END"):
            self.end_year = env_end
        return self
