"""Climate data retrieval from NASA POWER."""

from geoenergy.climate.config import ClimateConfig
from geoenergy.climate.power_client import NASAPowerClient

__all__ = [
    "ClimateConfig",
    "NASAPowerClient",
]
