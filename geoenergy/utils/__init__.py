from .exceptions import (
    CacheReadError,
    CacheWriteError,
    ConfigValidationError,
    CoordinateValidationError,
    EnergyEstimatorError,
    UpstreamFetchError,
)
from .logger import set_console_level, setup_logger

__all__ = [
    "setup_logger",
    "set_console_level",
    "EnergyEstimatorError",
    "CoordinateValidationError",
    "ConfigValidationError",
    "UpstreamFetchError",
    "CacheReadError",
    "CacheWriteError",
]
