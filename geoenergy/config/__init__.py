from .loader import get_unique_locations, load_locations
from .schema import (
    CacheEntry,
    CalculationParameters,
    CalculationRequest,
    ClimateMetadata,
    EnergyType,
    LocationConfig,
    RawClimateData,
)
from .validation import validate_coordinates

__all__ = [
    "load_locations",
    "get_unique_locations",
    "validate_coordinates",
    "CacheEntry",
    "CalculationParameters",
    "CalculationRequest",
    "ClimateMetadata",
    "EnergyType",
    "LocationConfig",
    "RawClimateData",
]
