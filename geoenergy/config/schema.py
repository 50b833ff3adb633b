"""Pydantic models for cached energy data, calculation requests, and locations."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from geoenergy.energy.calculator import (
    DEFAULT_SOLAR_AREA,
    DEFAULT_SOLAR_EFFICIENCY,
    DEFAULT_WIND_EFFICIENCY,
    EnergyRecords,
)

RawClimateSample = dict[str, Any]


class EnergyType(str, Enum):
    """Which energy series a response carries."""

    SOLAR = "solar"
    WIND = "wind"
    BOTH = "both"


class ClimateMetadata(BaseModel):
    """Grid point reported back by NASA POWER for a request."""

    latitude: float | None = None
    longitude: float | None = None
    elevation: float | None = None


class RawClimateData(BaseModel):
    """Raw monthly series for one coordinate.

    ``solar`` is all-sky surface irradiance (kWh/m²/day) and ``wind`` is wind
    speed at 50 m (m/s), both keyed by ``YYYYMM`` plus the ``YYYY13`` annual
    average.
    """

    solar: RawClimateSample = Field(default_factory=dict)
    wind: RawClimateSample = Field(default_factory=dict)
    metadata: ClimateMetadata = Field(default_factory=ClimateMetadata)

    @property
    def is_complete(self) -> bool:
        """True when both series hold samples."""
        return bool(self.solar) and bool(self.wind)


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(tz=timezone.utc).isoformat()


def json_safe(value: Any) -> Any:
    """Replace NaN and infinite floats with None, recursing into containers.

    The cache file is strict JSON, where non-finite numbers are stored as
    ``null``.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [json_safe(item) for item in value]
    return value


class CacheEntry(BaseModel):
    """Energy results computed with default parameters for one coordinate.

    Serialized with ``rawData`` as the raw-series key so stores written by
    earlier deployments load unchanged. ``raw_data`` may be missing or
    partial on such entries; custom calculations re-fetch in that case.
    Month values stored as ``null`` load as NaN.
    """

    model_config = ConfigDict(populate_by_name=True)

    latitude: float
    longitude: float
    solar: EnergyRecords = Field(default_factory=dict)
    wind: EnergyRecords = Field(default_factory=dict)
    raw_data: RawClimateData | None = Field(default=None, alias="rawData")
    timestamp: str = Field(default_factory=utc_timestamp)

    @field_validator("solar", "wind", mode="before")
    @classmethod
    def null_months_to_nan(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            year: (
                {k: math.nan if v is None else v for k, v in record.items()}
                if isinstance(record, dict)
                else record
            )
            for year, record in value.items()
        }

    @property
    def location(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def to_store(self) -> dict[str, Any]:
        """Dump to the strict-JSON shape used by the cache file."""
        return json_safe(self.model_dump(by_alias=True, exclude_none=True))


class CalculationParameters(BaseModel):
    """Panel/rotor area and efficiencies for a custom calculation."""

    model_config = ConfigDict(populate_by_name=True)

    area: float = DEFAULT_SOLAR_AREA
    solar_efficiency: float = Field(
        default=DEFAULT_SOLAR_EFFICIENCY, alias="solarEfficiency"
    )
    wind_efficiency: float = Field(
        default=DEFAULT_WIND_EFFICIENCY, alias="windEfficiency"
    )

    def is_default(self) -> bool:
        """True when every parameter equals its default value."""
        return (
            self.area == DEFAULT_SOLAR_AREA
            and self.solar_efficiency == DEFAULT_SOLAR_EFFICIENCY
            and self.wind_efficiency == DEFAULT_WIND_EFFICIENCY
        )


class CalculationRequest(CalculationParameters):
    """Body of ``POST /api/calculate``.

    Coordinates are optional at the model level so a missing value produces
    the API's own "required" message instead of a generic schema error.
    """

    latitude: float | None = None
    longitude: float | None = None

    @property
    def parameters(self) -> CalculationParameters:
        """The calculation parameters without the coordinates."""
        return CalculationParameters(
            area=self.area,
            solar_efficiency=self.solar_efficiency,
            wind_efficiency=self.wind_efficiency,
        )


class LocationConfig(BaseModel):
    """One row of a batch report locations CSV."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @property
    def location(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)
