"""Shared pytest fixtures for energy estimator tests."""

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pandas as pd
import pytest

from geoenergy.cache.store import InMemoryCacheStore
from geoenergy.climate.power_client import NASAPowerClient
from geoenergy.config.schema import CacheEntry, ClimateMetadata, RawClimateData
from geoenergy.energy.calculator import calculate_solar_energy, calculate_wind_energy
from geoenergy.energy.orchestrator import EnergyOrchestrator

# Two years of monthly data plus the "13" annual-average keys POWER embeds
SAMPLE_SOLAR: dict[str, float] = {
    "201201": 1.5,
    "201202": 2.25,
    "201203": 3.75,
    "201213": 2.5,
    "201301": 1.75,
    "201302": 2.5,
    "201313": 2.125,
}

SAMPLE_WIND: dict[str, float] = {
    "201201": 5.0,
    "201202": 6.0,
    "201203": 4.0,
    "201213": 5.0,
    "201301": 7.0,
    "201302": 3.0,
    "201313": 5.0,
}


def make_power_payload(
    solar: dict[str, Any] | None = None,
    wind: dict[str, Any] | None = None,
    lat: float = 43.65,
    lon: float = -79.38,
    elevation: float | None = 112.4,
) -> dict[str, Any]:
    """Build a NASA POWER monthly point JSON payload."""
    coordinates: list[float] = [lon, lat]
    if elevation is not None:
        coordinates.append(elevation)
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": coordinates},
        "properties": {
            "parameter": {
                "ALLSKY_SFC_SW_DWN": dict(SAMPLE_SOLAR if solar is None else solar),
                "WS50M": dict(SAMPLE_WIND if wind is None else wind),
            }
        },
    }


def make_raw_data(lat: float = 43.65, lon: float = -79.38) -> RawClimateData:
    """RawClimateData built from the sample series."""
    return RawClimateData(
        solar=dict(SAMPLE_SOLAR),
        wind=dict(SAMPLE_WIND),
        metadata=ClimateMetadata(latitude=lat, longitude=lon, elevation=112.4),
    )


def make_entry(
    lat: float = 43.65,
    lon: float = -79.38,
    raw_data: RawClimateData | None = None,
    timestamp: str = "2026-01-01T00:00:00+00:00",
) -> CacheEntry:
    """CacheEntry with default-parameter results for the sample series."""
    raw = raw_data or make_raw_data(lat, lon)
    return CacheEntry(
        latitude=lat,
        longitude=lon,
        solar=calculate_solar_energy(raw.solar),
        wind=calculate_wind_energy(raw.wind),
        raw_data=raw,
        timestamp=timestamp,
    )


@pytest.fixture()
def raw_data() -> RawClimateData:
    """Sample raw POWER series for Toronto."""
    return make_raw_data()


@pytest.fixture()
def mock_client(raw_data: RawClimateData) -> MagicMock:
    """Mock NASAPowerClient returning the sample series."""
    client = MagicMock(spec=NASAPowerClient)
    client.fetch_monthly_data.return_value = raw_data
    return client


@pytest.fixture()
def memory_store() -> InMemoryCacheStore:
    """Empty in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture()
def orchestrator(
    mock_client: MagicMock, memory_store: InMemoryCacheStore
) -> EnergyOrchestrator:
    """Orchestrator with a mock client and in-memory cache."""
    return EnergyOrchestrator(power_client=mock_client, cache_store=memory_store)


@pytest.fixture()
def sample_locations_csv(tmp_path: Path) -> Path:
    """CSV with 3 locations; two share the same coordinate.

    Returns:
        Path to temporary CSV file.
    """
    csv_path = tmp_path / "locations.csv"
    df = pd.DataFrame(
        {
            "Name": ["Toronto", "Toronto Office", "Calgary"],
            "Latitude": [43.65, 43.65, 51.05],
            "Longitude ": [-79.38, -79.38, -114.07],  # Note: trailing space
        }
    )
    df.to_csv(csv_path, index=False)
    return csv_path
