"""Orchestrator tying together cache lookups, NASA POWER fetches, and calculations."""

from typing import Any

from geoenergy.cache.store import CacheRepository
from geoenergy.climate.power_client import NASAPowerClient
from geoenergy.config.schema import (
    CacheEntry,
    CalculationParameters,
    CalculationRequest,
    EnergyType,
    RawClimateData,
)
from geoenergy.config.validation import validate_coordinates
from geoenergy.energy.calculator import (
    calculate_solar_energy,
    calculate_wind_energy,
)
from geoenergy.utils.exceptions import CoordinateValidationError
from geoenergy.utils.logger import setup_logger

logger = setup_logger(__name__)


class EnergyOrchestrator:
    """Serves energy data per coordinate, fetching and caching on a miss.

    Only results computed with default parameters are persisted; custom
    calculations are recomputed from the cached raw series each time.

    Args:
        power_client: Client for NASA POWER calls.
        cache_store: Repository holding CacheEntry records.
    """

    def __init__(
        self,
        power_client: NASAPowerClient,
        cache_store: CacheRepository,
    ) -> None:
        self.power_client = power_client
        self.cache_store = cache_store

    def get_energy_data(
        self,
        latitude: Any,
        longitude: Any,
        energy_type: EnergyType = EnergyType.BOTH,
    ) -> dict[str, Any]:
        """Return default-parameter energy data for a coordinate.

        Args:
            latitude: Latitude, numeric or numeric string.
            longitude: Longitude, numeric or numeric string.
            energy_type: Which series to include in the response.

        Returns:
            Dict with latitude, longitude, the requested series, and the
            cache entry timestamp.

        Raises:
            CoordinateValidationError: If the coordinate is invalid.
            UpstreamFetchError: If a cache miss cannot be filled.
            CacheWriteError: If a fresh result cannot be persisted.
        """
        lat, lon = validate_coordinates(latitude, longitude)
        entry = self.cache_store.find_by_coordinates(lat, lon)
        if entry is None:
            entry = self.fetch_and_store(lat, lon)

        return shape_response(entry, lat, lon, energy_type)

    def calculate_energy(self, request: CalculationRequest) -> dict[str, Any]:
        """Return energy data for a coordinate using the request's parameters.

        Non-default parameters are applied to the raw series and the result
        is returned without being cached.

        Args:
            request: Coordinates plus optional area and efficiencies.

        Returns:
            Dict with latitude, longitude, solar, wind and timestamp, plus
            ``parameters`` when custom values were applied.

        Raises:
            CoordinateValidationError: If coordinates are missing or invalid.
            UpstreamFetchError: If raw data has to be fetched and cannot be.
            CacheWriteError: If a fresh result cannot be persisted.
        """
        if request.latitude is None or request.longitude is None:
            raise CoordinateValidationError("Latitude and longitude are required")

        lat, lon = validate_coordinates(request.latitude, request.longitude)
        entry = self.cache_store.find_by_coordinates(lat, lon)
        if entry is None or entry.raw_data is None or not entry.raw_data.is_complete:
            entry = self.fetch_and_store(lat, lon)

        parameters = request.parameters
        if parameters.is_default():
            return {
                "latitude": lat,
                "longitude": lon,
                "solar": entry.solar,
                "wind": entry.wind,
                "timestamp": entry.timestamp,
            }

        logger.info(
            f"Custom calculation for ({lat}, {lon}): area={parameters.area}, "
            f"solar_efficiency={parameters.solar_efficiency}, "
            f"wind_efficiency={parameters.wind_efficiency}"
        )
        solar, wind = calculate_custom(entry.raw_data, parameters)
        return {
            "latitude": lat,
            "longitude": lon,
            "solar": solar,
            "wind": wind,
            "parameters": parameters.model_dump(by_alias=True),
            "timestamp": entry.timestamp,
        }

    def fetch_and_store(self, lat: float, lon: float) -> CacheEntry:
        """Fetch raw series, compute defaults, and persist a new cache entry.

        Args:
            lat: Validated latitude.
            lon: Validated longitude.

        Returns:
            The saved CacheEntry.
        """
        logger.info(f"Fetching new data for {lat}, {lon}")
        raw_data = self.power_client.fetch_monthly_data(lat, lon)

        entry = CacheEntry(
            latitude=lat,
            longitude=lon,
            solar=calculate_solar_energy(raw_data.solar),
            wind=calculate_wind_energy(raw_data.wind),
            raw_data=raw_data,
        )
        return self.cache_store.save(entry)


def calculate_custom(
    raw_data: RawClimateData, parameters: CalculationParameters
) -> tuple[dict, dict]:
    """Compute solar and wind records with one area for both models."""
    solar = calculate_solar_energy(
        raw_data.solar, parameters.area, parameters.solar_efficiency
    )
    wind = calculate_wind_energy(
        raw_data.wind, parameters.area, parameters.wind_efficiency
    )
    return solar, wind


def shape_response(
    entry: CacheEntry,
    latitude: float,
    longitude: float,
    energy_type: EnergyType,
) -> dict[str, Any]:
    """Build the GET response body for the requested energy type."""
    response: dict[str, Any] = {"latitude": latitude, "longitude": longitude}

    if energy_type in (EnergyType.SOLAR, EnergyType.BOTH):
        response["solar"] = entry.solar
    if energy_type in (EnergyType.WIND, EnergyType.BOTH):
        response["wind"] = entry.wind

    response["timestamp"] = entry.timestamp
    return response
