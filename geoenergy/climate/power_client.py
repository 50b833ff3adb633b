"""NASA POWER API client for monthly solar irradiance and wind speed."""

import numbers
from typing import Any

import requests

from geoenergy.climate.config import NASA_POWER_MONTHLY_URL
from geoenergy.config.schema import ClimateMetadata, RawClimateData
from geoenergy.utils.exceptions import UpstreamFetchError
from geoenergy.utils.logger import setup_logger

logger = setup_logger(__name__)

SOLAR_PARAMETER = "ALLSKY_SFC_SW_DWN"  # kWh/m²/day
WIND_PARAMETER = "WS50M"  # m/s at 50 m

# Renewable Energy community dataset
COMMUNITY = "RE"


class NASAPowerClient:
    """Client for the NASA POWER monthly point API.

    Args:
        base_url: Monthly point endpoint.
        start_year: First year of the requested range.
        end_year: Last year of the requested range.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = NASA_POWER_MONTHLY_URL,
        start_year: str = "2012",
        end_year: str = "2022",
        timeout: float = 60.0,
    ) -> None:
        self.base_url = base_url
        self.start_year = start_year
        self.end_year = end_year
        self.timeout = timeout

    def fetch_monthly_data(self, lat: float, lon: float) -> RawClimateData:
        """Fetch monthly irradiance and wind speed series for a coordinate.

        Args:
            lat: Latitude of the location.
            lon: Longitude of the location.

        Returns:
            RawClimateData with both series and the grid point metadata.

        Raises:
            UpstreamFetchError: On HTTP errors, timeouts, malformed payloads,
                or non-numeric samples.
        """
        params = {
            "parameters": f"{SOLAR_PARAMETER},{WIND_PARAMETER}",
            "community": COMMUNITY,
            "longitude": lon,
            "latitude": lat,
            "start": self.start_year,
            "end": self.end_year,
            "format": "JSON",
        }
        context = {"location": (lat, lon), "api": "NASA POWER"}

        logger.info(
            f"Fetching NASA POWER data for ({lat}, {lon}), "
            f"{self.start_year}-{self.end_year}"
        )

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error(f"NASA POWER request timed out for ({lat}, {lon})")
            raise UpstreamFetchError(
                "NASA POWER API request timed out", context=context
            ) from e
        except requests.exceptions.HTTPError as e:
            logger.error(
                f"NASA POWER HTTP error {response.status_code} for ({lat}, {lon})"
            )
            raise UpstreamFetchError(
                f"NASA POWER API returned HTTP {response.status_code}",
                context={
                    **context,
                    "status_code": response.status_code,
                    "response": response.text[:500],
                },
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"NASA POWER request failed for ({lat}, {lon}): {e}")
            raise UpstreamFetchError(
                "NASA POWER API request failed",
                context={**context, "error": str(e)},
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"NASA POWER returned invalid JSON for ({lat}, {lon})")
            raise UpstreamFetchError(
                "NASA POWER API returned invalid JSON",
                context={**context, "response": response.text[:500]},
            ) from e

        data = self.parse_response(payload, context)
        logger.info(f"Successfully retrieved NASA POWER data for ({lat}, {lon})")
        return data

    def parse_response(
        self, payload: Any, context: dict[str, Any] | None = None
    ) -> RawClimateData:
        """Extract both series and metadata from a POWER JSON payload.

        Args:
            payload: Decoded JSON response.
            context: Error context to attach to failures.

        Returns:
            RawClimateData built from the payload.

        Raises:
            UpstreamFetchError: If a series is missing or holds non-numeric values.
        """
        context = context or {}
        try:
            parameters = payload["properties"]["parameter"]
            solar = parameters[SOLAR_PARAMETER]
            wind = parameters[WIND_PARAMETER]
        except (KeyError, TypeError) as e:
            raise UpstreamFetchError(
                "NASA POWER response is missing expected series",
                context={**context, "missing": str(e)},
            ) from e

        for name, series in ((SOLAR_PARAMETER, solar), (WIND_PARAMETER, wind)):
            _check_numeric_series(name, series, context)

        return RawClimateData(
            solar=dict(solar),
            wind=dict(wind),
            metadata=_parse_metadata(payload),
        )


def _check_numeric_series(name: str, series: Any, context: dict[str, Any]) -> None:
    """Reject series that are not mappings of numbers."""
    if not isinstance(series, dict):
        raise UpstreamFetchError(
            f"NASA POWER series {name} is not an object",
            context={**context, "parameter": name},
        )
    bad_keys = [
        key
        for key, value in series.items()
        if isinstance(value, bool) or not isinstance(value, numbers.Real)
    ]
    if bad_keys:
        raise UpstreamFetchError(
            f"NASA POWER series {name} contains non-numeric values",
            context={**context, "parameter": name, "keys": bad_keys[:5]},
        )


def _parse_metadata(payload: dict[str, Any]) -> ClimateMetadata:
    """Read [lon, lat, elevation] from the GeoJSON geometry."""
    coordinates = (payload.get("geometry") or {}).get("coordinates") or []
    elevation = coordinates[2] if len(coordinates) > 2 else None
    if elevation is None:
        elevation = payload["properties"]["parameter"].get("elevation")
    if not isinstance(elevation, numbers.Real):
        elevation = None

    return ClimateMetadata(
        latitude=coordinates[1] if len(coordinates) > 1 else None,
        longitude=coordinates[0] if coordinates else None,
        elevation=elevation,
    )
