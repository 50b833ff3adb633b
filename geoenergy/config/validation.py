"""Coordinate parsing and range checks shared by the API and the orchestrator."""

import math
from typing import Any

from geoenergy.utils.exceptions import CoordinateValidationError

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def _parse(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("booleans are not coordinates")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("coordinate must be finite")
    return number


def validate_coordinates(lat: Any, lon: Any) -> tuple[float, float]:
    """Parse and range-check a coordinate pair.

    Accepts numbers or numeric strings (path parameters arrive as text).
    Boundary values are valid.

    Args:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.

    Returns:
        Parsed (latitude, longitude) tuple.

    Raises:
        CoordinateValidationError: If either value is not a finite number or
            lies outside its range.
    """
    try:
        latitude = _parse(lat)
        longitude = _parse(lon)
    except (TypeError, ValueError) as e:
        raise CoordinateValidationError(
            "Invalid coordinate format",
            context={"latitude": lat, "longitude": lon},
        ) from e

    if not LATITUDE_RANGE[0] <= latitude <= LATITUDE_RANGE[1]:
        raise CoordinateValidationError(
            "Latitude must be between -90 and 90",
            context={"latitude": latitude},
        )
    if not LONGITUDE_RANGE[0] <= longitude <= LONGITUDE_RANGE[1]:
        raise CoordinateValidationError(
            "Longitude must be between -180 and 180",
            context={"longitude": longitude},
        )

    return latitude, longitude
