"""CSV loader for batch report locations."""

from pathlib import Path

import pandas as pd

from ..utils.exceptions import ConfigValidationError
from ..utils.logger import setup_logger
from .schema import LocationConfig

logger = setup_logger(__name__)

# Mapping from CSV column names to LocationConfig field names
COLUMN_MAP: dict[str, str] = {
    "Name": "name",
    "Latitude": "latitude",
    "Longitude": "longitude",
}


def load_locations(csv_path: Path) -> list[LocationConfig]:
    """Load and validate report locations from CSV.

    Args:
        csv_path: Path to CSV file with Name, Latitude, Longitude columns.

    Returns:
        List of validated LocationConfig objects.

    Raises:
        ConfigValidationError: If CSV cannot be read or validation fails.
    """
    if not csv_path.exists():
        raise ConfigValidationError(
            f"Locations file not found: {csv_path}",
            context={"path": str(csv_path)},
        )

    try:
        df = pd.read_csv(csv_path)
        logger.info(f"Loaded {len(df)} rows from {csv_path}")
    except Exception as e:
        raise ConfigValidationError(
            f"Failed to read CSV: {e}",
            context={"path": str(csv_path), "error": str(e)},
        ) from e

    df.columns = df.columns.str.strip()
    missing = [col for col in COLUMN_MAP if col not in df.columns]
    if missing:
        raise ConfigValidationError(
            f"Missing required columns: {', '.join(missing)}",
            context={"path": str(csv_path), "columns": list(df.columns)},
        )
    df = df.rename(columns=COLUMN_MAP)[list(COLUMN_MAP.values())]

    locations: list[LocationConfig] = []
    for idx, row in df.iterrows():
        row_dict = {k: (None if pd.isna(v) else v) for k, v in row.to_dict().items()}
        try:
            location = LocationConfig(**row_dict)
        except Exception as e:
            logger.error(f"Validation failed for row {idx + 2}: {e}")
            raise ConfigValidationError(
                f"Validation failed for row {idx + 2}",
                context={
                    "row_number": idx + 2,
                    "name": row_dict.get("name") or "Unknown",
                    "error": str(e),
                },
            ) from e
        locations.append(location)
        logger.debug(f"Row {idx + 2}: {location.name} validated successfully")

    logger.info(f"Successfully validated {len(locations)} locations")
    return locations


def get_unique_locations(
    locations: list[LocationConfig],
) -> list[tuple[float, float]]:
    """Extract unique (latitude, longitude) tuples, keeping first-seen order.

    Args:
        locations: List of validated LocationConfig objects.

    Returns:
        List of unique (latitude, longitude) tuples.
    """
    unique_locations = list(dict.fromkeys(loc.location for loc in locations))

    logger.info(
        f"Found {len(unique_locations)} unique locations from {len(locations)} rows"
    )

    return unique_locations
