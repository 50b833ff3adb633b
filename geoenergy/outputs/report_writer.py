"""Report generation for energy data: monthly CSV tables, summary JSONs, error JSONs."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from geoenergy.config.schema import CacheEntry
from geoenergy.energy.summary import annual_totals, monthly_averages, records_to_frame
from geoenergy.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class EnergySummary:
    """Location metadata and aggregate figures for one cached entry."""

    name: str
    latitude: float
    longitude: float
    data_timestamp: str

    # Year -> annual total (kWh solar, MWh wind)
    solar_annual_kwh: dict[str, float]
    wind_annual_mwh: dict[str, float]

    # Month -> multi-year average
    solar_monthly_average_kwh: dict[str, float]
    wind_monthly_average_mwh: dict[str, float]

    elevation_m: float | None = None


@dataclass
class ErrorReport:
    """Details for a location whose data could not be produced."""

    name: str
    error_message: str
    latitude: float | None = None
    longitude: float | None = None
    report_timestamp: str = field(default="", init=False)

    def __post_init__(self) -> None:
        """Set report timestamp to current UTC time."""
        self.report_timestamp = datetime.now(tz=timezone.utc).isoformat()


def _safe_name(name: str) -> str:
    return name.strip().replace(" ", "_").replace("/", "_") or "location"


class ReportWriter:
    """Writes energy reports: monthly CSV tables, summary JSONs, and error JSONs."""

    def __init__(self, output_dir: Path) -> None:
        """Initialize report writer and create subdirectories.

        Args:
            output_dir: Root output directory.
        """
        self.output_dir = output_dir
        self.tables_dir = output_dir / "tables"
        self.results_dir = output_dir / "results"
        self.tables_dir.mkdir(parents=True, exist_ok=True)
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"ReportWriter initialized: {output_dir}")

    def write_report(self, entry: CacheEntry, name: str) -> tuple[Path, Path, Path]:
        """Write monthly tables and a summary for one location.

        Args:
            entry: Cached default-parameter energy data.
            name: Location name used for file names.

        Returns:
            Tuple of (solar_csv, wind_csv, summary_json) paths.
        """
        filename_base = _safe_name(name)

        solar_path = self.tables_dir / f"{filename_base}_solar.csv"
        records_to_frame(entry.solar).to_csv(solar_path, index=False, float_format="%.2f")

        wind_path = self.tables_dir / f"{filename_base}_wind.csv"
        records_to_frame(entry.wind).to_csv(wind_path, index=False, float_format="%.2f")

        summary = EnergySummary(
            name=name,
            latitude=entry.latitude,
            longitude=entry.longitude,
            data_timestamp=entry.timestamp,
            solar_annual_kwh=annual_totals(entry.solar),
            wind_annual_mwh=annual_totals(entry.wind),
            solar_monthly_average_kwh=monthly_averages(entry.solar),
            wind_monthly_average_mwh=monthly_averages(entry.wind),
            elevation_m=entry.raw_data.metadata.elevation if entry.raw_data else None,
        )
        summary_path = self.results_dir / f"{filename_base}_summary.json"
        summary_path.write_text(json.dumps(asdict(summary), indent=2, default=str))

        logger.info(
            f"Report written for {name}: {solar_path.name}, "
            f"{wind_path.name}, {summary_path.name}"
        )
        return solar_path, wind_path, summary_path

    def write_error(
        self,
        name: str,
        message: str,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> Path:
        """Write an error report to JSON.

        Args:
            name: Location name used for the file name.
            message: Human-readable failure description.
            latitude: Requested latitude, if known.
            longitude: Requested longitude, if known.

        Returns:
            Path to the written JSON file.
        """
        report = ErrorReport(
            name=name, error_message=message, latitude=latitude, longitude=longitude
        )
        path = self.results_dir / f"{_safe_name(name)}_error.json"
        path.write_text(json.dumps(asdict(report), indent=2, default=str))
        logger.info(f"Error report written: {path}")
        return path
