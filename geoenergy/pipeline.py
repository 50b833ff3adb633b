"""Batch pipeline: locations CSV → cached energy data → report files."""

from pathlib import Path

from geoenergy.cache.store import CacheRepository, JsonFileCacheStore
from geoenergy.climate.config import ClimateConfig
from geoenergy.climate.power_client import NASAPowerClient
from geoenergy.config.loader import get_unique_locations, load_locations
from geoenergy.energy.orchestrator import EnergyOrchestrator
from geoenergy.outputs.report_writer import ReportWriter
from geoenergy.utils.exceptions import EnergyEstimatorError
from geoenergy.utils.logger import setup_logger

logger = setup_logger(__name__)


def build_orchestrator(
    cache_file: Path,
    climate_config: ClimateConfig | None = None,
    cache_store: CacheRepository | None = None,
) -> EnergyOrchestrator:
    """Wire a NASA POWER client and cache store into an orchestrator.

    Args:
        cache_file: JSON store path, used when no cache_store is given.
        climate_config: Upstream settings (defaults to ClimateConfig()).
        cache_store: Optional pre-built repository.

    Returns:
        Ready-to-use EnergyOrchestrator.
    """
    config = climate_config or ClimateConfig()
    client = NASAPowerClient(
        base_url=config.api_url,
        start_year=config.start_year,
        end_year=config.end_year,
        timeout=config.request_timeout_s,
    )
    store = cache_store or JsonFileCacheStore(db_file=cache_file)
    store.initialize()
    return EnergyOrchestrator(power_client=client, cache_store=store)


class EnergyReportPipeline:
    """End-to-end batch run: CSV → orchestrator → report files.

    Args:
        orchestrator: Source of cached or freshly fetched energy data.
        report_writer: Writer for tables, summaries and error reports.
    """

    def __init__(
        self, orchestrator: EnergyOrchestrator, report_writer: ReportWriter
    ) -> None:
        self.orchestrator = orchestrator
        self.report_writer = report_writer

    def run(self, csv_path: Path) -> dict[str, object]:
        """Produce reports for every location in ``csv_path``.

        Each unique coordinate is looked up or fetched once; rows sharing a
        coordinate reuse its entry or its failure. A failing coordinate gets
        an error report per row and does not stop the run.

        Args:
            csv_path: Path to locations CSV.

        Returns:
            Dict with keys: total_locations, successful, failed,
            report_files, error_files.
        """
        locations = load_locations(csv_path)
        unique = get_unique_locations(locations)
        logger.info(f"Running energy reports for {len(unique)} unique coordinates")

        report_files: list[Path] = []
        error_files: list[Path] = []
        successful = 0

        for lat, lon in unique:
            rows = [loc for loc in locations if loc.location == (lat, lon)]
            try:
                entry = self.orchestrator.cache_store.find_by_coordinates(lat, lon)
                if entry is None:
                    entry = self.orchestrator.fetch_and_store(lat, lon)
            except EnergyEstimatorError as e:
                logger.error(
                    f"Energy data unavailable for ({lat}, {lon}), "
                    f"{len(rows)} location(s) affected: {e}"
                )
                for location in rows:
                    error_files.append(
                        self.report_writer.write_error(
                            location.name, e.message, latitude=lat, longitude=lon
                        )
                    )
                continue

            for location in rows:
                report_files.extend(
                    self.report_writer.write_report(entry, location.name)
                )
                successful += 1

        failed = len(locations) - successful
        logger.info(
            f"Pipeline complete: {successful} succeeded, "
            f"{failed} failed out of {len(locations)} total"
        )

        return {
            "total_locations": len(locations),
            "successful": successful,
            "failed": failed,
            "report_files": report_files,
            "error_files": error_files,
        }
