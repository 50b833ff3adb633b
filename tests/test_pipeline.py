"""Tests for the locations loader, batch pipeline, and CLI."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from geoenergy.cache.store import InMemoryCacheStore, JsonFileCacheStore
from geoenergy.config.loader import get_unique_locations, load_locations
from geoenergy.energy.orchestrator import EnergyOrchestrator
from geoenergy.main import main, parse_args
from geoenergy.outputs.report_writer import ReportWriter
from geoenergy.pipeline import EnergyReportPipeline, build_orchestrator
from geoenergy.utils.exceptions import ConfigValidationError, UpstreamFetchError


class TestLoadLocations:
    """Tests for the locations CSV loader."""

    def test_loads_rows(self, sample_locations_csv: Path) -> None:
        locations = load_locations(sample_locations_csv)

        assert [loc.name for loc in locations] == [
            "Toronto",
            "Toronto Office",
            "Calgary",
        ]
        assert locations[2].location == (51.05, -114.07)

    def test_unique_locations(self, sample_locations_csv: Path) -> None:
        locations = load_locations(sample_locations_csv)
        assert get_unique_locations(locations) == [(43.65, -79.38), (51.05, -114.07)]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigValidationError, match="not found"):
            load_locations(tmp_path / "nope.csv")

    def test_missing_column(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "bad.csv"
        pd.DataFrame({"Name": ["a"], "Latitude": [1.0]}).to_csv(csv_path, index=False)

        with pytest.raises(ConfigValidationError, match="Longitude"):
            load_locations(csv_path)

    def test_out_of_range_row(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "bad.csv"
        pd.DataFrame(
            {"Name": ["ok", "bad"], "Latitude": [1.0, 95.0], "Longitude": [1.0, 1.0]}
        ).to_csv(csv_path, index=False)

        with pytest.raises(ConfigValidationError) as exc_info:
            load_locations(csv_path)

        assert exc_info.value.context["row_number"] == 3
        assert exc_info.value.context["name"] == "bad"


class TestEnergyReportPipeline:
    """End-to-end batch runs with a mocked upstream."""

    def test_run_writes_reports(
        self,
        tmp_path: Path,
        sample_locations_csv: Path,
        orchestrator: EnergyOrchestrator,
        mock_client: MagicMock,
    ) -> None:
        pipeline = EnergyReportPipeline(
            orchestrator=orchestrator,
            report_writer=ReportWriter(output_dir=tmp_path / "out"),
        )

        results = pipeline.run(sample_locations_csv)

        assert results["total_locations"] == 3
        assert results["successful"] == 3
        assert results["failed"] == 0
        assert len(results["report_files"]) == 9
        # Toronto rows share one fetch
        assert mock_client.fetch_monthly_data.call_count == 2

    def test_failed_location_gets_error_report(
        self,
        tmp_path: Path,
        sample_locations_csv: Path,
        mock_client: MagicMock,
        raw_data: object,
    ) -> None:
        mock_client.fetch_monthly_data.side_effect = [
            raw_data,
            UpstreamFetchError("NASA POWER API request failed"),
        ]
        orchestrator = EnergyOrchestrator(
            power_client=mock_client, cache_store=InMemoryCacheStore()
        )
        pipeline = EnergyReportPipeline(
            orchestrator=orchestrator,
            report_writer=ReportWriter(output_dir=tmp_path / "out"),
        )

        results = pipeline.run(sample_locations_csv)

        assert results["successful"] == 2
        assert results["failed"] == 1
        assert [p.name for p in results["error_files"]] == ["Calgary_error.json"]

    def test_failed_coordinate_fetched_once_for_shared_rows(
        self,
        tmp_path: Path,
        sample_locations_csv: Path,
        mock_client: MagicMock,
    ) -> None:
        """Rows sharing a failing coordinate reuse one failed fetch."""
        mock_client.fetch_monthly_data.side_effect = UpstreamFetchError(
            "NASA POWER API request failed"
        )
        orchestrator = EnergyOrchestrator(
            power_client=mock_client, cache_store=InMemoryCacheStore()
        )
        pipeline = EnergyReportPipeline(
            orchestrator=orchestrator,
            report_writer=ReportWriter(output_dir=tmp_path / "out"),
        )

        results = pipeline.run(sample_locations_csv)

        assert mock_client.fetch_monthly_data.call_count == 2
        assert results["failed"] == 3
        assert sorted(p.name for p in results["error_files"]) == [
            "Calgary_error.json",
            "Toronto_Office_error.json",
            "Toronto_error.json",
        ]


class TestBuildOrchestrator:
    def test_json_store_initialized(self, tmp_path: Path) -> None:
        cache_file = tmp_path / "cache.json"
        orchestrator = build_orchestrator(cache_file=cache_file)

        assert isinstance(orchestrator.cache_store, JsonFileCacheStore)
        assert cache_file.exists()

    def test_injected_store_used(self, tmp_path: Path) -> None:
        store = InMemoryCacheStore()
        orchestrator = build_orchestrator(cache_file=tmp_path / "x.json", cache_store=store)
        assert orchestrator.cache_store is store
        assert not (tmp_path / "x.json").exists()


class TestCli:
    """Tests for argument parsing and the report subcommand."""

    def test_parse_serve(self) -> None:
        args = parse_args(["serve", "--port", "8000"])
        assert args.command == "serve"
        assert args.port == 8000
        assert args.log_level == "INFO"

    def test_parse_report(self, tmp_path: Path) -> None:
        args = parse_args(["--log-level", "DEBUG", "report", str(tmp_path / "l.csv")])
        assert args.command == "report"
        assert args.output_dir == Path("outputs")
        assert args.log_level == "DEBUG"

    @patch("geoenergy.main.uvicorn.run")
    def test_serve_runs_uvicorn(self, mock_run: MagicMock, tmp_path: Path) -> None:
        main(["--cache-file", str(tmp_path / "c.json"), "serve", "--port", "8123"])

        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["port"] == 8123

    @patch("geoenergy.main.EnergyReportPipeline")
    def test_report_exit_code_on_failure(
        self, mock_pipeline_cls: MagicMock, tmp_path: Path
    ) -> None:
        mock_pipeline_cls.return_value.run.return_value = {
            "total_locations": 2,
            "successful": 1,
            "failed": 1,
            "report_files": [],
            "error_files": [],
        }

        with pytest.raises(SystemExit) as exc_info:
            main(
                [
                    "--cache-file",
                    str(tmp_path / "c.json"),
                    "report",
                    str(tmp_path / "locations.csv"),
                    "--output-dir",
                    str(tmp_path / "out"),
                ]
            )

        assert exc_info.value.code == 1
