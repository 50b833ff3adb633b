"""CLI entry point for the energy API server and batch reports."""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

from geoenergy.api.app import create_app
from geoenergy.api.config import ServerConfig
from geoenergy.outputs.report_writer import ReportWriter
from geoenergy.pipeline import EnergyReportPipeline, build_orchestrator
from geoenergy.utils.logger import set_console_level, setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Solar and wind energy estimates from NASA POWER data.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Console logging level (default: INFO).",
    )
    parser.add_argument(
        "--cache-file",
        type=Path,
        default=None,
        help="JSON cache store (default: ENERGY_CACHE_FILE or data/energy_database.json).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0).")
    serve.add_argument(
        "--port", type=int, default=None, help="Listen port (default: PORT or 3000)."
    )

    report = subparsers.add_parser(
        "report", help="Write energy reports for a CSV of locations."
    )
    report.add_argument(
        "csv_path",
        type=Path,
        help="CSV with Name, Latitude, Longitude columns.",
    )
    report.add_argument(
        "--output-dir",
        type=Path,
        default=Path("outputs"),
        help="Root directory for report files (default: outputs/).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the selected subcommand.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).
    """
    args = parse_args(argv)

    log_level = getattr(logging, args.log_level)
    logger = setup_logger("geoenergy", console_level=log_level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("geoenergy."):
            set_console_level(logging.getLogger(name), log_level)

    config = ServerConfig()
    if args.cache_file is not None:
        config.cache_file = args.cache_file

    if args.command == "serve":
        if args.host is not None:
            config.host = args.host
        if args.port is not None:
            config.port = args.port
        logger.info(f"Server running on port {config.port}")
        uvicorn.run(create_app(config=config), host=config.host, port=config.port)
        return

    logger.info(f"Starting energy report run: {args.csv_path}")
    pipeline = EnergyReportPipeline(
        orchestrator=build_orchestrator(cache_file=config.cache_file),
        report_writer=ReportWriter(output_dir=args.output_dir),
    )
    results = pipeline.run(args.csv_path)

    logger.info(
        f"Done: {results['successful']}/{results['total_locations']} locations succeeded"
    )

    if results["failed"] > 0:
        logger.warning(f"{results['failed']} locations failed, see error JSONs")
        sys.exit(1)


if __name__ == "__main__":
    main()
