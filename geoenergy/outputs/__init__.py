"""Report output for computed energy data."""

from geoenergy.outputs.report_writer import EnergySummary, ErrorReport, ReportWriter

__all__ = ["EnergySummary", "ErrorReport", "ReportWriter"]
