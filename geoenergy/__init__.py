"""Solar and wind energy estimates for arbitrary coordinates."""

__version__ = "0.1.0"
