"""HTTP surface for the energy estimator."""

from geoenergy.api.app import create_app
from geoenergy.api.config import ServerConfig

__all__ = ["ServerConfig", "create_app"]
