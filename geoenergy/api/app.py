"""
FastAPI application factory and error handlers for the energy API.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geoenergy.api.config import ServerConfig
from geoenergy.api.routes import router
from geoenergy.energy.orchestrator import EnergyOrchestrator
from geoenergy.pipeline import build_orchestrator
from geoenergy.utils.exceptions import (
    CoordinateValidationError,
    EnergyEstimatorError,
)
from geoenergy.utils.logger import setup_logger

logger = setup_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(
    request: Request, exc: CoordinateValidationError
) -> JSONResponse:
    return _error(400, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    detail = f": {', '.join(fields)}" if fields else ""
    return _error(400, f"Invalid request body{detail}")


async def handle_estimator_error(
    request: Request, exc: EnergyEstimatorError
) -> JSONResponse:
    # Upstream and cache details stay in the log, never in the response.
    logger.error(f"Error handling {request.method} {request.url.path}: {exc}")
    return _error(500, INTERNAL_ERROR_MESSAGE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error handling {request.method} {request.url.path}")
    return _error(500, INTERNAL_ERROR_MESSAGE)


def create_app(
    orchestrator: EnergyOrchestrator | None = None,
    config: ServerConfig | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        orchestrator: Orchestrator serving requests. Built from config
            with a JSON file cache when omitted.
        config: Server settings (defaults to ServerConfig()).

    Returns:
        Configured FastAPI app.
    """
    config = config or ServerConfig()
    if orchestrator is None:
        orchestrator = build_orchestrator(cache_file=config.cache_file)

    app = FastAPI(
        title="Energy API",
        description="Solar and wind energy estimates from NASA POWER climate data",
        version="0.1.0",
    )
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CoordinateValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(EnergyEstimatorError, handle_estimator_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(router)
    return app
