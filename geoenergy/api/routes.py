"""
API routes for solar and wind energy estimates.
"""

from fastapi import APIRouter, Depends, Request

from geoenergy.config.schema import CalculationRequest, EnergyType
from geoenergy.energy.orchestrator import EnergyOrchestrator

router = APIRouter(tags=["energy"])


def get_orchestrator(request: Request) -> EnergyOrchestrator:
    """Return the orchestrator attached to the running app."""
    return request.app.state.orchestrator


@router.get("/")
def root() -> dict:
    """Liveness check."""
    return {"message": "Energy API Backend"}


@router.get("/api/solar/{lat}/{lon}")
def get_solar(
    lat: str, lon: str, orchestrator: EnergyOrchestrator = Depends(get_orchestrator)
) -> dict:
    """Monthly solar energy (kWh) per year for a coordinate."""
    return orchestrator.get_energy_data(lat, lon, EnergyType.SOLAR)


@router.get("/api/wind/{lat}/{lon}")
def get_wind(
    lat: str, lon: str, orchestrator: EnergyOrchestrator = Depends(get_orchestrator)
) -> dict:
    """Monthly wind energy (MWh) per year for a coordinate."""
    return orchestrator.get_energy_data(lat, lon, EnergyType.WIND)


@router.get("/api/energy/{lat}/{lon}")
def get_energy(
    lat: str, lon: str, orchestrator: EnergyOrchestrator = Depends(get_orchestrator)
) -> dict:
    """Both solar and wind energy for a coordinate."""
    return orchestrator.get_energy_data(lat, lon, EnergyType.BOTH)


@router.post("/api/calculate")
def calculate(
    payload: CalculationRequest | None = None,
    orchestrator: EnergyOrchestrator = Depends(get_orchestrator),
) -> dict:
    """
    Energy estimates with custom area and efficiencies.

    Expected body:
        {"latitude": 43.65, "longitude": -81.38, "area": 25,
         "solarEfficiency": 0.22, "windEfficiency": 0.35}

    Results computed with non-default parameters are not cached.
    """
    return orchestrator.calculate_energy(payload or CalculationRequest())
