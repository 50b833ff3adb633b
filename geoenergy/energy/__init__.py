"""Energy calculations and summaries.

The orchestrator lives in ``geoenergy.energy.orchestrator`` and is not
re-exported here, since it depends on the config models that import this
package.
"""

from geoenergy.energy.calculator import (
    EnergyRecords,
    calculate_solar_energy,
    calculate_wind_energy,
    round2,
)
from geoenergy.energy.summary import annual_totals, monthly_averages, records_to_frame

__all__ = [
    "EnergyRecords",
    "annual_totals",
    "calculate_solar_energy",
    "calculate_wind_energy",
    "monthly_averages",
    "records_to_frame",
    "round2",
]
