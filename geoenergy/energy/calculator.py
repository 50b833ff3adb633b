"""Monthly solar and wind energy estimates from NASA POWER climate samples.

Both calculators walk the same period keys (``YYYYMM``) and build a
year -> month -> energy mapping with a running ``annual`` total. The annual
total is re-rounded after every month is added, so it can differ in the last
digit from rounding the sum of the final monthly values.
"""

import math
import re
from collections.abc import Callable, Mapping
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

# Average days per month. A simplification, not a calendar day count;
# changing it changes every stored value.
DAYS_PER_MONTH = 30

# Hours in a 30-day month.
HOURS_PER_MONTH = 24 * DAYS_PER_MONTH

# Sea-level air density in kg/m³. Fixed, not a calculation parameter.
AIR_DENSITY = 1.225

WH_PER_MWH = 1_000_000

DEFAULT_SOLAR_AREA = 1.0
DEFAULT_SOLAR_EFFICIENCY = 0.2

# Swept area of a 20 m radius rotor (pi * 20²).
DEFAULT_WIND_AREA = 1256.64
DEFAULT_WIND_EFFICIENCY = 0.4

MONTH_KEY = re.compile(r"^\d{6}$")

# NASA POWER embeds an annual average under month "13" next to the 12 months.
ANNUAL_AVERAGE_SUFFIX = "13"

_TWO_PLACES = Decimal("0.01")
_ROUNDING_CONTEXT = Context(prec=400)

EnergyRecords = dict[str, dict[str, float]]


def round2(value: float) -> float:
    """Round to 2 decimal places, ties away from zero.

    Rounds the exact binary value of the float, so ``round2(2.675)`` is 2.67
    (the stored value is below the tie) while ``round2(0.125)`` is 0.13.
    Built-in ``round`` would give 0.12 for the latter.
    """
    if math.isnan(value) or math.isinf(value):
        return value
    rounded = Decimal(value).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT
    )
    return float(rounded)


def is_monthly_key(key: str) -> bool:
    """Return True for ``YYYYMM`` keys that denote a calendar month."""
    return bool(MONTH_KEY.match(key)) and not key.endswith(ANNUAL_AVERAGE_SUFFIX)


def _as_float(value: Any) -> float:
    # Non-numeric samples become NaN rather than failing the whole series.
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _accumulate(
    samples: Mapping[str, Any] | None,
    monthly_energy: Callable[[float], float],
) -> EnergyRecords:
    result: EnergyRecords = {}
    if not samples:
        return result

    for key in sorted(samples):
        if not is_monthly_key(key):
            continue

        year, month = key[:4], key[4:6]
        energy = round2(monthly_energy(_as_float(samples[key])))

        record = result.setdefault(year, {"annual": 0.0})
        record[month] = energy
        record["annual"] = round2(record["annual"] + energy)

    return result


def calculate_solar_energy(
    samples: Mapping[str, Any] | None,
    area: float = DEFAULT_SOLAR_AREA,
    efficiency: float = DEFAULT_SOLAR_EFFICIENCY,
) -> EnergyRecords:
    """Calculate monthly solar energy production in kWh.

    Args:
        samples: Period key -> all-sky surface irradiance (kWh/m²/day).
        area: Panel area in m².
        efficiency: Panel efficiency as a fraction.

    Returns:
        Year -> {"annual": total, "01".."12": kWh}.
    """
    return _accumulate(
        samples,
        lambda irradiance: irradiance * area * efficiency * DAYS_PER_MONTH,
    )


def wind_power(speed: float, area: float, efficiency: float) -> float:
    """Turbine power in watts: P = 0.5 * rho * A * v³ * efficiency."""
    return 0.5 * AIR_DENSITY * area * speed**3 * efficiency


def calculate_wind_energy(
    samples: Mapping[str, Any] | None,
    area: float = DEFAULT_WIND_AREA,
    efficiency: float = DEFAULT_WIND_EFFICIENCY,
) -> EnergyRecords:
    """Calculate monthly wind energy production in MWh.

    Args:
        samples: Period key -> wind speed at 50 m (m/s).
        area: Rotor swept area in m².
        efficiency: Turbine efficiency as a fraction.

    Returns:
        Year -> {"annual": total, "01".."12": MWh}.
    """
    return _accumulate(
        samples,
        lambda speed: wind_power(speed, area, efficiency) * HOURS_PER_MONTH / WH_PER_MWH,
    )
