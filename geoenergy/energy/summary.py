"""Tabular views of energy records for charts and reports."""

import pandas as pd

from geoenergy.energy.calculator import EnergyRecords, round2

MONTHS = [f"{m:02d}" for m in range(1, 13)]


def records_to_frame(records: EnergyRecords) -> pd.DataFrame:
    """Flatten year -> month records into a long DataFrame.

    The ``annual`` field is left out; it can be recovered per year from the
    returned frame or read from the records directly.

    Args:
        records: Output of a calculator.

    Returns:
        DataFrame with columns year, month, energy sorted by year and month.
    """
    rows = [
        {"year": year, "month": month, "energy": value}
        for year, record in records.items()
        for month, value in record.items()
        if month != "annual"
    ]
    df = pd.DataFrame(rows, columns=["year", "month", "energy"]).astype(
        {"energy": float}
    )
    return df.sort_values(["year", "month"], ignore_index=True)


def monthly_averages(records: EnergyRecords) -> dict[str, float]:
    """Average each calendar month across the years that report it.

    Months missing from every year average to 0.

    Args:
        records: Output of a calculator.

    Returns:
        Mapping "01".."12" -> average energy rounded to 2 places.
    """
    df = records_to_frame(records)
    means = df.groupby("month")["energy"].mean()
    return {
        month: round2(float(means[month])) if month in means.index else 0.0
        for month in MONTHS
    }


def annual_totals(records: EnergyRecords) -> dict[str, float]:
    """Return year -> stored annual total."""
    return {year: record["annual"] for year, record in sorted(records.items())}
