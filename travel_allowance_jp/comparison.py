"""Multi-position and trip-volume comparisons built on compute_delta()."""

import dataclasses

from travel_allowance_jp.calculator import CalculationInput, CalculationResult, compute_delta
from travel_allowance_jp.positions import (
    DEFAULT_POSITIONS,
    Position,
    check_positions,
    input_for_position,
)
from travel_allowance_jp.rates import DEFAULT_RATES, RateTable


def compare_positions(
    age_bracket: str,
    annual_income: float,
    domestic_trip_days: int = 0,
    overseas_trip_days: int = 0,
    positions=DEFAULT_POSITIONS,
    rates: RateTable = DEFAULT_RATES,
) -> list[tuple[Position, CalculationResult]]:
    """Run the same employee profile through every position's allowance."""
    check_positions(positions)
    results = []
    for position in positions:
        inp = input_for_position(
            position, age_bracket, annual_income, domestic_trip_days, overseas_trip_days,
        )
        results.append((position, compute_delta(inp, rates)))
    return results


def sweep_trip_days(
    inp: CalculationInput,
    max_days: int = 100,
    step: int = 10,
    rates: RateTable = DEFAULT_RATES,
) -> list[tuple[int, CalculationResult]]:
    """Vary domestic trip days 0..max_days (inclusive) keeping everything else fixed."""
    if step <= 0:
        raise ValueError(f"stepは1以上である必要があります（{step}）")
    if max_days < 0:
        raise ValueError(f"max_daysは0以上である必要があります（{max_days}）")
    days = list(range(0, max_days + 1, step))
    if days[-1] != max_days:
        days.append(max_days)
    return [
        (d, compute_delta(dataclasses.replace(inp, domestic_trip_days=d), rates))
        for d in days
    ]
