"""Travel Per-Diem Tax Savings Simulation Package."""

from travel_allowance_jp.rates import (
    RateTable,
    RateTableError,
    DEFAULT_RATES,
    load_rate_table,
)
from travel_allowance_jp.tax import (
    progressive_income_tax,
    calc_marginal_income_tax_rate,
    calc_resident_tax,
    calc_social_insurance,
)
from travel_allowance_jp.calculator import (
    AGE_BRACKETS,
    CARE_INSURANCE_BRACKETS,
    CalculationInput,
    CalculationResult,
    DeductionBreakdown,
    InvalidAgeBracketError,
    NegativeInputError,
    NonFiniteInputError,
    NonIntegralDaysError,
    DegenerateAllowanceWarning,
    parse_age_bracket,
    validate_input,
    needs_care_insurance,
    calc_non_taxable_allowance,
    calc_deductions,
    compute_delta,
)
from travel_allowance_jp.positions import (
    Position,
    DEFAULT_POSITIONS,
    find_position,
    input_for_position,
    validate_positions,
    check_positions,
)
from travel_allowance_jp.comparison import compare_positions, sweep_trip_days

__all__ = [
    "RateTable",
    "RateTableError",
    "DEFAULT_RATES",
    "load_rate_table",
    "progressive_income_tax",
    "calc_marginal_income_tax_rate",
    "calc_resident_tax",
    "calc_social_insurance",
    "AGE_BRACKETS",
    "CARE_INSURANCE_BRACKETS",
    "CalculationInput",
    "CalculationResult",
    "DeductionBreakdown",
    "InvalidAgeBracketError",
    "NegativeInputError",
    "NonFiniteInputError",
    "NonIntegralDaysError",
    "DegenerateAllowanceWarning",
    "parse_age_bracket",
    "validate_input",
    "needs_care_insurance",
    "calc_non_taxable_allowance",
    "calc_deductions",
    "compute_delta",
    "Position",
    "DEFAULT_POSITIONS",
    "find_position",
    "input_for_position",
    "validate_positions",
    "check_positions",
    "compare_positions",
    "sweep_trip_days",
]
