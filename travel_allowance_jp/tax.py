"""Income tax, resident tax and social insurance premium calculations (円/年)."""

from travel_allowance_jp.rates import DEFAULT_RATES, RateTable


def progressive_income_tax(
    income: float,
    brackets: tuple[tuple[float, float, float], ...] = DEFAULT_RATES.income_tax_brackets,
) -> float:
    """Return income tax (所得税) for the given taxable income.

    Picks the first bracket whose upper bound is >= income and applies
    ``base + (income - lower) * rate``. Negative income falls into the first
    bracket and yields a negative figure.
    """
    lower = 0.0
    for upper, rate, base in brackets:
        if income <= upper:
            return base + (income - lower) * rate
        lower = upper
    return 0.0  # pragma: no cover


def calc_marginal_income_tax_rate(taxable_income: float, rates: RateTable = DEFAULT_RATES) -> float:
    """Return combined marginal rate (所得税 + 住民税) for given taxable income."""
    income_tax_rate = rates.income_tax_brackets[0][1]
    for upper, rate, _ in rates.income_tax_brackets:
        if taxable_income <= upper:
            income_tax_rate = rate
            break
    return income_tax_rate + rates.resident_tax


def calc_resident_tax(taxable_income: float, rates: RateTable = DEFAULT_RATES) -> float:
    return taxable_income * rates.resident_tax


def calc_social_insurance(
    taxable_income: float, needs_care: bool, rates: RateTable = DEFAULT_RATES,
) -> tuple[float, float, float, float]:
    """Return (health, pension, employment, care) premiums.

    Care insurance is 0 unless *needs_care*.
    """
    health = taxable_income * rates.health_insurance
    pension = taxable_income * rates.pension_insurance
    employment = taxable_income * rates.employment_insurance
    care = taxable_income * rates.care_insurance if needs_care else 0.0
    return health, pension, employment, care
