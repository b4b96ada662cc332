"""Take-home pay comparison before/after introducing a non-taxable travel per-diem.

The "current" pass taxes the whole annual income as salary. The "new" pass
moves ``per_diem × trip_days`` out of salary into a non-taxable allowance
(出張日当), recomputes every deduction on the reduced salary and adds the
allowance back untaxed.
"""

import math
import warnings
from dataclasses import dataclass

from travel_allowance_jp.rates import DEFAULT_RATES, RateTable
from travel_allowance_jp.tax import (
    calc_resident_tax,
    calc_social_insurance,
    progressive_income_tax,
)

AGE_BRACKETS: tuple[str, ...] = ("20-29", "30-39", "40-49", "50-59", "60-64", "65+")

# 介護保険第2号被保険者（40〜64歳）
CARE_INSURANCE_BRACKETS = frozenset({"40-49", "50-59", "60-64"})

# 画面表示ラベル → 内部キー
AGE_BRACKET_LABELS: dict[str, str] = {
    "20〜29歳": "20-29",
    "30〜39歳": "30-39",
    "40〜49歳": "40-49",
    "50〜59歳": "50-59",
    "60〜64歳": "60-64",
    "65歳以上": "65+",
}


class InvalidAgeBracketError(ValueError):
    """Age bracket outside the six recognized categories."""


class NegativeInputError(ValueError):
    """A monetary amount or day count below zero."""


class NonFiniteInputError(ValueError):
    """A monetary amount or day count that is NaN or infinite."""


class NonIntegralDaysError(ValueError):
    """A trip day count with a fractional part."""


class DegenerateAllowanceWarning(UserWarning):
    """Non-taxable allowance exceeds annual income (negative taxable income)."""


@dataclass(frozen=True)
class CalculationInput:
    age_bracket: str
    annual_income: float
    domestic_per_diem: float = 0
    overseas_per_diem: float = 0
    domestic_trip_days: int = 0
    overseas_trip_days: int = 0


@dataclass(frozen=True)
class DeductionBreakdown:
    taxable_income: float
    health_insurance: float
    pension_insurance: float
    employment_insurance: float
    care_insurance: float
    income_tax: float
    resident_tax: float
    non_taxable_allowance: float = 0.0

    @property
    def social_insurance(self) -> float:
        return (
            self.health_insurance
            + self.pension_insurance
            + self.employment_insurance
            + self.care_insurance
        )

    @property
    def total_deductions(self) -> float:
        return self.social_insurance + self.income_tax + self.resident_tax

    @property
    def take_home(self) -> float:
        return self.taxable_income - self.total_deductions + self.non_taxable_allowance


@dataclass(frozen=True)
class CalculationResult:
    current: DeductionBreakdown
    new: DeductionBreakdown

    @property
    def current_take_home(self) -> float:
        return self.current.take_home

    @property
    def new_take_home(self) -> float:
        return self.new.take_home

    @property
    def delta(self) -> float:
        return self.new_take_home - self.current_take_home

    @property
    def degenerate(self) -> bool:
        return self.new.taxable_income < 0


def parse_age_bracket(value: str) -> str:
    """Normalize "40-49" / "40〜49歳" → "40-49". Raises InvalidAgeBracketError."""
    s = str(value).strip()
    if s in AGE_BRACKETS:
        return s
    if s in AGE_BRACKET_LABELS:
        return AGE_BRACKET_LABELS[s]
    raise InvalidAgeBracketError(
        f"年齢区分「{value}」は対象外です（{', '.join(AGE_BRACKETS)}）"
    )


def validate_input(inp: CalculationInput) -> None:
    """Validate enumerations, signs and day counts. Raises ValueError subclasses."""
    if inp.age_bracket not in AGE_BRACKETS:
        raise InvalidAgeBracketError(
            f"年齢区分「{inp.age_bracket}」は対象外です（{', '.join(AGE_BRACKETS)}）"
        )
    for name in (
        "annual_income",
        "domestic_per_diem",
        "overseas_per_diem",
        "domestic_trip_days",
        "overseas_trip_days",
    ):
        value = getattr(inp, name)
        if not math.isfinite(value):
            raise NonFiniteInputError(f"{name}は有限の数値である必要があります（{value}）")
        if value < 0:
            raise NegativeInputError(f"{name}は0以上である必要があります（{value}）")
    for name in ("domestic_trip_days", "overseas_trip_days"):
        value = getattr(inp, name)
        if value != int(value):
            raise NonIntegralDaysError(f"{name}は整数の日数である必要があります（{value}）")
    if not math.isfinite(calc_non_taxable_allowance(inp)):
        raise NonFiniteInputError("非課税日当合計が有限の数値になりません")


def needs_care_insurance(age_bracket: str) -> bool:
    return age_bracket in CARE_INSURANCE_BRACKETS


def calc_non_taxable_allowance(inp: CalculationInput) -> float:
    """Annual non-taxable per-diem total (国内日当×日数 + 海外日当×日数)."""
    return (
        inp.domestic_per_diem * inp.domestic_trip_days
        + inp.overseas_per_diem * inp.overseas_trip_days
    )


def calc_deductions(
    taxable_income: float,
    needs_care: bool,
    rates: RateTable = DEFAULT_RATES,
    non_taxable_allowance: float = 0.0,
) -> DeductionBreakdown:
    """One deduction pass over *taxable_income*."""
    health, pension, employment, care = calc_social_insurance(taxable_income, needs_care, rates)
    return DeductionBreakdown(
        taxable_income=taxable_income,
        health_insurance=health,
        pension_insurance=pension,
        employment_insurance=employment,
        care_insurance=care,
        income_tax=progressive_income_tax(taxable_income, rates.income_tax_brackets),
        resident_tax=calc_resident_tax(taxable_income, rates),
        non_taxable_allowance=non_taxable_allowance,
    )


def compute_delta(inp: CalculationInput, rates: RateTable = DEFAULT_RATES) -> CalculationResult:
    """Compare take-home pay without and with the non-taxable per-diem.

    Amounts are carried unrounded; round at display time (see formatting).
    Emits DegenerateAllowanceWarning when the allowance exceeds income.
    """
    validate_input(inp)
    needs_care = needs_care_insurance(inp.age_bracket)
    allowance = calc_non_taxable_allowance(inp)

    current = calc_deductions(inp.annual_income, needs_care, rates)
    new = calc_deductions(inp.annual_income - allowance, needs_care, rates, allowance)

    if new.taxable_income < 0:
        warnings.warn(
            f"非課税日当{allowance:,.0f}円が年収{inp.annual_income:,.0f}円を超えています"
            "（課税所得がマイナス）",
            DegenerateAllowanceWarning,
            stacklevel=2,
        )
    return CalculationResult(current=current, new=new)
