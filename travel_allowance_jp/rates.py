"""Statutory rate tables (社会保険料率・所得税率・住民税率)."""

import math
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

# 所得税累進税率テーブル（国税庁 令和7年分）
# (上限課税所得・円, 税率, 下限までの累積税額・円)
_INCOME_TAX_BRACKETS: tuple[tuple[float, float, float], ...] = (
    (1_950_000, 0.05, 0),
    (3_300_000, 0.10, 97_500),
    (6_950_000, 0.20, 232_500),
    (9_000_000, 0.23, 962_500),
    (18_000_000, 0.33, 1_434_000),
    (40_000_000, 0.40, 4_404_000),
    (float("inf"), 0.45, 13_204_000),
)


class RateTableError(ValueError):
    """Raised when a rate table file cannot be used."""


@dataclass(frozen=True)
class RateTable:
    """Statutory rates for one fiscal year (令和7年分が既定)."""

    fiscal_year: int = 2025

    # 被保険者負担分（額面に対する割合）
    health_insurance: float = 0.0494      # 健康保険
    pension_insurance: float = 0.0915     # 厚生年金
    employment_insurance: float = 0.003   # 雇用保険
    care_insurance: float = 0.0159        # 介護保険（40〜64歳のみ）

    resident_tax: float = 0.10  # 住民税率（一律10%）

    income_tax_brackets: tuple[tuple[float, float, float], ...] = field(
        default=_INCOME_TAX_BRACKETS
    )

    def __post_init__(self):
        validate_rates(self)
        validate_brackets(self.income_tax_brackets)

    def bracket_lower_bounds(self) -> list[float]:
        """Lower bound of each bracket (0 for the first)."""
        return [0.0] + [upper for upper, _, _ in self.income_tax_brackets[:-1]]


_SCALAR_RATES = (
    "health_insurance",
    "pension_insurance",
    "employment_insurance",
    "care_insurance",
    "resident_tax",
)


def validate_rates(rates: "RateTable") -> None:
    """Check fiscal year and scalar rates. Raises RateTableError."""
    if isinstance(rates.fiscal_year, bool) or not isinstance(rates.fiscal_year, int):
        raise RateTableError(f"fiscal_yearは整数である必要があります: {rates.fiscal_year!r}")
    for name in _SCALAR_RATES:
        value = getattr(rates, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RateTableError(f"{name}は数値である必要があります: {value!r}")
        if not math.isfinite(value) or value < 0:
            raise RateTableError(f"{name}は0以上の有限の数値である必要があります: {value}")


def validate_brackets(brackets) -> None:
    """Check that a bracket table is usable. Raises RateTableError."""
    if not brackets:
        raise RateTableError("所得税率テーブルが空です")
    prev = -math.inf
    for row in brackets:
        if len(row) != 3:
            raise RateTableError(f"所得税率テーブルの行は(上限, 税率, 累積税額)の3要素です: {row!r}")
        upper, rate, _ = row
        if upper <= prev:
            raise RateTableError(f"所得税率テーブルの上限が昇順ではありません: {upper}")
        if rate < 0:
            raise RateTableError(f"税率が負です: {rate}")
        prev = upper
    if not math.isinf(brackets[-1][0]):
        raise RateTableError("所得税率テーブルの最終行の上限は inf である必要があります")


DEFAULT_RATES = RateTable()

_RATE_KEYS = {f.name for f in fields(RateTable)}


def load_rate_table(path: Path, base: RateTable = DEFAULT_RATES) -> RateTable:
    """Load a TOML rate table, overriding any subset of *base*.

    Example::

        fiscal_year = 2026
        health_insurance = 0.0500
        income_tax_brackets = [[1950000, 0.05, 0], ..., [inf, 0.45, 13204000]]
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except FileNotFoundError:
        raise RateTableError(f"税率ファイルが見つかりません: {path}")
    except tomllib.TOMLDecodeError as e:
        raise RateTableError(f"税率ファイルの読み込みに失敗: {path}: {e}")

    unknown = set(raw) - _RATE_KEYS
    if unknown:
        raise RateTableError(f"未知のキー: {', '.join(sorted(unknown))}")

    if "income_tax_brackets" in raw:
        try:
            raw["income_tax_brackets"] = tuple(
                tuple(float(x) for x in row) for row in raw["income_tax_brackets"]
            )
        except (TypeError, ValueError) as e:
            raise RateTableError(f"所得税率テーブルの値が数値ではありません: {e}")
    return replace(base, **raw)
