"""Display-time rounding and yen formatting."""

import math


def round_yen(v: float) -> int:
    """Round half up to integer yen (0.5 → 1, -0.5 → 0)."""
    return math.floor(v + 0.5)


def fmt_yen(v: float) -> str:
    """1234567.4 → "¥1,234,567" """
    n = round_yen(v)
    if n < 0:
        return f"-¥{-n:,}"
    return f"¥{n:,}"


def fmt_signed_yen(v: float) -> str:
    """Always show a sign: "+¥143,475" / "-¥1,000" """
    n = round_yen(v)
    sign = "-" if n < 0 else "+"
    return f"{sign}¥{abs(n):,}"


def fmt_deduction(v: float) -> str:
    """Deduction lines are shown negated: 494000 → "-¥494,000" """
    return fmt_yen(-v)


# (表示ラベル, DeductionBreakdownの属性名)
DEDUCTION_ROWS = [
    ("健康保険料", "health_insurance"),
    ("厚生年金保険料", "pension_insurance"),
    ("雇用保険料", "employment_insurance"),
    ("介護保険料", "care_insurance"),
    ("所得税", "income_tax"),
    ("住民税", "resident_tax"),
]


def deduction_rows(care_applies: bool) -> list[tuple[str, str]]:
    """Rows to display; the care line is hidden when it does not apply."""
    return [(label, attr) for label, attr in DEDUCTION_ROWS
            if care_applies or attr != "care_insurance"]
