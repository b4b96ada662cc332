"""CLI entry point for a single take-home comparison (導入前 vs 導入後)."""

import sys

from travel_allowance_jp.calculator import (
    CalculationInput,
    CalculationResult,
    calc_non_taxable_allowance,
    compute_delta,
)
from travel_allowance_jp.config import build_input, build_rates, parse_args
from travel_allowance_jp.formatting import deduction_rows, fmt_deduction, fmt_signed_yen, fmt_yen


def _print_header(inp: CalculationInput, fiscal_year: int):
    allowance = calc_non_taxable_allowance(inp)
    print("=" * 70)
    print(f"出張日当 節税シミュレーション（{fiscal_year}年度税率）")
    print(f"  年齢区分: {inp.age_bracket} / 額面年収: {fmt_yen(inp.annual_income)}")
    print(
        f"  国内日当: {fmt_yen(inp.domestic_per_diem)} × {inp.domestic_trip_days}日"
        f" / 海外日当: {fmt_yen(inp.overseas_per_diem)} × {inp.overseas_trip_days}日"
    )
    print(f"  非課税日当合計: {fmt_yen(allowance)}")
    print("=" * 70)
    print()


def _print_row(label: str, current: str, new: str):
    print(f"{label:<16} {current:>16} {new:>16}")


def print_comparison_table(result: CalculationResult):
    cur, new = result.current, result.new
    print("【詳細比較表】")
    print("-" * 70)
    _print_row("項目", "導入前手取り", "導入後手取り")
    print("-" * 70)
    _print_row("年間所得", fmt_yen(cur.taxable_income), fmt_yen(new.taxable_income))
    for label, attr in deduction_rows(cur.care_insurance != 0):
        _print_row(label, fmt_deduction(getattr(cur, attr)), fmt_deduction(getattr(new, attr)))
    _print_row("非課税出張日当", "―", fmt_signed_yen(new.non_taxable_allowance))
    print("-" * 70)
    _print_row("手取り金額", fmt_yen(result.current_take_home), fmt_yen(result.new_take_home))
    print("-" * 70)


def _print_summary(result: CalculationResult):
    print()
    print(f"  現在の手取り金額: {fmt_yen(result.current_take_home)}")
    print(f"  出張日当導入後:   {fmt_yen(result.new_take_home)}")
    print(f"  年間節税効果:     {fmt_signed_yen(result.delta)}")
    if result.degenerate:
        print("  ⚠ 非課税日当が年収を超えています（課税所得がマイナス）。入力を見直してください。")


def main():
    """Execute a single comparison"""
    r, _ = parse_args("出張日当 節税シミュレーション")
    try:
        inp = build_input(r)
        rates = build_rates(r)
        result = compute_delta(inp, rates)
    except ValueError as e:
        print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)

    _print_header(inp, rates.fiscal_year)
    print_comparison_table(result)
    _print_summary(result)


if __name__ == "__main__":
    main()
