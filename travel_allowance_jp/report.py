"""Template-based report generator.

Builds a ReportContext from calculation results and renders a Markdown report
using Python f-strings (no Jinja2 dependency).
"""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from pathlib import Path

from travel_allowance_jp.calculator import (
    CalculationInput,
    CalculationResult,
    calc_non_taxable_allowance,
    compute_delta,
)
from travel_allowance_jp.comparison import compare_positions, sweep_trip_days
from travel_allowance_jp.config import DEFAULTS, build_input, build_rates, load_config, resolve
from travel_allowance_jp.formatting import deduction_rows, fmt_deduction, fmt_signed_yen, fmt_yen
from travel_allowance_jp.positions import Position
from travel_allowance_jp.rates import RateTable
from travel_allowance_jp.tax import calc_marginal_income_tax_rate


def fmt_pct(v: float) -> str:
    """0.0494 → "4.94%" """
    return f"{v * 100:.2f}%"


@dataclass
class ReportContext:
    inp: CalculationInput
    rates: RateTable
    position_name: str

    result: CalculationResult
    position_results: list[tuple[Position, CalculationResult]]
    sweep: list[tuple[int, CalculationResult]]

    # Chart paths (None → charts skipped)
    chart_paths: dict[str, Path] | None = None


def _resolve_config(config_path: Path | None) -> dict:
    """Load and resolve config without CLI args."""
    config = load_config(config_path)
    ns = argparse.Namespace(**{k: None for k in DEFAULTS})
    return resolve(ns, config)


def build_report_context(
    config_path: Path | None,
    name: str = "",
    no_charts: bool = False,
    chart_dir: Path = Path("reports/charts"),
    max_days: int = 100,
    step: int = 10,
) -> ReportContext:
    """Run all calculations and build a complete report context."""
    r = _resolve_config(config_path)
    inp = build_input(r)
    rates = build_rates(r)

    print("手取り比較...", file=sys.stderr)
    result = compute_delta(inp, rates)
    print("役職別比較...", file=sys.stderr)
    position_results = compare_positions(
        inp.age_bracket, inp.annual_income,
        inp.domestic_trip_days, inp.overseas_trip_days, rates=rates,
    )
    sweep = sweep_trip_days(inp, max_days, step, rates)

    chart_paths = None
    if not no_charts:
        from travel_allowance_jp.charts import plot_deductions, plot_positions, plot_trip_sweep

        print("チャート生成...", file=sys.stderr)
        chart_paths = {
            "deductions": plot_deductions(result, chart_dir, name=name),
            "trip_sweep": plot_trip_sweep(sweep, chart_dir, name=name),
            "positions": plot_positions(position_results, chart_dir, name=name),
        }

    return ReportContext(
        inp=inp,
        rates=rates,
        position_name=r["position"],
        result=result,
        position_results=position_results,
        sweep=sweep,
        chart_paths=chart_paths,
    )


def _render_title(ctx: ReportContext) -> str:
    return f"## 出張日当制度導入による節税効果シミュレーション（{ctx.rates.fiscal_year}年度）\n\n---"


def _render_ch1_conditions(ctx: ReportContext) -> str:
    inp = ctx.inp
    allowance = calc_non_taxable_allowance(inp)
    lines = [
        "\n## 第1章：前提条件\n",
        "| 項目 | 値 |",
        "|------|-----|",
        f"| 年齢区分 | {inp.age_bracket} |",
        f"| 額面年収 | {fmt_yen(inp.annual_income)} |",
        f"| 国内出張日当 | {fmt_yen(inp.domestic_per_diem)} × {inp.domestic_trip_days}日 |",
        f"| 海外出張日当 | {fmt_yen(inp.overseas_per_diem)} × {inp.overseas_trip_days}日 |",
        f"| 非課税日当合計 | {fmt_yen(allowance)} |",
        "",
        "### 1.1 適用料率\n",
        "| 項目 | 料率 |",
        "|------|------|",
        f"| 健康保険 | {fmt_pct(ctx.rates.health_insurance)} |",
        f"| 厚生年金 | {fmt_pct(ctx.rates.pension_insurance)} |",
        f"| 雇用保険 | {fmt_pct(ctx.rates.employment_insurance)} |",
        f"| 介護保険（40〜64歳） | {fmt_pct(ctx.rates.care_insurance)} |",
        f"| 住民税 | {fmt_pct(ctx.rates.resident_tax)} |",
        f"| 限界税率（所得税+住民税、導入前） | "
        f"{fmt_pct(calc_marginal_income_tax_rate(ctx.result.current.taxable_income, ctx.rates))} |",
        "",
        "### 1.2 所得税率表\n",
        "| 課税所得 | 税率 |",
        "|----------|-----:|",
    ]
    for lower, (upper, rate, _) in zip(ctx.rates.bracket_lower_bounds(), ctx.rates.income_tax_brackets):
        upper_text = "" if math.isinf(upper) else fmt_yen(upper)
        lines.append(f"| {fmt_yen(lower)}〜{upper_text} | {fmt_pct(rate)} |")
    return "\n".join(lines)


def _render_ch2_comparison(ctx: ReportContext) -> str:
    res = ctx.result
    cur, new = res.current, res.new
    lines = [
        "\n## 第2章：詳細比較表\n",
        "| 項目 | 導入前手取り | 導入後手取り |",
        "|------|-------------:|-------------:|",
        f"| 年間所得 | {fmt_yen(cur.taxable_income)} | {fmt_yen(new.taxable_income)} |",
    ]
    for label, attr in deduction_rows(cur.care_insurance != 0):
        lines.append(
            f"| {label} | {fmt_deduction(getattr(cur, attr))} | {fmt_deduction(getattr(new, attr))} |"
        )
    lines += [
        f"| 非課税出張日当 | ― | {fmt_signed_yen(new.non_taxable_allowance)} |",
        f"| **手取り金額** | **{fmt_yen(res.current_take_home)}** | **{fmt_yen(res.new_take_home)}** |",
        "",
        f"**年間節税効果: {fmt_signed_yen(res.delta)}**",
    ]
    if res.degenerate:
        lines += ["", "> ⚠ 非課税日当が年収を超えています（課税所得がマイナス）。入力を見直してください。"]
    if ctx.chart_paths:
        lines += ["", f"![控除項目の比較]({ctx.chart_paths['deductions']})"]
    return "\n".join(lines)


def _render_ch3_positions(ctx: ReportContext) -> str:
    lines = [
        "\n## 第3章：役職別の節税効果\n",
        f"同じ年収・出張日数で、出張旅費規程の各役職の日当を適用した場合（現在の設定: {ctx.position_name}）。\n",
        "| 役職 | 国内日当 | 海外日当 | 非課税日当合計 | 年間節税効果 |",
        "|------|---------:|---------:|---------------:|-------------:|",
    ]
    for pos, res in ctx.position_results:
        lines.append(
            f"| {pos.name} | {fmt_yen(pos.domestic_daily_allowance)} | "
            f"{fmt_yen(pos.overseas_daily_allowance)} | "
            f"{fmt_yen(res.new.non_taxable_allowance)} | {fmt_signed_yen(res.delta)} |"
        )
    if ctx.chart_paths:
        lines += ["", f"![役職別の節税効果]({ctx.chart_paths['positions']})"]
    return "\n".join(lines)


def _render_ch4_sweep(ctx: ReportContext) -> str:
    lines = [
        "\n## 第4章：出張日数と節税効果\n",
        "| 国内出張日数 | 非課税日当合計 | 年間節税効果 |",
        "|-------------:|---------------:|-------------:|",
    ]
    for days, res in ctx.sweep:
        mark = " ⚠" if res.degenerate else ""
        lines.append(
            f"| {days}日 | {fmt_yen(res.new.non_taxable_allowance)} | {fmt_signed_yen(res.delta)}{mark} |"
        )
    if ctx.chart_paths:
        lines += ["", f"![出張日数と節税効果]({ctx.chart_paths['trip_sweep']})"]
    return "\n".join(lines)


def render_report(ctx: ReportContext) -> str:
    """Render a complete Markdown report from a ReportContext."""
    sections = [
        _render_title(ctx),
        _render_ch1_conditions(ctx),
        _render_ch2_comparison(ctx),
        _render_ch3_positions(ctx),
        _render_ch4_sweep(ctx),
    ]
    return "\n".join(s for s in sections if s) + "\n"
