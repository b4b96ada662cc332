"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from travel_allowance_jp.calculator import compute_delta
from travel_allowance_jp.charts import plot_deductions, plot_positions, plot_trip_sweep
from travel_allowance_jp.comparison import compare_positions, sweep_trip_days
from travel_allowance_jp.config import build_input, build_rates, create_parser, load_config, resolve


def _build_parser():
    parser = create_parser("出張日当 節税シミュレーション チャート生成")
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="出力ディレクトリ (default: reports/charts)",
    )
    parser.add_argument(
        "--max-days", type=int, default=100,
        help="出張日数スイープの上限 (default: 100)",
    )
    parser.add_argument(
        "--step", type=int, default=10,
        help="出張日数スイープの刻み (default: 10)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: ceo → deductions-ceo.png）",
    )
    return parser


def main():
    parser = _build_parser()
    args = parser.parse_args()
    config_file = load_config(args.config)
    r = resolve(args, config_file)

    try:
        inp = build_input(r)
        rates = build_rates(r)
        result = compute_delta(inp, rates)
        sweep = sweep_trip_days(inp, args.max_days, args.step, rates)
        comparison = compare_positions(
            inp.age_bracket, inp.annual_income,
            inp.domestic_trip_days, inp.overseas_trip_days, rates=rates,
        )
    except ValueError as e:
        print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)

    print("控除項目チャート...", file=sys.stderr)
    path = plot_deductions(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    print(f"出張日数スイープ（0〜{args.max_days}日）...", file=sys.stderr)
    path = plot_trip_sweep(sweep, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    print("役職別チャート...", file=sys.stderr)
    path = plot_positions(comparison, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
