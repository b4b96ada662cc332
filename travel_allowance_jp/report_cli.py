"""CLI entry point for automated report generation."""

import argparse
import sys
from pathlib import Path

from travel_allowance_jp.report import build_report_context, render_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="出張日当 節税シミュレーション レポート自動生成")
    parser.add_argument(
        "--config", type=Path, default=None,
        help="TOML設定ファイル (default: config.toml)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: ceo → report-ceo.md）",
    )
    parser.add_argument(
        "--no-charts", action="store_true",
        help="チャートを生成しない（表のみ）",
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
        "--output", type=Path, default=Path("reports"),
        help="レポート出力ディレクトリ (default: reports)",
    )
    parser.add_argument(
        "--chart-dir", type=Path, default=Path("reports/charts"),
        help="チャート出力ディレクトリ (default: reports/charts)",
    )
    return parser


def main():
    parser = _build_parser()
    args = parser.parse_args()

    suffix = f"-{args.name}" if args.name else ""
    out_path = args.output / f"report{suffix}.md"
    print(f"レポート生成: {args.config or 'config.toml'} → {out_path}", file=sys.stderr)

    try:
        ctx = build_report_context(
            config_path=args.config,
            name=args.name,
            no_charts=args.no_charts,
            chart_dir=args.chart_dir,
            max_days=args.max_days,
            step=args.step,
        )
    except ValueError as e:
        print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)
    md = render_report(ctx)

    args.output.mkdir(parents=True, exist_ok=True)
    out_path.write_text(md, encoding="utf-8")
    print(f"  → {out_path}", file=sys.stderr)
    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
