"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from collections.abc import Callable
from pathlib import Path

from travel_allowance_jp.calculator import CalculationInput, parse_age_bracket
from travel_allowance_jp.positions import find_position
from travel_allowance_jp.rates import DEFAULT_RATES, RateTable, load_rate_table

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "age": "30-39",
    "annual_income": 5_000_000.0,
    "domestic_per_diem": None,   # None → 役職の日当を使用
    "overseas_per_diem": None,
    "domestic_trip_days": 0,
    "overseas_trip_days": 0,
    "position": "従業員",
    "rates": "",
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Normalize legacy camelCase keys from the web form export
    for legacy, key in (
        ("annualIncome", "annual_income"),
        ("domesticAllowance", "domestic_per_diem"),
        ("overseasAllowance", "overseas_per_diem"),
        ("domesticTrips", "domestic_trip_days"),
        ("overseasTrips", "overseas_trip_days"),
    ):
        if legacy in raw:
            v = raw.pop(legacy)
            raw.setdefault(key, v)
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared calculation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--age", type=str, default=None, help=f"年齢区分: 20-29, 30-39, 40-49, 50-59, 60-64, 65+ (default: {d['age']})")
    parser.add_argument("--annual-income", type=float, default=None, help=f"額面年収・円 (default: {d['annual_income']:,.0f})")
    parser.add_argument("--domestic-per-diem", type=float, default=None, help="国内出張日当・円/日 (default: 役職の規程額)")
    parser.add_argument("--overseas-per-diem", type=float, default=None, help="海外出張日当・円/日 (default: 役職の規程額)")
    parser.add_argument("--domestic-trip-days", type=int, default=None, help=f"年間国内出張日数 (default: {d['domestic_trip_days']})")
    parser.add_argument("--overseas-trip-days", type=int, default=None, help=f"年間海外出張日数 (default: {d['overseas_trip_days']})")
    parser.add_argument("--position", type=str, default=None, help=f"役職（日当の既定値に使用）(default: {d['position']})")
    parser.add_argument("--rates", type=str, default=None, help="税率テーブルTOML（年度改正用、省略時は令和7年分）")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_rates(r: dict) -> RateTable:
    """Rate table from resolved config ("" → DEFAULT_RATES)."""
    if not r["rates"]:
        return DEFAULT_RATES
    return load_rate_table(Path(r["rates"]))


def build_input(r: dict) -> CalculationInput:
    """Build CalculationInput from resolved config dict.

    Per-diem left unset falls back to the position's regulation amount.
    Day counts are passed through unchanged; compute_delta() rejects fractions.
    """
    domestic = r["domestic_per_diem"]
    overseas = r["overseas_per_diem"]
    if domestic is None or overseas is None:
        position = find_position(r["position"])
        if domestic is None:
            domestic = position.domestic_daily_allowance
        if overseas is None:
            overseas = position.overseas_daily_allowance
    return CalculationInput(
        age_bracket=parse_age_bracket(r["age"]),
        annual_income=float(r["annual_income"]),
        domestic_per_diem=float(domestic),
        overseas_per_diem=float(overseas),
        domestic_trip_days=r["domestic_trip_days"],
        overseas_trip_days=r["overseas_trip_days"],
    )


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace).
    namespace: raw argparse.Namespace (for extra CLI args added via add_args_fn).
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    return resolve(args, config), args
