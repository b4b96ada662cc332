"""Chart generation for take-home comparison results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from travel_allowance_jp.calculator import CalculationResult
from travel_allowance_jp.formatting import deduction_rows
from travel_allowance_jp.positions import Position

COLOR_CURRENT = "#7f7f7f"  # gray
COLOR_NEW = "#2ca02c"      # green
COLOR_DELTA = "#ff7f0e"    # orange


def _setup_japanese_font():
    """Configure matplotlib to use a Japanese font."""
    system = platform.system()
    if system == "Darwin":
        font_family = "Hiragino Sans"
    elif system == "Linux":
        font_family = "Noto Sans CJK JP"
    else:
        font_family = "sans-serif"
    plt.rcParams["font.family"] = font_family
    plt.rcParams["axes.unicode_minus"] = False


def _format_yen_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x:,.0f}")
    )
    ax_right = ax.secondary_yaxis("right")
    ax_right.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 10000:,.0f}万" if x != 0 else "0")
    )
    ax_right.set_ylabel("")


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def plot_deductions(result: CalculationResult, output_path: Path, name: str = "") -> Path:
    """Grouped bar chart of each deduction line, before vs after the per-diem.

    Args:
        result: compute_delta() result.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "ceo" → "deductions-ceo.png").

    Returns:
        Path to the generated PNG file.
    """
    _setup_japanese_font()

    rows = deduction_rows(result.current.care_insurance != 0)
    labels = [label for label, _ in rows]
    current = [getattr(result.current, attr) for _, attr in rows]
    new = [getattr(result.new, attr) for _, attr in rows]

    fig, ax = plt.subplots(figsize=(12, 7))
    x = range(len(rows))
    width = 0.38
    ax.bar([i - width / 2 for i in x], current, width, label="導入前", color=COLOR_CURRENT)
    ax.bar([i + width / 2 for i in x], new, width, label="導入後", color=COLOR_NEW)

    ax.set_xticks(list(x))
    ax.set_xticklabels(labels)
    ax.set_ylabel("年間負担額（円）")
    ax.set_title(f"控除項目の比較（年間節税効果 {result.delta:+,.0f}円）")
    ax.legend(loc="upper right")
    ax.grid(True, axis="y", alpha=0.3)
    _format_yen_axis(ax)

    return _save(fig, output_path, "deductions", name)


def plot_trip_sweep(
    sweep: list[tuple[int, CalculationResult]], output_path: Path, name: str = "",
) -> Path:
    """Line chart of annual savings against domestic trip days.

    Args:
        sweep: sweep_trip_days() return value.
    """
    _setup_japanese_font()

    if not sweep:
        raise ValueError("No results for trip sweep chart")

    days = [d for d, _ in sweep]
    deltas = [r.delta for _, r in sweep]
    allowances = [r.new.non_taxable_allowance for _, r in sweep]

    fig, ax = plt.subplots(figsize=(12, 7))
    ax.plot(days, deltas, color=COLOR_DELTA, linewidth=2, marker="o", label="年間節税効果")
    ax.plot(days, allowances, color=COLOR_NEW, linewidth=1.5, linestyle="--", label="非課税日当合計")

    degenerate = [d for d, r in sweep if r.degenerate]
    if degenerate:
        ax.axvline(degenerate[0], color="#d62728", linewidth=1.5, linestyle=":")
        ax.annotate(
            f"{degenerate[0]}日〜 日当が年収超過",
            xy=(degenerate[0], ax.get_ylim()[1] * 0.9),
            fontsize=11, color="#d62728", ha="left",
            bbox=dict(boxstyle="round,pad=0.3", fc="white", ec="#d62728", alpha=0.9),
        )

    ax.set_xlabel("年間国内出張日数")
    ax.set_ylabel("金額（円）")
    ax.set_title("出張日数と節税効果")
    ax.axhline(0, color="black", linewidth=1.0)
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_yen_axis(ax)

    return _save(fig, output_path, "trip_sweep", name)


def plot_positions(
    comparison: list[tuple[Position, CalculationResult]], output_path: Path, name: str = "",
) -> Path:
    """Bar chart of annual savings per regulation position."""
    _setup_japanese_font()

    if not comparison:
        raise ValueError("No results for position chart")

    names = [p.name for p, _ in comparison]
    deltas = [r.delta for _, r in comparison]

    fig, ax = plt.subplots(figsize=(12, 7))
    bars = ax.bar(names, deltas, color=COLOR_DELTA)
    for bar, delta in zip(bars, deltas):
        ax.annotate(
            f"{delta:+,.0f}円",
            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
            ha="center", va="bottom", fontsize=11,
        )

    ax.set_ylabel("年間節税効果（円）")
    ax.set_title("役職別の節税効果")
    ax.grid(True, axis="y", alpha=0.3)
    _format_yen_axis(ax)

    return _save(fig, output_path, "positions", name)
