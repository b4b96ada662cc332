"""Per-position travel expense schedule (出張旅費規程 第7条)."""

from dataclasses import dataclass, fields

from travel_allowance_jp.calculator import CalculationInput


@dataclass(frozen=True)
class Position:
    """One row of the regulation table (円/日, 支度料は円/回)."""

    name: str
    domestic_daily_allowance: float = 0
    domestic_accommodation: float = 0
    domestic_transportation: float = 0
    overseas_daily_allowance: float = 0
    overseas_accommodation: float = 0
    overseas_transportation: float = 0
    overseas_preparation_fee: float = 0


DEFAULT_POSITIONS: tuple[Position, ...] = (
    Position("代表取締役", 8000, 15000, 3000, 15000, 25000, 5000, 10000),
    Position("取締役", 7000, 12000, 2500, 12000, 20000, 4000, 8000),
    Position("執行役員", 6000, 10000, 2000, 10000, 15000, 3000, 6000),
    Position("従業員", 5000, 8000, 1500, 8000, 12000, 2500, 5000),
)


def validate_positions(positions: tuple[Position, ...] | list[Position]) -> list[str]:
    """Validate regulation rows. Returns list of error messages."""
    errors = []
    if not positions:
        errors.append("役職が1つもありません")
    seen = set()
    for pos in positions:
        if not pos.name.strip():
            errors.append("役職名が空です")
        elif pos.name in seen:
            errors.append(f"役職名「{pos.name}」が重複しています")
        seen.add(pos.name)
        for f in fields(pos):
            if f.name == "name":
                continue
            if getattr(pos, f.name) < 0:
                errors.append(f"{pos.name}: {f.name}が負です")
    return errors


def check_positions(positions) -> None:
    """Raise ValueError listing every problem validate_positions() finds."""
    errors = validate_positions(positions)
    if errors:
        raise ValueError("出張旅費規程が不正です: " + "; ".join(errors))


def find_position(name: str, positions=DEFAULT_POSITIONS) -> Position:
    """Look up a position by name. Raises ValueError if not found."""
    check_positions(positions)
    for pos in positions:
        if pos.name == name:
            return pos
    names = ", ".join(p.name for p in positions)
    raise ValueError(f"役職「{name}」は規程にありません（{names}）")


def input_for_position(
    position: Position,
    age_bracket: str,
    annual_income: float,
    domestic_trip_days: int = 0,
    overseas_trip_days: int = 0,
) -> CalculationInput:
    """Pre-populate a CalculationInput with the position's daily allowances."""
    return CalculationInput(
        age_bracket=age_bracket,
        annual_income=annual_income,
        domestic_per_diem=position.domestic_daily_allowance,
        overseas_per_diem=position.overseas_daily_allowance,
        domestic_trip_days=domestic_trip_days,
        overseas_trip_days=overseas_trip_days,
    )
