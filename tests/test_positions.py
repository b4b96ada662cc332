"""Tests for the travel regulation position table and comparisons."""

import pytest
from travel_allowance_jp import (
    DEFAULT_POSITIONS,
    CalculationInput,
    Position,
    check_positions,
    compare_positions,
    find_position,
    input_for_position,
    sweep_trip_days,
    validate_positions,
)


class TestDefaultPositions:
    def test_four_positions(self):
        assert [p.name for p in DEFAULT_POSITIONS] == ["代表取締役", "取締役", "執行役員", "従業員"]

    def test_daily_allowances(self):
        assert [p.domestic_daily_allowance for p in DEFAULT_POSITIONS] == [8000, 7000, 6000, 5000]
        assert [p.overseas_daily_allowance for p in DEFAULT_POSITIONS] == [15000, 12000, 10000, 8000]

    def test_valid(self):
        assert validate_positions(DEFAULT_POSITIONS) == []


class TestValidatePositions:
    def test_empty(self):
        assert validate_positions([]) == ["役職が1つもありません"]

    def test_blank_name(self):
        errors = validate_positions([Position(" ")])
        assert errors == ["役職名が空です"]

    def test_duplicate_name(self):
        errors = validate_positions([Position("部長"), Position("部長")])
        assert any("重複" in e for e in errors)

    def test_negative_amount(self):
        errors = validate_positions([Position("部長", domestic_accommodation=-1)])
        assert errors == ["部長: domestic_accommodationが負です"]


class TestCheckPositions:
    def test_valid(self):
        check_positions(DEFAULT_POSITIONS)

    def test_joins_errors(self):
        with pytest.raises(ValueError, match="重複.*負"):
            check_positions([Position("部長"), Position("部長", domestic_daily_allowance=-1)])


class TestFindPosition:
    def test_found(self):
        assert find_position("取締役").domestic_daily_allowance == 7000

    def test_not_found(self):
        with pytest.raises(ValueError, match="部長"):
            find_position("部長")

    def test_invalid_custom_positions(self):
        with pytest.raises(ValueError, match="重複"):
            find_position("部長", [Position("部長", 4000), Position("部長", 3000)])


class TestInputForPosition:
    def test_uses_daily_allowances(self):
        inp = input_for_position(find_position("代表取締役"), "50-59", 12_000_000, 40, 10)
        assert inp == CalculationInput(
            age_bracket="50-59",
            annual_income=12_000_000,
            domestic_per_diem=8000,
            overseas_per_diem=15000,
            domestic_trip_days=40,
            overseas_trip_days=10,
        )


class TestComparePositions:
    def test_one_result_per_position(self):
        results = compare_positions("30-39", 10_000_000, domestic_trip_days=50)
        assert [p.name for p, _ in results] == [p.name for p in DEFAULT_POSITIONS]

    def test_higher_allowance_saves_more(self):
        results = compare_positions("30-39", 10_000_000, domestic_trip_days=50, overseas_trip_days=5)
        deltas = [r.delta for _, r in results]
        assert deltas == sorted(deltas, reverse=True)

    def test_employee_matches_single_calculation(self):
        results = compare_positions("30-39", 10_000_000, domestic_trip_days=50)
        _, employee = results[-1]
        assert employee.delta == pytest.approx(143_475)

    def test_custom_positions(self):
        results = compare_positions("30-39", 10_000_000, 50, positions=[Position("部長", 6000)])
        assert results[0][1].new.non_taxable_allowance == pytest.approx(300_000)

    def test_invalid_positions_rejected(self):
        with pytest.raises(ValueError, match="domestic_daily_allowanceが負"):
            compare_positions("30-39", 10_000_000, 50, positions=[Position("部長", -5000)])

    def test_empty_positions_rejected(self):
        with pytest.raises(ValueError, match="役職が1つもありません"):
            compare_positions("30-39", 10_000_000, 50, positions=[])


class TestSweepTripDays:
    def setup_method(self):
        self.inp = CalculationInput("30-39", 10_000_000, domestic_per_diem=5000)

    def test_day_points(self):
        sweep = sweep_trip_days(self.inp, max_days=25, step=10)
        assert [d for d, _ in sweep] == [0, 10, 20, 25]

    def test_starts_at_zero_delta(self):
        sweep = sweep_trip_days(self.inp, max_days=100, step=50)
        assert sweep[0][1].delta == pytest.approx(0)
        assert sweep[-1][1].delta > sweep[1][1].delta > 0

    def test_invalid_step(self):
        with pytest.raises(ValueError, match="step"):
            sweep_trip_days(self.inp, step=0)

    def test_invalid_max_days(self):
        with pytest.raises(ValueError, match="max_days"):
            sweep_trip_days(self.inp, max_days=-1)
