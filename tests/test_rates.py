"""Tests for RateTable and TOML rate table loading."""

import math

import pytest
from travel_allowance_jp.rates import (
    DEFAULT_RATES,
    RateTable,
    RateTableError,
    load_rate_table,
    validate_brackets,
    validate_rates,
)


class TestDefaultRates:
    def test_insurance_rates(self):
        assert DEFAULT_RATES.health_insurance == 0.0494
        assert DEFAULT_RATES.pension_insurance == 0.0915
        assert DEFAULT_RATES.employment_insurance == 0.003
        assert DEFAULT_RATES.care_insurance == 0.0159
        assert DEFAULT_RATES.resident_tax == 0.10

    def test_seven_brackets(self):
        assert len(DEFAULT_RATES.income_tax_brackets) == 7
        assert math.isinf(DEFAULT_RATES.income_tax_brackets[-1][0])

    def test_bases_are_cumulative(self):
        """各段階の累積税額 = 前段階の累積税額 + 前段階の幅 × 税率"""
        brackets = DEFAULT_RATES.income_tax_brackets
        lowers = DEFAULT_RATES.bracket_lower_bounds()
        for i in range(1, len(brackets)):
            prev_upper, prev_rate, prev_base = brackets[i - 1]
            expected = prev_base + (prev_upper - lowers[i - 1]) * prev_rate
            assert brackets[i][2] == pytest.approx(expected)

    def test_lower_bounds(self):
        assert DEFAULT_RATES.bracket_lower_bounds()[:3] == [0.0, 1_950_000, 3_300_000]


class TestValidateBrackets:
    def test_empty(self):
        with pytest.raises(RateTableError, match="空"):
            validate_brackets(())

    def test_not_increasing(self):
        with pytest.raises(RateTableError, match="昇順"):
            validate_brackets(((2_000_000, 0.05, 0), (1_000_000, 0.1, 0), (float("inf"), 0.2, 0)))

    def test_last_not_inf(self):
        with pytest.raises(RateTableError, match="inf"):
            validate_brackets(((1_000_000, 0.05, 0),))

    def test_wrong_row_length(self):
        with pytest.raises(RateTableError, match="3要素"):
            validate_brackets(((1_000_000, 0.05),))

    def test_negative_rate(self):
        with pytest.raises(RateTableError, match="負"):
            validate_brackets(((float("inf"), -0.05, 0),))

    def test_rate_table_validates_on_construction(self):
        with pytest.raises(RateTableError):
            RateTable(income_tax_brackets=())


class TestValidateRates:
    def test_default_valid(self):
        validate_rates(DEFAULT_RATES)

    @pytest.mark.parametrize("value", ["0.05", True, None])
    def test_non_numeric_rate(self, value):
        with pytest.raises(RateTableError, match="health_insurance"):
            RateTable(health_insurance=value)

    @pytest.mark.parametrize("value", [-0.01, float("nan"), float("inf")])
    def test_out_of_range_rate(self, value):
        with pytest.raises(RateTableError, match="resident_tax"):
            RateTable(resident_tax=value)

    def test_fiscal_year_must_be_int(self):
        with pytest.raises(RateTableError, match="fiscal_year"):
            RateTable(fiscal_year="2026")

    def test_integer_rate_accepted(self):
        assert RateTable(employment_insurance=0).employment_insurance == 0


class TestLoadRateTable:
    def test_partial_override(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text("fiscal_year = 2026\nhealth_insurance = 0.05\n", encoding="utf-8")
        rates = load_rate_table(p)
        assert rates.fiscal_year == 2026
        assert rates.health_insurance == 0.05
        assert rates.pension_insurance == DEFAULT_RATES.pension_insurance
        assert rates.income_tax_brackets == DEFAULT_RATES.income_tax_brackets

    def test_brackets_override(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text(
            "income_tax_brackets = [[1000000, 0.10, 0], [inf, 0.20, 100000]]\n",
            encoding="utf-8",
        )
        rates = load_rate_table(p)
        assert rates.income_tax_brackets == ((1_000_000.0, 0.10, 0.0), (math.inf, 0.20, 100_000.0))

    def test_unknown_key(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text("healthInsurance = 0.05\n", encoding="utf-8")
        with pytest.raises(RateTableError, match="healthInsurance"):
            load_rate_table(p)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RateTableError, match="見つかりません"):
            load_rate_table(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text("fiscal_year = = 2026\n", encoding="utf-8")
        with pytest.raises(RateTableError, match="読み込みに失敗"):
            load_rate_table(p)

    def test_string_rate_in_file(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text('health_insurance = "0.05"\n', encoding="utf-8")
        with pytest.raises(RateTableError, match="health_insurance"):
            load_rate_table(p)

    def test_string_in_brackets(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text('income_tax_brackets = [["abc", 0.10, 0]]\n', encoding="utf-8")
        with pytest.raises(RateTableError, match="数値ではありません"):
            load_rate_table(p)

    def test_invalid_brackets(self, tmp_path):
        p = tmp_path / "rates.toml"
        p.write_text("income_tax_brackets = [[1000000, 0.10, 0]]\n", encoding="utf-8")
        with pytest.raises(RateTableError, match="inf"):
            load_rate_table(p)
