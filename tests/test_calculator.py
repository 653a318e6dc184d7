import math

import pytest

from co2_estimator.calculator import EmissionCalculator, round_half_up, to_number
from co2_estimator.config import EmissionConfig
from co2_estimator.domain.models import CarbonCreditConfig, PriceEstimate


def test_round_half_up_corrects_binary_representation():
    # 1.005 is stored as 1.00499999...
    assert round_half_up(1.005, 2) == 1.01
    assert round_half_up(2.5, 0) == 3
    assert round_half_up(0.00005, 4) == 0.0001


def test_round_half_up_leaves_huge_values_alone():
    assert round_half_up(1e308, 2) == 1e308


@pytest.mark.parametrize(
    "value, expected",
    [
        (12, 12.0),
        (12.5, 12.5),
        ("12.5", 12.5),
        (" 3 ", 3.0),
        ("", None),
        ("abc", None),
        (None, None),
        (True, None),
        ([1], None),
    ],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_to_number_int_beyond_float_range():
    assert to_number(10**400) == math.inf
    assert to_number(-(10**400)) == -math.inf


class TestCalculateEmission:
    def test_distance_times_factor(self, calculator):
        assert calculator.calculate_emission(100, "car") == 12.0
        assert calculator.calculate_emission(100, "bus") == 8.9
        assert calculator.calculate_emission(430, "truck") == 412.8

    def test_rounds_to_two_decimals(self, calculator):
        # 33.3 * 0.089 = 2.9637
        assert calculator.calculate_emission(33.3, "bus") == 2.96

    def test_zero_distance_is_zero(self, calculator):
        assert calculator.calculate_emission(0, "truck") == 0

    def test_bicycle_emits_nothing(self, calculator):
        assert calculator.calculate_emission(250, "bicycle") == 0

    def test_numeric_string_distance(self, calculator):
        assert calculator.calculate_emission("100", "car") == 12.0

    @pytest.mark.parametrize(
        "distance",
        [-1, float("nan"), float("inf"), "abc", None, True, 10**400, -(10**400)],
    )
    def test_invalid_distance_abstains(self, calculator, distance):
        assert calculator.calculate_emission(distance, "car") is None

    @pytest.mark.parametrize("mode", ["unknown-mode", "", None, "CAR"])
    def test_unknown_mode_abstains(self, calculator, mode):
        assert calculator.calculate_emission(100, mode) is None

    def test_non_finite_factor_abstains(self, credit_config):
        calc = EmissionCalculator(
            factors={"rocket": float("inf")}, carbon_credit=credit_config
        )
        assert calc.calculate_emission(10, "rocket") is None

    def test_huge_int_factor_abstains(self, credit_config):
        calc = EmissionCalculator(
            factors={"rocket": 10**400}, carbon_credit=credit_config
        )
        assert calc.calculate_emission(10, "rocket") is None
        assert calc.calculate_all_modes(10) == []

    def test_overflowing_product_abstains(self, calculator):
        big = EmissionCalculator(
            factors={"x": 1e10},
            carbon_credit=CarbonCreditConfig(1000, 50, 150),
        )
        assert big.calculate_emission(1e300, "x") is None


class TestCalculateAllModes:
    def test_sorted_greenest_first(self, calculator):
        results = calculator.calculate_all_modes(100)

        assert [r.mode for r in results] == ["bicycle", "bus", "car", "truck"]
        assert [r.emission_kg for r in results] == [0.0, 8.9, 12.0, 96.0]

    def test_percentage_vs_car(self, calculator):
        by_mode = {r.mode: r for r in calculator.calculate_all_modes(100)}

        assert by_mode["bicycle"].percentage_vs_car == 0
        assert by_mode["bus"].percentage_vs_car == 74.17
        assert by_mode["car"].percentage_vs_car == 100
        assert by_mode["truck"].percentage_vs_car == 800

    def test_one_entry_per_configured_mode(self, calculator):
        assert len(calculator.calculate_all_modes(1)) == len(calculator.modes)

    def test_zero_distance_has_no_percentage(self, calculator):
        results = calculator.calculate_all_modes(0)
        assert all(r.emission_kg == 0 for r in results)
        assert all(r.percentage_vs_car is None for r in results)

    def test_without_car_factor_percentage_is_none(self, credit_config):
        calc = EmissionCalculator(
            factors={"bus": 0.089, "bicycle": 0}, carbon_credit=credit_config
        )
        results = calc.calculate_all_modes(100)
        assert [r.mode for r in results] == ["bicycle", "bus"]
        assert all(r.percentage_vs_car is None for r in results)

    def test_ties_keep_configured_order(self, credit_config):
        calc = EmissionCalculator(
            factors={"a": 0.1, "b": 0.1, "c": 0.0, "car": 0.2},
            carbon_credit=credit_config,
        )
        assert [r.mode for r in calc.calculate_all_modes(10)] == ["c", "a", "b", "car"]

    def test_percentage_uses_unrounded_emissions(self, credit_config):
        calc = EmissionCalculator(
            factors={"car": 0.003, "moped": 0.001}, carbon_credit=credit_config
        )
        # rounded emissions would be 0.0 and 0.0; raw ratio is one third
        by_mode = {r.mode: r for r in calc.calculate_all_modes(1)}
        moped = by_mode["moped"]
        assert moped.emission_kg == 0
        assert moped.percentage_vs_car == 33.33

    @pytest.mark.parametrize("distance", [-5, float("nan"), "x", 10**400])
    def test_invalid_distance_abstains(self, calculator, distance):
        assert calculator.calculate_all_modes(distance) is None


class TestCalculateSavings:
    def test_savings_against_car(self, calculator):
        savings = calculator.calculate_savings(8.9, 12)
        assert savings.saved_kg == 3.1
        assert savings.percentage == 25.83

    def test_zero_baseline_has_no_percentage(self, calculator):
        savings = calculator.calculate_savings(10, 0)
        assert savings.saved_kg == -10
        assert savings.percentage is None

    def test_not_clamped_when_emitting_more(self, calculator):
        savings = calculator.calculate_savings(96, 12)
        assert savings.saved_kg == -84
        assert savings.percentage == -700
        assert not savings.is_positive

    @pytest.mark.parametrize(
        "emission, baseline",
        [(float("nan"), 1), (1, float("inf")), ("x", 1), (10**400, 1), (1, -(10**400))],
    )
    def test_non_finite_input_abstains(self, calculator, emission, baseline):
        assert calculator.calculate_savings(emission, baseline) is None


class TestCarbonCredits:
    def test_one_credit_per_tonne(self, calculator):
        assert calculator.calculate_carbon_credits(1000) == 1.0

    def test_four_decimal_precision(self, calculator):
        assert calculator.calculate_carbon_credits(12) == 0.012
        assert calculator.calculate_carbon_credits(0.12345) == 0.0001

    @pytest.mark.parametrize("emission", [-5, float("nan"), None, 10**400])
    def test_invalid_emission_abstains(self, calculator, emission):
        assert calculator.calculate_carbon_credits(emission) is None

    @pytest.mark.parametrize("kg_per_credit", [0, -1000, float("nan")])
    def test_invalid_kg_per_credit_abstains(self, kg_per_credit):
        calc = EmissionCalculator(
            factors={"car": 0.12},
            carbon_credit=CarbonCreditConfig(kg_per_credit, 50, 150),
        )
        assert calc.calculate_carbon_credits(100) is None


class TestCreditPrice:
    def test_price_range(self, calculator):
        assert calculator.estimate_credit_price(2) == PriceEstimate(
            min=100, max=300, average=200
        )

    def test_fractional_credits(self, calculator):
        price = calculator.estimate_credit_price(0.012)
        assert (price.min, price.max, price.average) == (0.6, 1.8, 1.2)

    def test_average_comes_from_rounded_bounds(self, calculator):
        price = calculator.estimate_credit_price(0.0123)
        assert price.average == round_half_up((price.min + price.max) / 2, 2)

    @pytest.mark.parametrize("credits", [-1, float("inf"), "abc", 10**400])
    def test_invalid_credits_abstain(self, calculator, credits):
        assert calculator.estimate_credit_price(credits) is None

    def test_non_finite_price_abstains(self):
        calc = EmissionCalculator(
            factors={"car": 0.12},
            carbon_credit=CarbonCreditConfig(1000, float("nan"), 150),
        )
        assert calc.estimate_credit_price(1) is None


def test_every_operation_is_idempotent(calculator):
    assert calculator.calculate_emission(123.4, "bus") == calculator.calculate_emission(
        123.4, "bus"
    )
    assert calculator.calculate_all_modes(77) == calculator.calculate_all_modes(77)
    assert calculator.calculate_savings(3, 9) == calculator.calculate_savings(3, 9)
    assert calculator.calculate_carbon_credits(55) == calculator.calculate_carbon_credits(55)
    assert calculator.estimate_credit_price(0.5) == calculator.estimate_credit_price(0.5)


def test_factor_table_cannot_be_mutated_through_calculator(credit_config):
    factors = {"car": 0.12}
    calc = EmissionCalculator(factors=factors, carbon_credit=credit_config)
    factors["car"] = 99

    assert calc.calculate_emission(100, "car") == 12.0
    with pytest.raises(TypeError):
        calc.factors["car"] = 1  # type: ignore[index]


def test_from_config_uses_defaults():
    calc = EmissionCalculator.from_config(EmissionConfig())
    assert calc.modes == ("bicycle", "car", "bus", "truck")
    assert calc.calculate_carbon_credits(500) == 0.5
    assert calc.calculate_emission(1, "truck") == 0.96
