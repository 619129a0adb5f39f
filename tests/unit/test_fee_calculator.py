"""Unit tests for admin fee pricing."""

import pytest

from app.models.payment_config import PaymentConfig
from app.services.fee_calculator import calculate_admin_fee, distinct_periods


def _config(**kwargs) -> PaymentConfig:
    values = {"payment_fee": 5000, "is_fixed_fee": False, "min_month_discount": 6, "max_fee": 20000}
    values.update(kwargs)
    return PaymentConfig(**values)


def _months(n, year=2025):
    return [(m, year) for m in range(1, n + 1)]


def test_no_config_means_no_fee():
    assert calculate_admin_fee(_months(3), None) == 0


def test_fixed_fee_ignores_period_count():
    config = _config(is_fixed_fee=True)
    assert calculate_admin_fee(_months(1), config) == 5000
    assert calculate_admin_fee(_months(12), config) == 5000


def test_below_threshold_charges_per_period():
    assert calculate_admin_fee(_months(3), _config()) == 15000


def test_at_threshold_uses_capped_fee():
    assert calculate_admin_fee(_months(6), _config()) == 20000
    assert calculate_admin_fee(_months(12), _config()) == 20000


def test_missing_cap_falls_back_to_per_period():
    assert calculate_admin_fee(_months(6), _config(max_fee=None)) == 30000
    assert calculate_admin_fee(_months(6), _config(max_fee=0)) == 30000


def test_periods_are_counted_distinct():
    periods = [(1, 2025), (1, 2025), (2, 2025), (1, 2026)]
    assert distinct_periods(periods) == {(1, 2025), (2, 2025), (1, 2026)}
    assert calculate_admin_fee(periods, _config()) == 15000


@pytest.mark.parametrize("threshold", [None, 0, -1])
def test_unset_threshold_defaults_to_six(threshold):
    config = _config(min_month_discount=threshold)
    assert calculate_admin_fee(_months(5), config) == 25000
    assert calculate_admin_fee(_months(6), config) == 20000


def test_fee_is_never_negative():
    assert calculate_admin_fee(_months(2), _config(payment_fee=-100)) == 0
    assert calculate_admin_fee(_months(7), _config(max_fee=-5)) == 0


def test_empty_periods_cost_nothing():
    assert calculate_admin_fee([], _config()) == 0
