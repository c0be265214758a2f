"""Unit tests for the tiered points formula"""

import math
import pytest
from decimal import Decimal
from rewards_service.domain.points import calculate_points


@pytest.mark.parametrize(
    "amount, expected",
    [
        (60.0, 10),  # 60 - 50
        (75.0, 25),  # 75 - 50
        (100.0, 50),  # all from the lower tier
        (120.0, 90),  # 2 * 20 + 50
        (200.0, 250),  # 2 * 100 + 50
    ],
)
def test_calculate_points_reference_amounts(amount, expected):
    """Test published examples"""
    assert calculate_points(amount) == expected


@pytest.mark.parametrize("amount", [50, 49.99, 0, -10, Decimal("-120.00"), Decimal("50.00")])
def test_calculate_points_at_or_below_floor(amount):
    """Test floor, zero and refunds earn nothing without raising"""
    assert calculate_points(amount) == 0


def test_calculate_points_just_above_floor():
    """Test fractions of a dollar are truncated in the lower tier"""
    assert calculate_points(50.01) == 0
    assert calculate_points(50.99) == 0
    assert calculate_points(51) == 1


def test_calculate_points_truncates_each_tier_once():
    """Test upper tier truncation happens after doubling"""
    # 0.5 over $100 doubles to exactly 1 point
    assert calculate_points(Decimal("100.50")) == 51
    # 0.49 over $100 doubles to 0.98, truncated to 0
    assert calculate_points(Decimal("100.49")) == 50
    assert calculate_points(Decimal("100.01")) == 50


def test_calculate_points_float_inputs_do_not_drift():
    """Test floats are read through their decimal representation"""
    assert calculate_points(100.15) == 50
    assert calculate_points(150.3) == 100 + 50
    assert calculate_points(29.99 * 3) == 39  # 89.97


@pytest.mark.parametrize("amount", ["50.01", "63.40", "75", "99.99", "100"])
def test_calculate_points_lower_tier_property(amount):
    """Test 50 < a <= 100 earns floor(a - 50)"""
    value = Decimal(amount)
    assert calculate_points(value) == math.floor(value - 50)


@pytest.mark.parametrize("amount", ["100.01", "100.50", "120", "150.75", "1234.56"])
def test_calculate_points_upper_tier_property(amount):
    """Test a > 100 earns floor(2 * (a - 100)) + 50"""
    value = Decimal(amount)
    assert calculate_points(value) == math.floor(2 * (value - 100)) + 50


def test_calculate_points_accepts_integers():
    assert calculate_points(120) == 90
