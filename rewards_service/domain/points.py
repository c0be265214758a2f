"""Tiered points formula - core business logic for rewards"""

from decimal import Decimal
from typing import Union

REWARD_FLOOR = Decimal("50")
UPPER_TIER_THRESHOLD = Decimal("100")
UPPER_TIER_MULTIPLIER = 2

Amount = Union[Decimal, int, float]


def to_decimal(amount: Amount) -> Decimal:
    """Convert an amount to Decimal without binary float drift (29.99 stays 29.99)"""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def calculate_points(amount: Amount) -> int:
    """
    Calculate reward points earned by a single purchase.

    Tiers (both evaluated on the original amount):
    - 2 points per dollar spent over $100
    - 1 point per dollar spent between $50 and $100

    Each tier is truncated toward zero once, so partial dollars never
    round up. Amounts at or below the $50 floor (including zero and
    negative refunds) earn nothing.

    Example:
        $120 → 2 * 20 + 50 = 90 points
        $100.50 → int(0.50 * 2) + 50 = 51 points
    """
    value = to_decimal(amount)
    if value <= REWARD_FLOOR:
        return 0

    over_threshold = max(value - UPPER_TIER_THRESHOLD, Decimal(0))
    upper_tier = int(over_threshold * UPPER_TIER_MULTIPLIER)

    between = max(min(value, UPPER_TIER_THRESHOLD) - REWARD_FLOOR, Decimal(0))
    lower_tier = int(between)

    return upper_tier + lower_tier
