"""Monthly aggregation of reward points"""

from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Tuple

from rewards_service.domain.models import Customer, RewardsResult, Transaction
from rewards_service.domain.points import calculate_points

MONTH_LABEL_FORMAT = "%B %Y"

YearMonth = Tuple[int, int]


def month_label(year: int, month: int) -> str:
    """Render a calendar month as e.g. 'December 2023'"""
    return date(year, month, 1).strftime(MONTH_LABEL_FORMAT)


def month_key_of(label: str) -> YearMonth:
    """Parse a month label back to (year, month)"""
    parsed = datetime.strptime(label, MONTH_LABEL_FORMAT)
    return parsed.year, parsed.month


def sort_newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Order by timestamp descending, id descending on ties"""
    return sorted(transactions, key=lambda t: (t.timestamp, t.id), reverse=True)


def aggregate(
    customer: Customer,
    transactions: List[Transaction],
    include_transactions: bool = False,
) -> RewardsResult:
    """
    Group eligible transactions by calendar month and sum their points.

    Requirements:
    - One entry per month with at least one transaction
    - Months ordered newest first; the dict keeps insertion order
    - Total equals the sum of the monthly values
    - Detail list (newest first) only when requested

    Input is assumed to be already filtered for eligibility.
    """
    points_by_month: Dict[YearMonth, int] = defaultdict(int)
    for txn in transactions:
        key = (txn.timestamp.year, txn.timestamp.month)
        points_by_month[key] += calculate_points(txn.amount)

    monthly_points: Dict[str, int] = {}
    for year, month in sorted(points_by_month, reverse=True):
        monthly_points[month_label(year, month)] = points_by_month[(year, month)]

    total_points = sum(monthly_points.values())

    return RewardsResult(
        customer=customer,
        total_points=total_points,
        monthly_points=monthly_points,
        transactions=sort_newest_first(transactions) if include_transactions else None,
    )
