"""Selection of transactions that count toward rewards"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Protocol, Sequence

from rewards_service.domain.exceptions import ComputationError
from rewards_service.domain.models import COMPLETED_STATUS, Transaction
from rewards_service.domain.points import REWARD_FLOOR, to_decimal

logger = logging.getLogger(__name__)


class TransactionLookup(Protocol):
    """Read access to a transaction store"""

    def find_eligible(
        self,
        customer_id: int,
        status: str,
        min_amount_exclusive: Decimal,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Sequence[Transaction]:
        ...


def is_eligible(
    txn: Transaction,
    customer_id: int,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> bool:
    """Single predicate every lookup shape must agree with"""
    if txn.timestamp is None:
        return False
    if txn.customer_id != customer_id or txn.status != COMPLETED_STATUS:
        return False
    if to_decimal(txn.amount) <= REWARD_FLOOR:
        return False
    if start_date is not None and txn.timestamp < start_date:
        return False
    if end_date is not None and txn.timestamp > end_date:
        return False
    return True


class EligibilityFilter:
    """Selects reward-eligible transactions for a customer and optional window"""

    def __init__(self, transaction_lookup: TransactionLookup):
        self.transaction_lookup = transaction_lookup

    def find_eligible(
        self,
        customer_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Transaction]:
        """
        Fetch eligible transactions for a customer.

        The lookup may push bounds down into its own query shapes; the
        predicate is re-applied here so every shape yields the same rows.
        An inverted window is an empty range, not an error.

        Returns:
            Eligible transactions in no particular order
        """
        if start_date is not None and end_date is not None and end_date < start_date:
            logger.debug(
                "Empty window for customer %s: end %s precedes start %s",
                customer_id,
                end_date,
                start_date,
            )
            return []

        candidates = self.transaction_lookup.find_eligible(
            customer_id,
            COMPLETED_STATUS,
            REWARD_FLOOR,
            start_date,
            end_date,
        )
        try:
            eligible = [t for t in candidates if is_eligible(t, customer_id, start_date, end_date)]
        except (TypeError, ValueError, InvalidOperation) as e:
            raise ComputationError(f"Malformed transaction record for customer {customer_id}: {e}") from e

        logger.debug("Found %d eligible transactions for customer %s", len(eligible), customer_id)
        return eligible
