"""Rewards engine - orchestrates customer lookup, eligibility and aggregation"""

import logging
from datetime import datetime
from decimal import InvalidOperation
from typing import Optional, Protocol

from rewards_service.domain.aggregation import aggregate
from rewards_service.domain.eligibility import EligibilityFilter, TransactionLookup
from rewards_service.domain.exceptions import ComputationError, CustomerNotFoundError
from rewards_service.domain.models import Customer, RewardsResult

logger = logging.getLogger(__name__)


class CustomerLookup(Protocol):
    """Read access to a customer store"""

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        ...


class RewardsEngine:
    """Composition point for a single rewards computation"""

    def __init__(self, customer_lookup: CustomerLookup, transaction_lookup: TransactionLookup):
        self.customer_lookup = customer_lookup
        self.eligibility_filter = EligibilityFilter(transaction_lookup)

    def get_customer(self, customer_id: int) -> Customer:
        """Resolve a customer or raise CustomerNotFoundError"""
        customer = self.customer_lookup.find_by_id(customer_id)
        if customer is None:
            logger.error("Customer not found with id: %s", customer_id)
            raise CustomerNotFoundError(customer_id)
        return customer

    def compute_rewards(
        self,
        customer_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        include_transactions: bool = False,
    ) -> RewardsResult:
        """
        Main entry point: compute a customer's rewards summary.

        Flow:
        1. Resolve customer
        2. Select eligible transactions for the window
        3. Aggregate points by month

        Lookup failures propagate unchanged; nothing is retried here.

        Raises:
            CustomerNotFoundError: Unknown customer id
            ComputationError: A transaction record could not be scored
        """
        logger.info(
            "Calculating rewards for customer %s between %s and %s (include transactions: %s)",
            customer_id,
            start_date,
            end_date,
            include_transactions,
        )
        customer = self.get_customer(customer_id)
        transactions = self.eligibility_filter.find_eligible(customer_id, start_date, end_date)

        try:
            result = aggregate(customer, transactions, include_transactions)
        except (AttributeError, TypeError, ValueError, InvalidOperation) as e:
            raise ComputationError(f"Failed to aggregate rewards for customer {customer_id}: {e}") from e

        logger.info(
            "Calculated rewards for customer %s: %d points over %d months",
            customer_id,
            result.total_points,
            len(result.monthly_points),
        )
        return result
