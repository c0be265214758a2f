"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

COMPLETED_STATUS = "COMPLETED"


@dataclass(frozen=True)
class Customer:
    """Customer resolved from the customer store"""

    id: int
    name: str
    email: str
    join_date: date
    phone: str
    address: str


@dataclass(frozen=True)
class Transaction:
    """Purchase transaction owned by a customer"""

    id: int
    amount: Decimal
    status: str  # only "COMPLETED" earns points
    timestamp: Optional[datetime]
    customer_id: int


@dataclass(frozen=True)
class RewardsResult:
    """
    Output of a rewards computation.

    Immutable so that a cached instance can be handed to any number of
    callers: ``monthly_points`` is a read-only view (newest month first)
    and ``transactions`` a tuple.
    """

    customer: Customer
    total_points: int
    monthly_points: Mapping[str, int]
    transactions: Optional[Tuple[Transaction, ...]] = None

    def __post_init__(self):
        object.__setattr__(self, "monthly_points", MappingProxyType(dict(self.monthly_points)))
        if self.transactions is not None:
            object.__setattr__(self, "transactions", tuple(self.transactions))
