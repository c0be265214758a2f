"""Pydantic schemas for API response serialization"""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rewards_service.domain.models import RewardsResult


class CamelModel(BaseModel):
    """Serialize with camelCase keys, accept snake_case on construction"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerSchema(CamelModel):
    """Customer details echoed in a rewards summary"""

    id: int
    name: str
    email: str
    join_date: date
    phone: str
    address: str


class TransactionSchema(CamelModel):
    """Single contributing transaction"""

    id: int
    amount: float
    status: str
    transaction_date: Optional[datetime] = None
    customer_id: int


class RewardsResponse(CamelModel):
    """Response for GET /api/customers/{customer_id}/rewards"""

    customer: CustomerSchema
    total_points: int
    monthly_points: Dict[str, int]
    transactions: Optional[List[TransactionSchema]] = None  # omitted unless requested and non-empty

    @classmethod
    def from_result(cls, result: RewardsResult) -> "RewardsResponse":
        transactions = None
        if result.transactions:
            transactions = [
                TransactionSchema(
                    id=t.id,
                    amount=float(t.amount),
                    status=t.status,
                    transaction_date=t.timestamp,
                    customer_id=t.customer_id,
                )
                for t in result.transactions
            ]

        customer = result.customer
        return cls(
            customer=CustomerSchema(
                id=customer.id,
                name=customer.name,
                email=customer.email,
                join_date=customer.join_date,
                phone=customer.phone,
                address=customer.address,
            ),
            total_points=result.total_points,
            monthly_points=dict(result.monthly_points),
            transactions=transactions,
        )


class ErrorResponse(BaseModel):
    """Standard error body"""

    timestamp: datetime
    status: int
    error: str
    path: str
    errors: Optional[List[str]] = None
