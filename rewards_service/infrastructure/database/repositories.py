"""Data access layer for customers and transactions"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Query, Session
from rewards_service.infrastructure.database.models import CustomerRecord, TransactionRecord
from rewards_service.domain.models import Customer, Transaction


class CustomerRepository:
    """Repository for customers"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        """Fetch a single customer, None when unknown"""
        record = self.db.get(CustomerRecord, customer_id)
        return record.to_domain() if record else None

    def count(self) -> int:
        return self.db.query(CustomerRecord).count()

    def add_all(self, customers: List[CustomerRecord]) -> None:
        self.db.add_all(customers)
        self.db.flush()


class TransactionRepository:
    """
    Repository for purchase transactions.

    Exposes one query shape per combination of date bounds so the database
    can use the (customer_id, status, transaction_date) index; all shapes
    share the same base filter and skip rows without a date.
    """

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, customer_id: int, status: str, min_amount_exclusive: Decimal) -> Query:
        return self.db.query(TransactionRecord).filter(
            TransactionRecord.customer_id == customer_id,
            TransactionRecord.status == status,
            TransactionRecord.amount > min_amount_exclusive,
            TransactionRecord.transaction_date.isnot(None),
        )

    @staticmethod
    def _to_domain(records: List[TransactionRecord]) -> List[Transaction]:
        return [r.to_domain() for r in records]

    def find_by_customer_and_status_above(
        self, customer_id: int, status: str, min_amount_exclusive: Decimal
    ) -> List[Transaction]:
        return self._to_domain(self._base_query(customer_id, status, min_amount_exclusive).all())

    def find_by_customer_and_status_above_between(
        self,
        customer_id: int,
        status: str,
        min_amount_exclusive: Decimal,
        start_date: datetime,
        end_date: datetime,
    ) -> List[Transaction]:
        query = self._base_query(customer_id, status, min_amount_exclusive).filter(
            TransactionRecord.transaction_date.between(start_date, end_date)
        )
        return self._to_domain(query.all())

    def find_by_customer_and_status_above_after(
        self, customer_id: int, status: str, min_amount_exclusive: Decimal, start_date: datetime
    ) -> List[Transaction]:
        query = self._base_query(customer_id, status, min_amount_exclusive).filter(
            TransactionRecord.transaction_date >= start_date
        )
        return self._to_domain(query.all())

    def find_by_customer_and_status_above_before(
        self, customer_id: int, status: str, min_amount_exclusive: Decimal, end_date: datetime
    ) -> List[Transaction]:
        query = self._base_query(customer_id, status, min_amount_exclusive).filter(
            TransactionRecord.transaction_date <= end_date
        )
        return self._to_domain(query.all())

    def find_eligible(
        self,
        customer_id: int,
        status: str,
        min_amount_exclusive: Decimal,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Transaction]:
        """Dispatch to the query shape matching the bounds present"""
        if start_date is not None and end_date is not None:
            return self.find_by_customer_and_status_above_between(
                customer_id, status, min_amount_exclusive, start_date, end_date
            )
        if start_date is not None:
            return self.find_by_customer_and_status_above_after(
                customer_id, status, min_amount_exclusive, start_date
            )
        if end_date is not None:
            return self.find_by_customer_and_status_above_before(
                customer_id, status, min_amount_exclusive, end_date
            )
        return self.find_by_customer_and_status_above(customer_id, status, min_amount_exclusive)

    def count(self) -> int:
        return self.db.query(TransactionRecord).count()

    def add_all(self, transactions: List[TransactionRecord]) -> None:
        self.db.add_all(transactions)
        self.db.flush()
