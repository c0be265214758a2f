"""SQLAlchemy ORM models for customers and their purchase transactions"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, Numeric, Text
from sqlalchemy.orm import declarative_base

from rewards_service.domain.models import Customer, Transaction

Base = declarative_base()


class CustomerRecord(Base):
    """Customer master data"""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    join_date = Column(Date, nullable=False)
    phone = Column(Text, nullable=False)
    address = Column(Text, nullable=False)

    def to_domain(self) -> Customer:
        return Customer(
            id=self.id,
            name=self.name,
            email=self.email,
            join_date=self.join_date,
            phone=self.phone,
            address=self.address,
        )


class TransactionRecord(Base):
    """Purchase transaction; transaction_date may be missing on imported rows"""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_customer_status_date", "customer_id", "status", "transaction_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(Text, nullable=False)
    transaction_date = Column(DateTime, nullable=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            status=self.status,
            timestamp=self.transaction_date,
            customer_id=self.customer_id,
        )
