"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from rewards_service.api.main import create_app
from rewards_service.infrastructure.database.models import Base, CustomerRecord, TransactionRecord
from rewards_service.infrastructure.database.session import get_db
from rewards_service.domain.models import Transaction
from tests.helpers.factories import (
    InMemoryCustomerLookup,
    InMemoryTransactionLookup,
    make_customer,
    make_transaction,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """
    Two customers; customer 1 holds the reference scenario plus noise rows.

    Customer 1, eligible: $120 on 2023-11-05, $80 on 2023-11-20
    Customer 1, ineligible: $30 (below floor), $500 PENDING, $90 without a date
    Customer 2: $150 on 2023-11-10
    """
    db.add_all(
        [
            CustomerRecord(
                id=1,
                name="John Doe",
                email="john.doe@example.com",
                join_date=date(2023, 1, 15),
                phone="+1-555-0101",
                address="123 Main St, Anytown, USA",
            ),
            CustomerRecord(
                id=2,
                name="Jane Smith",
                email="jane.smith@example.com",
                join_date=date(2023, 2, 15),
                phone="+1-555-0102",
                address="456 Oak Ave, Somewhere, USA",
            ),
        ]
    )
    db.flush()
    db.add_all(
        [
            TransactionRecord(id=1, amount=Decimal("120.00"), status="COMPLETED",
                              transaction_date=datetime(2023, 11, 5, 10, 0), customer_id=1),
            TransactionRecord(id=2, amount=Decimal("80.00"), status="COMPLETED",
                              transaction_date=datetime(2023, 11, 20, 15, 30), customer_id=1),
            TransactionRecord(id=3, amount=Decimal("30.00"), status="COMPLETED",
                              transaction_date=datetime(2023, 12, 1, 9, 0), customer_id=1),
            TransactionRecord(id=4, amount=Decimal("500.00"), status="PENDING",
                              transaction_date=datetime(2023, 12, 2, 9, 0), customer_id=1),
            TransactionRecord(id=5, amount=Decimal("90.00"), status="COMPLETED",
                              transaction_date=None, customer_id=1),
            TransactionRecord(id=6, amount=Decimal("150.00"), status="COMPLETED",
                              transaction_date=datetime(2023, 11, 10, 12, 0), customer_id=2),
        ]
    )
    db.commit()
    return db


@pytest.fixture
def scenario_transactions() -> list[Transaction]:
    """$120 and $80 in November 2023, $30 (ineligible) in December 2023"""
    return [
        make_transaction(1, "120", datetime(2023, 11, 5, 10, 0)),
        make_transaction(2, "80", datetime(2023, 11, 20, 15, 30)),
        make_transaction(3, "30", datetime(2023, 12, 1, 9, 0)),
    ]


@pytest.fixture
def customer_lookup() -> InMemoryCustomerLookup:
    return InMemoryCustomerLookup([make_customer(1), make_customer(2, name="Jane Smith")])


@pytest.fixture
def transaction_lookup(scenario_transactions: list[Transaction]) -> InMemoryTransactionLookup:
    return InMemoryTransactionLookup(scenario_transactions)
