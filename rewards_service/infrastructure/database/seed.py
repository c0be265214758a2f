"""Bulk loading of customers and transactions from CSV files

Transactions CSV header (first column must be ``amount``)::

    amount,status,transaction_date,customer_id

Customers CSV header::

    name,email,join_date,phone,address

Blank lines and lines starting with ``#`` are skipped. A malformed row is
logged and skipped; the rest of the file still loads.
"""

import csv
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from os import PathLike
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from sqlalchemy.orm import Session

from rewards_service.domain.exceptions import DomainException
from rewards_service.infrastructure.database.models import CustomerRecord, TransactionRecord
from rewards_service.infrastructure.database.repositories import CustomerRepository, TransactionRepository
from rewards_service.utils.date_utils import subtract_months

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = 4
CUSTOMER_COLUMNS = 5


class SeedDataError(DomainException):
    """Seed file is missing, empty or has an unexpected header"""

    pass


def _data_rows(path: Path, expected_first_column: str, expected_header: str) -> Iterator[tuple[int, List[str]]]:
    """Yield (line_number, values) for every data row after validating the header"""
    if not path.exists():
        raise SeedDataError(f"Seed file not found: {path}")

    # utf-8-sig strips a leading BOM
    with path.open(encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            raise SeedDataError(f"CSV file is empty: {path}")
        if not header or not header[0].strip().lower().startswith(expected_first_column):
            raise SeedDataError(
                f"Invalid CSV format: missing or invalid header. Expected: {expected_header}. "
                f"Found: {','.join(header)}"
            )

        for values in reader:
            line_number = reader.line_num
            if not values or not "".join(values).strip():
                continue
            if values[0].strip().startswith("#"):
                continue
            yield line_number, values


def load_transactions_csv(csv_path: str | PathLike[str]) -> List[TransactionRecord]:
    """Parse transaction rows; transaction_date is ISO-8601 local date-time"""
    transactions: List[TransactionRecord] = []
    rows = _data_rows(Path(csv_path), "amount", "amount,status,transaction_date,customer_id")

    for line_number, values in rows:
        if len(values) < TRANSACTION_COLUMNS:
            logger.warning(f"Line {line_number} has insufficient columns: {','.join(values)}")
            continue
        try:
            raw_date = values[2].strip()
            transactions.append(
                TransactionRecord(
                    amount=Decimal(values[0].strip()),
                    status=values[1].strip(),
                    transaction_date=datetime.fromisoformat(raw_date) if raw_date else None,
                    customer_id=int(values[3].strip()),
                )
            )
        except (InvalidOperation, ValueError) as e:
            logger.warning(f"Error parsing line {line_number}: {','.join(values)} ({e})")

    return transactions


def load_customers_csv(csv_path: str | PathLike[str]) -> List[CustomerRecord]:
    """Parse customer rows; join_date is an ISO date"""
    customers: List[CustomerRecord] = []
    rows = _data_rows(Path(csv_path), "name", "name,email,join_date,phone,address")

    for line_number, values in rows:
        if len(values) < CUSTOMER_COLUMNS:
            logger.warning(f"Line {line_number} has insufficient columns: {','.join(values)}")
            continue
        try:
            customers.append(
                CustomerRecord(
                    name=values[0].strip(),
                    email=values[1].strip(),
                    join_date=date.fromisoformat(values[2].strip()),
                    phone=values[3].strip(),
                    address=values[4].strip(),
                )
            )
        except ValueError as e:
            logger.warning(f"Error parsing line {line_number}: {','.join(values)} ({e})")

    return customers


SAMPLE_CUSTOMERS: Sequence[tuple[str, str, str, str]] = (
    ("John Doe", "john.doe@example.com", "+1-555-0101", "123 Main St, Anytown, USA"),
    ("Jane Smith", "jane.smith@example.com", "+1-555-0102", "456 Oak Ave, Somewhere, USA"),
    ("Robert Johnson", "robert.j@example.com", "+1-555-0103", "789 Pine Rd, Nowhere, USA"),
    ("Emily Davis", "emily.d@example.com", "+1-555-0104", "321 Elm St, Anywhere, USA"),
    ("Michael Brown", "michael.b@example.com", "+1-555-0105", "654 Maple Dr, Everywhere, USA"),
)


def default_customers(today: Optional[date] = None) -> List[CustomerRecord]:
    """Five sample customers, joined one month apart going back from today"""
    today = today or date.today()
    return [
        CustomerRecord(
            name=name,
            email=email,
            join_date=subtract_months(today, i),
            phone=phone,
            address=address,
        )
        for i, (name, email, phone, address) in enumerate(SAMPLE_CUSTOMERS)
    ]


def seed_database(
    db: Session,
    customers_csv: Optional[str | PathLike[str]] = None,
    transactions_csv: Optional[str | PathLike[str]] = None,
) -> Dict[str, int]:
    """
    Load seed data into empty tables.

    Customers come from ``customers_csv`` when given, otherwise the built-in
    sample set. Transactions are only loaded when ``transactions_csv`` is
    given. Tables that already hold rows are left untouched.

    Returns:
        Number of customers and transactions inserted
    """
    customer_repo = CustomerRepository(db)
    transaction_repo = TransactionRepository(db)
    inserted = {"customers": 0, "transactions": 0}

    if customer_repo.count() == 0:
        customers = load_customers_csv(customers_csv) if customers_csv else default_customers()
        customer_repo.add_all(customers)
        inserted["customers"] = len(customers)
        logger.info(f"Initialized {len(customers)} customers")

    if transactions_csv and transaction_repo.count() == 0:
        transactions = load_transactions_csv(transactions_csv)
        transaction_repo.add_all(transactions)
        inserted["transactions"] = len(transactions)
        logger.info(f"Loaded {len(transactions)} transactions from {transactions_csv}")

    db.commit()
    return inserted
