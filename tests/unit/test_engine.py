"""Unit tests for the rewards engine orchestration"""

import pytest
from datetime import datetime
from rewards_service.domain.engine import RewardsEngine
from rewards_service.domain.exceptions import ComputationError, CustomerNotFoundError
from tests.helpers.factories import FailingTransactionLookup, InMemoryTransactionLookup, make_transaction


def test_compute_rewards_reference_scenario(customer_lookup, transaction_lookup):
    """Test $120 + $80 in November, $30 in December → November only"""
    engine = RewardsEngine(customer_lookup, transaction_lookup)

    result = engine.compute_rewards(1)

    assert result.customer.id == 1
    assert dict(result.monthly_points) == {"November 2023": 100}
    assert result.total_points == 100
    assert "December 2023" not in result.monthly_points
    assert result.transactions is None


def test_compute_rewards_with_transactions(customer_lookup, transaction_lookup):
    engine = RewardsEngine(customer_lookup, transaction_lookup)

    result = engine.compute_rewards(1, include_transactions=True)

    assert [t.id for t in result.transactions] == [2, 1]


def test_compute_rewards_respects_window(customer_lookup, transaction_lookup):
    engine = RewardsEngine(customer_lookup, transaction_lookup)

    result = engine.compute_rewards(
        1,
        start_date=datetime(2023, 11, 10),
        end_date=datetime(2023, 11, 30, 23, 59, 59),
    )

    assert dict(result.monthly_points) == {"November 2023": 30}


def test_compute_rewards_inverted_window_is_empty(customer_lookup, transaction_lookup):
    engine = RewardsEngine(customer_lookup, transaction_lookup)

    result = engine.compute_rewards(1, start_date=datetime(2023, 12, 1), end_date=datetime(2023, 11, 1))

    assert result.total_points == 0
    assert dict(result.monthly_points) == {}


def test_compute_rewards_unknown_customer(customer_lookup, transaction_lookup):
    engine = RewardsEngine(customer_lookup, transaction_lookup)

    with pytest.raises(CustomerNotFoundError) as exc_info:
        engine.compute_rewards(999)

    assert exc_info.value.customer_id == 999
    assert transaction_lookup.calls == 0


def test_compute_rewards_lookup_failure_propagates_unchanged(customer_lookup):
    """Test store errors are neither wrapped nor retried"""
    error = ConnectionError("transaction store unavailable")
    engine = RewardsEngine(customer_lookup, FailingTransactionLookup(error))

    with pytest.raises(ConnectionError) as exc_info:
        engine.compute_rewards(1)

    assert exc_info.value is error


def test_compute_rewards_malformed_timestamp_is_computation_error(customer_lookup):
    bad = make_transaction(1, "120", datetime(2023, 11, 5))
    object.__setattr__(bad, "timestamp", "2023-11-05")
    engine = RewardsEngine(customer_lookup, InMemoryTransactionLookup([bad]))

    with pytest.raises(ComputationError):
        engine.compute_rewards(1)
