"""GET /api/customers/{customer_id}/rewards - Customer rewards summary endpoint"""

import time
from datetime import datetime, timezone
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Path, Query, Request

from rewards_service.api.dependencies import get_request_id, get_rewards_engine
from rewards_service.api.v1.schemas import RewardsResponse
from rewards_service.config import settings
from rewards_service.domain.exceptions import CustomerNotFoundError, InvalidInputError
from rewards_service.infrastructure.cache.rewards_cache import CachedRewardsEngine
from rewards_service.infrastructure.observability.logging import log_rewards_query
from rewards_service.infrastructure.observability.metrics import record_query
from rewards_service.utils.date_utils import subtract_days, subtract_months

router = APIRouter()


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Stored transaction dates are naive; offset-aware bounds are normalized to UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def resolve_date_window(
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    days: Optional[int],
    months: Optional[int],
    now: Optional[datetime] = None,
) -> Tuple[Optional[datetime], datetime]:
    """
    Work out the effective query window.

    - End defaults to now
    - Start is taken from start_date, else end - days, else end - months
      (days wins over months); with none of them the window has no lower bound

    Raises:
        InvalidInputError: start falls after end
    """
    effective_end = _to_naive_utc(end_date) or now or datetime.now()
    effective_start = _to_naive_utc(start_date)

    if effective_start is None:
        if days is not None:
            effective_start = subtract_days(effective_end, days)
        elif months is not None:
            effective_start = subtract_months(effective_end, months)

    if effective_start is not None and effective_start > effective_end:
        raise InvalidInputError(
            f"Start date {effective_start.isoformat()} must not be after end date {effective_end.isoformat()}"
        )

    return effective_start, effective_end


@router.get(
    "/customers/{customer_id}/rewards",
    response_model=RewardsResponse,
    response_model_exclude_none=True,
)
def get_customer_rewards(
    request: Request,
    customer_id: int = Path(..., ge=1, description="ID of the customer"),
    days: Optional[int] = Query(
        None,
        ge=1,
        le=settings.max_lookback_days,
        description="Look back this many days from the end date (ignored when startDate is given)",
    ),
    months: Optional[int] = Query(
        None,
        ge=1,
        le=settings.max_lookback_months,
        description="Look back this many months from the end date (ignored when startDate or days is given)",
    ),
    start_date: Optional[datetime] = Query(None, alias="startDate", description="Window start, ISO-8601"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="Window end, ISO-8601 (default: now)"),
    show_transactions: bool = Query(
        False, alias="showTransactions", description="Include contributing transactions, newest first"
    ),
    rewards_engine: CachedRewardsEngine = Depends(get_rewards_engine),
):
    """
    Retrieve total and monthly reward points for a customer.

    Results are served from the rewards cache when an identical query
    (same customer, same start/end day, same detail flag) ran recently.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        effective_start, effective_end = resolve_date_window(start_date, end_date, days, months)
        result = rewards_engine.compute_rewards(
            customer_id,
            effective_start,
            effective_end,
            show_transactions,
        )
    except CustomerNotFoundError:
        record_query("not_found")
        raise
    except InvalidInputError:
        record_query("invalid")
        raise
    except Exception:
        record_query("error")
        raise

    duration_ms = (time.time() - start_time) * 1000
    record_query("ok", result.total_points)
    log_rewards_query(request_id, customer_id, result.total_points, len(result.monthly_points), duration_ms)

    return RewardsResponse.from_result(result)
