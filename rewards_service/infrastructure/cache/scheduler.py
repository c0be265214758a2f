"""Scheduled full invalidation of the rewards cache"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from rewards_service.infrastructure.cache.rewards_cache import RewardsCache
from rewards_service.infrastructure.observability.logging import log_cache_invalidation

log = logging.getLogger(__name__)

INVALIDATION_JOB_ID = "rewards_cache_invalidation"


def create_scheduler() -> BackgroundScheduler:
    """Thread-based scheduler; the cache is shared with sync request handlers"""
    return BackgroundScheduler(timezone="UTC")


def clear_rewards_cache(cache: RewardsCache, interval_ms: int) -> int:
    dropped = cache.invalidate_all()
    log_cache_invalidation(dropped, interval_ms)
    return dropped


def schedule_cache_invalidation(
    scheduler: BackgroundScheduler,
    cache: RewardsCache,
    interval_ms: int = 360_000,
) -> None:
    """
    Register a fixed-rate job that drops every cache entry.

    Runs independently of per-entry TTL as a coarse bound on staleness
    and growth.
    """
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be positive, got {interval_ms}")

    scheduler.add_job(
        clear_rewards_cache,
        "interval",
        seconds=interval_ms / 1000,
        args=[cache, interval_ms],
        id=INVALIDATION_JOB_ID,
        replace_existing=True,
    )

    log.info(f"Rewards cache invalidation scheduled every {interval_ms} ms")
