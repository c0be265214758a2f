"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rewards_service.domain.engine import RewardsEngine
from rewards_service.infrastructure.cache.rewards_cache import CachedRewardsEngine, RewardsCache
from rewards_service.infrastructure.database.repositories import CustomerRepository, TransactionRepository
from rewards_service.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rewards_cache(request: Request) -> RewardsCache:
    """Provide the process-wide rewards cache"""
    return request.app.state.rewards_cache


def get_rewards_engine(
    db: Session = Depends(get_db),
    cache: RewardsCache = Depends(get_rewards_cache),
) -> CachedRewardsEngine:
    """Provide a cached rewards engine bound to the request's database session"""
    engine = RewardsEngine(CustomerRepository(db), TransactionRepository(db))
    return CachedRewardsEngine(engine, cache)
