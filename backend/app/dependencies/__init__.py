"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Repositories
- Services
- The application cache
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.cache import CacheBackend
from core.repositories import TierListRepository
from core.services import AffinityService

from ..database import get_db

# =============================================================================
# Repository Dependencies
# =============================================================================


def get_tier_list_repository(db: Session = Depends(get_db)) -> TierListRepository:
    return TierListRepository(db)


# =============================================================================
# Service Dependencies
# =============================================================================


def get_affinity_service(
    tier_list_repo: TierListRepository = Depends(get_tier_list_repository),
) -> AffinityService:
    """Get AffinityService with injected repository."""
    return AffinityService(tier_list_repo)


# =============================================================================
# Cache Dependencies
# =============================================================================


def get_cache(request: Request) -> CacheBackend:
    """The cache built at startup and stored on app.state."""
    return request.app.state.cache


__all__ = [
    "get_tier_list_repository",
    "get_affinity_service",
    "get_cache",
]
