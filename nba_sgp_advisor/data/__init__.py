"""Data acquisition and caching for balldontlie entities.

This package provides:
- BallDontLieClient: authenticated httpx client with bounded cursor pagination
- CacheStore: diskcache-backed key -> (payload, timestamp) store
- Entity fetchers combining both under a per-kind TTL / failure policy
- Pydantic models for every entity kind
"""

from nba_sgp_advisor.data.cache import CacheEntry, CacheStore, is_fresh, make_key
from nba_sgp_advisor.data.client import BallDontLieClient, Page
from nba_sgp_advisor.data.errors import (
    ConfigurationError,
    EntityFetchError,
    MalformedResponseError,
    PaginationError,
    RemoteError,
    SportsDataError,
    TransportError,
)
from nba_sgp_advisor.data.policy import POLICIES, EntityKind, FetchPolicy

__all__ = [
    # Client
    "BallDontLieClient",
    "Page",
    # Cache
    "CacheStore",
    "CacheEntry",
    "is_fresh",
    "make_key",
    # Policy
    "EntityKind",
    "FetchPolicy",
    "POLICIES",
    # Errors
    "SportsDataError",
    "ConfigurationError",
    "RemoteError",
    "TransportError",
    "MalformedResponseError",
    "PaginationError",
    "EntityFetchError",
]
