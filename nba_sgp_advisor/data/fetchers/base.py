"""Shared fetch pipeline: composite key -> cache -> remote -> validate -> filter -> store.

The mandatory/optional decision for every entity kind is made here, in
CachedFetcher.load, using the policy table. Fetchers never catch remote
errors themselves.
"""

from typing import Any, Awaitable, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from nba_sgp_advisor.data.cache import CacheStore, make_key
from nba_sgp_advisor.data.client import BallDontLieClient
from nba_sgp_advisor.data.errors import EntityFetchError, RemoteError
from nba_sgp_advisor.data.policy import EntityKind, FetchPolicy, policy_for
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Loader = Callable[[], Awaitable[T]]
Parser = Callable[[Any], T]


def parse_list(model: type[M]) -> Callable[[Any], list[M]]:
    """Build a parser turning a list of raw records into models."""

    def parse(payload: Any) -> list[M]:
        return [model.model_validate(record) for record in payload]

    return parse


def parse_one(model: type[M]) -> Callable[[Any], M | None]:
    def parse(payload: Any) -> M | None:
        return None if payload is None else model.model_validate(payload)

    return parse


def dump_payload(result: BaseModel | list[BaseModel]) -> Any:
    """JSON-compatible cache payload for a model or a list of models."""
    if isinstance(result, list):
        return [item.model_dump(mode="json") for item in result]
    return result.model_dump(mode="json")


class CachedFetcher:
    """Base class for entity fetchers.

    Subclasses describe a query as (kind, composite key, loader, parser).
    The loader talks to the remote client, validates the raw records into
    models and only then applies the kind-specific post-filter, so a
    malformed record fails validation instead of breaking the filter. The
    filtered models are dumped to JSON for the cache; the parser rebuilds
    them from a cached payload.
    """

    def __init__(self, client: BallDontLieClient, cache: CacheStore, cache_enabled: bool = True):
        """Initialize fetcher.

        Args:
            client: Remote client used on cache miss
            cache: Shared cache store
            cache_enabled: If False, cached entries are never served
                (fresh results are still stored)
        """
        self.client = client
        self.cache = cache
        self.cache_enabled = cache_enabled

    async def load(self, kind: EntityKind, key: str, loader: Loader[T], parse: Parser[T]) -> T | None:
        """Fetch one entity query, applying the kind's cache and failure policy.

        Returns:
            Models from the loader or the cache. For optional kinds, None
            when the fetch failed.

        Raises:
            EntityFetchError: If a mandatory kind failed
        """
        policy = policy_for(kind)
        try:
            return await self._load(kind, policy, key, loader, parse)
        except (RemoteError, ValidationError) as e:
            if not policy.optional:
                log.error("mandatory_fetch_failed", kind=kind.value, key=key, error=str(e))
                raise EntityFetchError(kind.value, key, e) from e
            log.warning(
                "optional_fetch_failed",
                kind=kind.value,
                key=key,
                error=f"{type(e).__name__}: {e}",
            )
            return None

    async def _load(
        self, kind: EntityKind, policy: FetchPolicy, key: str, loader: Loader[T], parse: Parser[T]
    ) -> T:
        cache_key = make_key(kind, key)

        if policy.cached and self.cache_enabled:
            entry = await self.cache.lookup(cache_key, policy.ttl, kind.value)
            if entry is not None:
                try:
                    return parse(entry.data)
                except ValidationError:
                    log.warning("cache_entry_invalid", key=cache_key)

        result = await loader()

        # None results (e.g. no team-season-average row) are not cached
        if policy.cached and result is not None:
            await self.cache.put(cache_key, dump_payload(result))
        return result
