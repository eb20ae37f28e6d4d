"""balldontlie API client with cursor pagination.

Every request carries the API key in the Authorization header. Transient
network errors (connection failures, timeouts) are retried with exponential
backoff; HTTP status errors are raised immediately as TransportError.

Pagination follows ``meta.next_cursor`` until it is absent. The loop is
bounded by ``max_pages`` and aborts on a repeated cursor, so a misbehaving
endpoint fails instead of spinning forever. Partial results are never
returned.
"""

import time
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nba_sgp_advisor.config import Settings, get_settings
from nba_sgp_advisor.data.errors import (
    ConfigurationError,
    MalformedResponseError,
    PaginationError,
    TransportError,
)
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()

Cursor = int | str


class Page(BaseModel):
    """One page of records plus the cursor for the next page (None = last)."""

    data: list[dict[str, Any]]
    next_cursor: Cursor | None = None

    @classmethod
    def from_body(cls, body: Any) -> "Page":
        """Validate a response body of shape {"data": [...], "meta": {...}}.

        Raises:
            MalformedResponseError: If the body does not have that shape
        """
        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise MalformedResponseError("Response body has no 'data' list")
        meta = body.get("meta") or {}
        if not isinstance(meta, dict):
            raise MalformedResponseError("Response 'meta' is not an object")
        cursor = meta.get("next_cursor")
        if cursor == "":
            cursor = None
        try:
            return cls(data=body["data"], next_cursor=cursor)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected page shape: {e.error_count()} errors") from e


class BallDontLieClient:
    """Async client for the balldontlie REST API.

    Attributes:
        base_url: Provider root, paths include the API version ("/v1/teams")
        page_size: per_page sent with paginated queries
        max_pages: Upper bound on pages drained by paginate()
        max_attempts: Attempts per request for transient network errors

    Example:
        client = BallDontLieClient()
        players = await client.paginate("/v1/players/active", {"team_ids[]": [5]})
    """

    retry_wait = wait_exponential(multiplier=1, min=1, max=10)

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        page_size: int | None = None,
        max_pages: int | None = None,
        max_attempts: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. If not provided, read from BALLDONTLIE_API_KEY.
            base_url, timeout, page_size, max_pages, max_attempts: Overrides
                for the corresponding settings.
            settings: Settings instance (defaults to get_settings()).

        Raises:
            ConfigurationError: If no API key is provided or configured.
        """
        settings = settings or get_settings()

        self.api_key = api_key or settings.balldontlie_api_key
        if not self.api_key:
            raise ConfigurationError(
                "BALLDONTLIE_API_KEY not found in environment. "
                "Set it in .env or pass api_key parameter."
            )

        self.base_url = (base_url or settings.balldontlie_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.page_size = page_size or settings.page_size
        self.max_pages = max_pages or settings.max_pages
        self.max_attempts = max_attempts or settings.max_attempts

    async def _get(self, path: str, params: dict[str, Any]) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    async with httpx.AsyncClient(timeout=self.timeout) as client:
                        response = await client.get(
                            url,
                            params=params,
                            headers={"Authorization": self.api_key},
                        )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {path} timed out", reason=str(e), url=url) from e
        except httpx.TransportError as e:
            raise TransportError(
                f"Network error calling {path}: {type(e).__name__}", reason=str(e), url=url
            ) from e

        if not response.is_success:
            raise TransportError(
                f"balldontlie API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
                url=url,
            )
        return response

    async def fetch_page(
        self, path: str, params: dict[str, Any] | None = None, cursor: Cursor | None = None
    ) -> Page:
        """Fetch a single page.

        Args:
            path: Versioned endpoint path (e.g. "/v1/players/active")
            params: Query parameters; list values are sent as repeated keys
            cursor: Cursor returned by the previous page

        Returns:
            Page with records and next cursor

        Raises:
            TransportError: Non-2xx status, network failure or timeout
            MalformedResponseError: Body is not JSON or lacks a data list
        """
        query = dict(params or {})
        if cursor is not None:
            query["cursor"] = cursor

        response = await self._get(path, query)
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{path} returned a non-JSON body") from e
        return Page.from_body(body)

    async def paginate(self, path: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Drain cursor pagination and return all records in page order.

        Raises:
            PaginationError: Repeated cursor or more than max_pages pages
            TransportError, MalformedResponseError: From any page
        """
        start_time = time.perf_counter()
        query = {"per_page": self.page_size, **(params or {})}
        records: list[dict[str, Any]] = []
        seen: set[Cursor] = set()
        cursor: Cursor | None = None

        for page_number in range(1, self.max_pages + 1):
            page = await self.fetch_page(path, query, cursor)
            records.extend(page.data)
            log.debug(
                "page_fetched",
                path=path,
                page=page_number,
                records=len(page.data),
                next_cursor=page.next_cursor,
            )

            if page.next_cursor is None:
                log.info(
                    "pagination_complete",
                    path=path,
                    pages=page_number,
                    records=len(records),
                    duration_ms=int((time.perf_counter() - start_time) * 1000),
                )
                return records

            if page.next_cursor in seen or page.next_cursor == cursor:
                raise PaginationError(f"{path} repeated cursor {page.next_cursor!r}")
            seen.add(page.next_cursor)
            cursor = page.next_cursor

        raise PaginationError(f"{path} did not finish within {self.max_pages} pages")
