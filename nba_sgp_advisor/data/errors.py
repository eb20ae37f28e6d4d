"""Error taxonomy for the data acquisition layer.

SportsDataError
├── ConfigurationError        missing credential, raised before any request
├── RemoteError               anything that went wrong talking to the provider
│   ├── TransportError        non-2xx response, network failure, timeout
│   ├── MalformedResponseError
│   └── PaginationError       repeated cursor or page cap exceeded
└── EntityFetchError          a mandatory entity kind could not be loaded
"""


class SportsDataError(RuntimeError):
    """Base error for sports data operations."""


class ConfigurationError(SportsDataError):
    """Required configuration (e.g. the API key) is missing."""


class RemoteError(SportsDataError):
    """A request to the remote provider did not produce usable data."""


class TransportError(RemoteError):
    """HTTP or network level failure.

    Attributes:
        status_code: HTTP status code, None for network failures and timeouts
        reason: HTTP reason phrase or the underlying error description
        url: Requested URL without credentials
    """

    def __init__(self, message: str, status_code: int | None = None, reason: str = "", url: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.url = url


class MalformedResponseError(RemoteError):
    """Response body did not have the expected {"data": [...]} shape."""


class PaginationError(RemoteError):
    """Cursor pagination did not terminate within the configured bounds."""


class EntityFetchError(SportsDataError):
    """A mandatory entity kind failed to load.

    Attributes:
        kind: Entity kind value (e.g. "roster")
        key: Composite cache key of the failed query
    """

    def __init__(self, kind: str, key: str, cause: Exception):
        super().__init__(f"Failed to fetch {kind} [{key}]: {type(cause).__name__}: {cause}")
        self.kind = kind
        self.key = key
