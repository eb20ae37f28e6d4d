"""Monitoring helpers: structlog configuration and cache metrics."""

from nba_sgp_advisor.monitoring.logging import (
    bind_matchup,
    configure_logging,
    get_logger,
    unbind_matchup,
)
from nba_sgp_advisor.monitoring.metrics import CacheMetrics

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_matchup",
    "unbind_matchup",
    "CacheMetrics",
]
