"""Structured logging configuration using structlog.

Two render modes:
- "production": one JSON object per event
- anything else: colored console output

Usage:
    from nba_sgp_advisor.monitoring import configure_logging, get_logger

    configure_logging("production")
    log = get_logger()
    log.info("roster_fetched", team_id=5, players=15)
"""

import logging
import sys

import structlog

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(mode: str = "development", level: int = logging.INFO) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        mode: "production" for JSON output, anything else for console output
        level: stdlib logging level for the root handler
    """
    if mode == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to caller's module name)
    """
    return structlog.get_logger(name)


def bind_matchup(team_a: str, team_b: str) -> None:
    """Attach the matchup being analysed to every subsequent log event."""
    structlog.contextvars.bind_contextvars(matchup=f"{team_a} vs {team_b}")


def unbind_matchup() -> None:
    structlog.contextvars.unbind_contextvars("matchup")
