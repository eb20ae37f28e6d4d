"""Odds conversion and latest-wins collapsing.

American odds -> implied probability (vig not removed, 4 decimals):
- Negative (e.g. -110): |odds| / (|odds| + 100)
- Positive (e.g. +130): 100 / (odds + 100)

Prediction markets price outcomes as shares paying $1.00, so the implied
probability doubles as the share price.
"""

from typing import Callable, Hashable, Iterable, TypeVar

from nba_sgp_advisor.data.models import GameOdds, PlayerProp

T = TypeVar("T", GameOdds, PlayerProp)

ODDS_FIELDS = (
    "spread_home_odds",
    "spread_away_odds",
    "moneyline_home_odds",
    "moneyline_away_odds",
    "total_over_odds",
    "total_under_odds",
)


def american_to_probability(american: float) -> float:
    """Convert American odds to implied probability.

    Args:
        american: American odds, e.g. -110 or +130

    Returns:
        Probability in (0, 1), rounded to 4 decimal places

    Raises:
        ValueError: If odds are 0 (not a valid American price)

    Examples:
        >>> american_to_probability(-110)
        0.5238
        >>> american_to_probability(130)
        0.4348
    """
    if american == 0:
        raise ValueError("American odds cannot be 0")
    if american < 0:
        prob = -american / (-american + 100)
    else:
        prob = 100 / (american + 100)
    return round(prob, 4)


def collapse_latest(items: Iterable[T], key: Callable[[T], Hashable]) -> dict[Hashable, T]:
    """Keep the most recently updated item per group.

    Ties on updated_at keep the item seen first.
    """
    latest: dict[Hashable, T] = {}
    for item in items:
        group = key(item)
        existing = latest.get(group)
        if existing is None or item.updated_at > existing.updated_at:
            latest[group] = item
    return latest


def latest_odds_by_vendor(odds: Iterable[GameOdds]) -> list[GameOdds]:
    """One quote per vendor, sorted by vendor name."""
    collapsed = collapse_latest(odds, key=lambda o: o.vendor)
    return [collapsed[vendor] for vendor in sorted(collapsed)]


def latest_props(props: Iterable[PlayerProp]) -> list[PlayerProp]:
    """One quote per (player, prop type), sorted by player ID then prop type."""
    collapsed = collapse_latest(props, key=lambda p: (p.player_id, p.prop_type))
    return [collapsed[k] for k in sorted(collapsed)]


def to_probability_shares(odds: GameOdds) -> dict:
    """Dump a quote with every odds field converted to implied probability."""
    converted = odds.model_dump(mode="json")
    for field in ODDS_FIELDS:
        value = converted.get(field)
        if isinstance(value, (int, float)) and value != 0:
            converted[field] = american_to_probability(value)
    return converted
