"""Per entity kind fetch policy.

Every fetcher consults this table for two decisions:
- how long a cached payload stays fresh (None = never cached)
- whether a failure is fatal (mandatory) or degrades to "not available"
"""

from dataclasses import dataclass
from enum import Enum

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


class EntityKind(str, Enum):
    TEAMS = "teams"
    ROSTER = "roster"
    SEASON_AVERAGES = "season_averages"
    TEAM_SEASON_AVERAGES = "team_season_averages"
    INJURIES = "injuries"
    GAMES = "games"
    RECENT_GAMES = "recent_games"
    LINEUPS = "lineups"
    ODDS = "odds"
    PLAYER_PROPS = "player_props"


@dataclass(frozen=True)
class FetchPolicy:
    """How one entity kind is cached and how its failures are treated.

    Attributes:
        ttl: Seconds a cached payload stays fresh, None if never cached
        optional: True if a failure degrades to None instead of raising
    """

    ttl: float | None
    optional: bool

    @property
    def cached(self) -> bool:
        return self.ttl is not None


POLICIES: dict[EntityKind, FetchPolicy] = {
    EntityKind.TEAMS: FetchPolicy(ttl=100 * DAY, optional=False),
    EntityKind.ROSTER: FetchPolicy(ttl=DAY, optional=False),
    EntityKind.SEASON_AVERAGES: FetchPolicy(ttl=DAY, optional=True),
    EntityKind.TEAM_SEASON_AVERAGES: FetchPolicy(ttl=DAY, optional=True),
    EntityKind.LINEUPS: FetchPolicy(ttl=DAY, optional=True),
    EntityKind.ODDS: FetchPolicy(ttl=10 * MINUTE, optional=True),
    EntityKind.PLAYER_PROPS: FetchPolicy(ttl=10 * MINUTE, optional=True),
    # Volatile kinds always hit the network
    EntityKind.INJURIES: FetchPolicy(ttl=None, optional=True),
    EntityKind.RECENT_GAMES: FetchPolicy(ttl=None, optional=True),
    EntityKind.GAMES: FetchPolicy(ttl=None, optional=False),
}


def policy_for(kind: EntityKind) -> FetchPolicy:
    return POLICIES[kind]
