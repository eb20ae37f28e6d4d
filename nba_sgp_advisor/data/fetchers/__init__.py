"""Entity fetchers, one per entity kind.

All fetchers share one remote client and one cache store, passed in
explicitly. ``build_fetchers`` wires a complete set from settings.
"""

from dataclasses import dataclass

from nba_sgp_advisor.config import Settings, get_settings
from nba_sgp_advisor.data.cache import CacheStore
from nba_sgp_advisor.data.client import BallDontLieClient
from nba_sgp_advisor.data.fetchers.averages import (
    SeasonAveragesFetcher,
    TeamSeasonAveragesFetcher,
)
from nba_sgp_advisor.data.fetchers.base import CachedFetcher
from nba_sgp_advisor.data.fetchers.games import GamesFetcher
from nba_sgp_advisor.data.fetchers.injuries import InjuriesFetcher
from nba_sgp_advisor.data.fetchers.lineups import LineupsFetcher
from nba_sgp_advisor.data.fetchers.odds import OddsFetcher, PlayerPropsFetcher
from nba_sgp_advisor.data.fetchers.players import RosterFetcher
from nba_sgp_advisor.data.fetchers.teams import TeamsFetcher


@dataclass
class Fetchers:
    """The complete set of entity fetchers used by the aggregator."""

    teams: TeamsFetcher
    roster: RosterFetcher
    season_averages: SeasonAveragesFetcher
    team_season_averages: TeamSeasonAveragesFetcher
    injuries: InjuriesFetcher
    games: GamesFetcher
    lineups: LineupsFetcher
    odds: OddsFetcher
    player_props: PlayerPropsFetcher


def build_fetchers(
    client: BallDontLieClient | None = None,
    cache: CacheStore | None = None,
    settings: Settings | None = None,
) -> Fetchers:
    """Create all fetchers around one client and one cache store.

    Args:
        client: Remote client (default: built from settings)
        cache: Cache store (default: CacheStore at settings.cache_dir)
        settings: Settings instance (default: get_settings())

    Raises:
        ConfigurationError: If a client must be built and no API key is set
    """
    settings = settings or get_settings()
    client = client or BallDontLieClient(settings=settings)
    cache = cache or CacheStore(cache_dir=settings.cache_dir)
    shared = {"client": client, "cache": cache, "cache_enabled": settings.cache_enabled}

    return Fetchers(
        teams=TeamsFetcher(**shared),
        roster=RosterFetcher(**shared),
        season_averages=SeasonAveragesFetcher(**shared),
        team_season_averages=TeamSeasonAveragesFetcher(**shared),
        injuries=InjuriesFetcher(**shared),
        games=GamesFetcher(**shared),
        lineups=LineupsFetcher(**shared),
        odds=OddsFetcher(**shared),
        player_props=PlayerPropsFetcher(**shared),
    )


__all__ = [
    "CachedFetcher",
    "Fetchers",
    "build_fetchers",
    "TeamsFetcher",
    "RosterFetcher",
    "SeasonAveragesFetcher",
    "TeamSeasonAveragesFetcher",
    "InjuriesFetcher",
    "GamesFetcher",
    "LineupsFetcher",
    "OddsFetcher",
    "PlayerPropsFetcher",
]
