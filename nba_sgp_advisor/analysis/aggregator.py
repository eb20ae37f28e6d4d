"""Per-game analysis built from concurrent entity fetches.

For each side the roster is resolved first; injuries, player averages,
team averages, lineups for the game and recent form are then fetched
concurrently. Recent form is a chain: the team's last Final games, then the
lineups of those games (recent starters). Both sides, and the game's odds
and player props, run concurrently as well.

Optional kinds arrive as None when their fetch failed and are rendered as
"Not available". Team identity (teams, roster, schedule) is mandatory: its
EntityFetchError propagates to the caller and cancels the fetches still in
flight.
"""

import asyncio
import time
from typing import Any, Awaitable

from pydantic import BaseModel

from nba_sgp_advisor.data.fetchers import Fetchers
from nba_sgp_advisor.data.models import (
    Game,
    GameOdds,
    Injury,
    LineupEntry,
    Player,
    PlayerProp,
    SeasonAverage,
    Team,
    TeamSeasonAverage,
)
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()

RECENT_GAMES_COUNT = 5


class TeamAnalysis(BaseModel):
    """Everything known about one side of a game.

    Attributes:
        team: The team
        roster: Current players (mandatory)
        injuries: Injury report, None if unavailable
        player_averages: Season averages for roster players, None if unavailable
        team_averages: Team season averages, None if unavailable or missing
        lineups: Lineup entries for this game, None if unavailable
        recent_games: Last completed games, newest first, None if unavailable
        recent_lineups: Lineup entries of recent_games, None if unavailable
    """

    team: Team
    roster: list[Player]
    injuries: list[Injury] | None = None
    player_averages: list[SeasonAverage] | None = None
    team_averages: TeamSeasonAverage | None = None
    lineups: list[LineupEntry] | None = None
    recent_games: list[Game] | None = None
    recent_lineups: list[LineupEntry] | None = None


class GameAnalysis(BaseModel):
    """Merged context for one game."""

    game: Game
    home: TeamAnalysis
    visitor: TeamAnalysis
    odds: list[GameOdds] | None = None
    player_props: list[PlayerProp] | None = None

    @property
    def players(self) -> list[Player]:
        return [*self.home.roster, *self.visitor.roster]


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Like asyncio.gather, but cancels the remaining awaitables when one raises."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Collect the cancelled siblings before re-raising the first error
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def fetch_recent_form(
    team: Team, season: int, fetchers: Fetchers
) -> tuple[list[Game] | None, list[LineupEntry] | None]:
    """Last Final games of the team, then the team's lineups in those games."""
    recent_games = await fetchers.games.get_recent_games(team.id, season, RECENT_GAMES_COUNT)
    if recent_games is None:
        return None, None
    recent_lineups = await fetchers.lineups.get_lineups([g.id for g in recent_games], team.id)
    return recent_games, recent_lineups


async def build_team_analysis(team: Team, game: Game, fetchers: Fetchers) -> TeamAnalysis:
    """Build one side's analysis.

    Raises:
        EntityFetchError: If the roster cannot be fetched
    """
    roster = await fetchers.roster.get_roster(team.id)
    player_ids = [p.id for p in roster]

    injuries, player_averages, team_averages, lineups, (recent_games, recent_lineups) = (
        await gather_or_cancel(
            fetchers.injuries.get_injuries(team.id),
            fetchers.season_averages.get_season_averages(team.id, player_ids, game.season),
            fetchers.team_season_averages.get_team_season_averages(team.id, game.season),
            fetchers.lineups.get_lineups([game.id], team.id),
            fetch_recent_form(team, game.season, fetchers),
        )
    )

    return TeamAnalysis(
        team=team,
        roster=roster,
        injuries=injuries,
        player_averages=player_averages,
        team_averages=team_averages,
        lineups=lineups,
        recent_games=recent_games,
        recent_lineups=recent_lineups,
    )


async def build_game_analysis(
    game: Game, fetchers: Fetchers, include_markets: bool = True
) -> GameAnalysis:
    """Build the full analysis for a game.

    Args:
        game: Target game
        fetchers: Entity fetchers
        include_markets: Also fetch game odds and player props

    Raises:
        EntityFetchError: If either side's identity cannot be resolved
    """
    start_time = time.perf_counter()

    fetches = [
        build_team_analysis(game.home_team, game, fetchers),
        build_team_analysis(game.visitor_team, game, fetchers),
    ]
    if include_markets:
        fetches.append(fetchers.odds.get_game_odds(game.id))
        fetches.append(fetchers.player_props.get_player_props(game.id))

    home, visitor, *markets = await gather_or_cancel(*fetches)
    odds, props = markets if markets else (None, None)

    log.info(
        "game_analysis_built",
        game_id=game.id,
        home=game.home_team.abbreviation,
        visitor=game.visitor_team.abbreviation,
        duration_ms=int((time.perf_counter() - start_time) * 1000),
    )
    return GameAnalysis(game=game, home=home, visitor=visitor, odds=odds, player_props=props)


async def build_all_game_analyses(
    fetchers: Fetchers, start_date: str | None = None
) -> list[GameAnalysis]:
    """Analyses for every upcoming game, built concurrently."""
    games = await fetchers.games.get_upcoming_games(start_date)
    return list(await gather_or_cancel(*(build_game_analysis(g, fetchers) for g in games)))


def team_matches(team: Team, query: str) -> bool:
    """Case-insensitive match on city, name, full name (substring) or exact abbreviation.

    Examples:
        "thunder", "Oklahoma", "oklahoma city thunder" and "OKC" all match
        the Oklahoma City Thunder.
    """
    q = query.strip().lower()
    if not q:
        return False
    return (
        q in team.city.lower()
        or q in team.name.lower()
        or q in team.full_name.lower()
        or team.abbreviation.lower() == q
    )


def find_game(games: list[Game], team_a: str, team_b: str) -> Game | None:
    """First game where the two queries match home and visitor, in either order."""
    for game in games:
        home, visitor = game.home_team, game.visitor_team
        if (team_matches(home, team_a) and team_matches(visitor, team_b)) or (
            team_matches(home, team_b) and team_matches(visitor, team_a)
        ):
            return game
    return None


async def resolve_matchup(
    fetchers: Fetchers, team_a: str, team_b: str, start_date: str | None = None
) -> Game | None:
    """Find the upcoming game for two free-text team queries.

    Returns:
        The game, or None if no upcoming game pairs the two teams
    """
    games = await fetchers.games.get_upcoming_games(start_date)
    game = find_game(games, team_a, team_b)
    if game is None:
        log.warning("matchup_not_found", team_a=team_a, team_b=team_b, upcoming=len(games))
    else:
        log.info("matchup_resolved", game_id=game.id, date=game.date)
    return game


async def find_scheduled_game(
    fetchers: Fetchers, home_abbr: str, away_abbr: str, game_date: str
) -> Game | None:
    """Find a game on a date from two team abbreviations.

    Returns None if either abbreviation is unknown or the teams do not play
    each other on that date.
    """
    home, away = await gather_or_cancel(
        fetchers.teams.find_by_abbreviation(home_abbr),
        fetchers.teams.find_by_abbreviation(away_abbr),
    )
    if home is None or away is None:
        log.warning("team_not_found", home=home_abbr, away=away_abbr)
        return None
    return await fetchers.games.find_game(home.id, away.id, game_date)
