"""Game schedule lookups.

Three queries with different failure semantics:
- games on a date / upcoming games identify the matchup (mandatory)
- recent completed games only add context (optional)

None of them are cached since game status changes during the day.
"""

from datetime import date, timedelta

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list
from nba_sgp_advisor.data.models import Game
from nba_sgp_advisor.data.policy import EntityKind
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()


def final_games(games: list[Game], count: int) -> list[Game]:
    """Most recent ``count`` completed games, newest first."""
    completed = [g for g in games if g.status == "Final"]
    completed.sort(key=lambda g: (g.date, g.id), reverse=True)
    return completed[:count]


class GamesFetcher(CachedFetcher):
    async def get_games_on_date(self, game_date: str) -> list[Game]:
        """All games scheduled on a YYYY-MM-DD date."""

        async def fetch() -> list[Game]:
            records = await self.client.paginate("/v1/games", {"dates[]": [game_date]})
            return parse_list(Game)(records)

        return await self.load(EntityKind.GAMES, game_date, fetch, parse_list(Game))

    async def find_game(self, team_a_id: int, team_b_id: int, game_date: str) -> Game | None:
        """Find the game between two teams on a date, home/away in either order."""
        for game in await self.get_games_on_date(game_date):
            if game.is_pairing(team_a_id, team_b_id):
                log.info("game_found", game_id=game.id, date=game_date)
                return game
        log.warning("game_not_found", team_a=team_a_id, team_b=team_b_id, date=game_date)
        return None

    async def get_upcoming_games(self, start_date: str | None = None) -> list[Game]:
        """Scheduled and in-progress games from start_date (default: yesterday).

        Starting from yesterday keeps late games that are still in progress.
        """
        start = start_date or (date.today() - timedelta(days=1)).isoformat()

        async def fetch() -> list[Game]:
            records = await self.client.paginate("/v1/games", {"start_date": start})
            return [g for g in parse_list(Game)(records) if not g.is_final]

        return await self.load(EntityKind.GAMES, f"upcoming:{start}", fetch, parse_list(Game))

    async def get_recent_games(self, team_id: int, season: int, count: int = 5) -> list[Game] | None:
        """The team's last ``count`` Final games of the season, newest first."""

        async def fetch() -> list[Game]:
            records = await self.client.paginate(
                "/v1/games", {"team_ids[]": [team_id], "seasons[]": [season]}
            )
            return final_games(parse_list(Game)(records), count)

        return await self.load(
            EntityKind.RECENT_GAMES, f"{team_id}:{season}", fetch, parse_list(Game)
        )
