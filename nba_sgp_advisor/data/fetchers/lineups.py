"""Starting lineups for a set of games."""

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list
from nba_sgp_advisor.data.models import LineupEntry
from nba_sgp_advisor.data.policy import EntityKind
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()


def lineups_key(team_id: int, game_ids: list[int]) -> str:
    """Composite key: team plus the sorted, de-duplicated game ID list."""
    return f"{team_id}:{','.join(str(g) for g in sorted(set(game_ids)))}"


class LineupsFetcher(CachedFetcher):
    async def get_lineups(self, game_ids: list[int], team_id: int) -> list[LineupEntry] | None:
        """Lineup entries of one team across the given games.

        Returns an empty list without a request when game_ids is empty, and
        None if the fetch failed.
        """
        if not game_ids:
            return []

        async def fetch() -> list[LineupEntry]:
            records = await self.client.paginate(
                "/v1/lineups", {"game_ids[]": sorted(set(game_ids))}
            )
            entries = [e for e in parse_list(LineupEntry)(records) if e.team.id == team_id]
            log.info("lineups_fetched", team_id=team_id, games=len(game_ids), entries=len(entries))
            return entries

        return await self.load(
            EntityKind.LINEUPS, lineups_key(team_id, game_ids), fetch, parse_list(LineupEntry)
        )
