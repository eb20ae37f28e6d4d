"""Current team rosters."""

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list
from nba_sgp_advisor.data.models import Player
from nba_sgp_advisor.data.policy import EntityKind
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()


def current_team_players(players: list[Player], team_id: int) -> list[Player]:
    """Keep players whose current team is team_id, first record per player ID.

    The players endpoint can return players who have since been traded or
    released; their ``team`` no longer matches the queried team.
    """
    seen: set[int] = set()
    current = []
    for player in players:
        if player.team.id != team_id or player.id in seen:
            continue
        seen.add(player.id)
        current.append(player)
    return current


class RosterFetcher(CachedFetcher):
    """Active players per team, cached 24h."""

    async def get_roster(self, team_id: int) -> list[Player]:
        async def fetch() -> list[Player]:
            records = await self.client.paginate("/v1/players/active", {"team_ids[]": [team_id]})
            players = current_team_players(parse_list(Player)(records), team_id)
            log.info("roster_fetched", team_id=team_id, fetched=len(records), current=len(players))
            return players

        return await self.load(EntityKind.ROSTER, str(team_id), fetch, parse_list(Player))
