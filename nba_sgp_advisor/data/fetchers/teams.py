"""Team reference data."""

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list
from nba_sgp_advisor.data.models import Team
from nba_sgp_advisor.data.policy import EntityKind
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()


class TeamsFetcher(CachedFetcher):
    """All teams, cached for ~100 days."""

    async def get_teams(self) -> list[Team]:
        async def fetch() -> list[Team]:
            return parse_list(Team)(await self.client.paginate("/v1/teams"))

        return await self.load(EntityKind.TEAMS, "all", fetch, parse_list(Team))

    async def find_by_abbreviation(self, abbreviation: str) -> Team | None:
        """Resolve an abbreviation ("okc", "PHX") to a team, None if unknown."""
        wanted = abbreviation.strip().upper()
        for team in await self.get_teams():
            if team.abbreviation.upper() == wanted:
                log.debug("team_resolved", abbreviation=wanted, team_id=team.id)
                return team
        return None
