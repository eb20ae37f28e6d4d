"""Player injury reports. Never cached: a stale report changes the picks."""

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list
from nba_sgp_advisor.data.models import Injury
from nba_sgp_advisor.data.policy import EntityKind
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()


class InjuriesFetcher(CachedFetcher):
    async def get_injuries(self, team_id: int) -> list[Injury] | None:
        """Current injuries for a team, None if the report could not be fetched."""

        async def fetch() -> list[Injury]:
            records = await self.client.paginate("/v1/player_injuries", {"team_ids[]": [team_id]})
            log.info("injuries_fetched", team_id=team_id, count=len(records))
            return parse_list(Injury)(records)

        return await self.load(EntityKind.INJURIES, str(team_id), fetch, parse_list(Injury))
