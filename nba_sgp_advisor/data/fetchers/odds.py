"""Game odds and player props (v2 endpoints), cached 10 minutes."""

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list
from nba_sgp_advisor.data.models import GameOdds, PlayerProp
from nba_sgp_advisor.data.policy import EntityKind


class OddsFetcher(CachedFetcher):
    async def get_game_odds(self, game_id: int) -> list[GameOdds] | None:
        """All vendor quotes for one game."""

        async def fetch() -> list[GameOdds]:
            records = await self.client.paginate("/v2/odds", {"game_ids[]": [game_id]})
            return parse_list(GameOdds)(records)

        return await self.load(EntityKind.ODDS, str(game_id), fetch, parse_list(GameOdds))

    async def get_odds_for_date(self, game_date: str) -> list[GameOdds] | None:
        """All vendor quotes for every game on a YYYY-MM-DD date."""

        async def fetch() -> list[GameOdds]:
            records = await self.client.paginate("/v2/odds", {"dates[]": [game_date]})
            return parse_list(GameOdds)(records)

        return await self.load(EntityKind.ODDS, f"date:{game_date}", fetch, parse_list(GameOdds))


class PlayerPropsFetcher(CachedFetcher):
    async def get_player_props(self, game_id: int) -> list[PlayerProp] | None:
        """All player prop quotes for one game."""

        async def fetch() -> list[PlayerProp]:
            records = await self.client.paginate("/v2/odds/player_props", {"game_id": game_id})
            return parse_list(PlayerProp)(records)

        return await self.load(
            EntityKind.PLAYER_PROPS, str(game_id), fetch, parse_list(PlayerProp)
        )
