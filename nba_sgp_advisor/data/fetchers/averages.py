"""Player and team season averages.

Both endpoints take a stat category in the path ("general", "clutch",
"hustle", ...). The ``type`` query parameter is not accepted for hustle
stats.
"""

from typing import Any

from nba_sgp_advisor.data.fetchers.base import CachedFetcher, parse_list, parse_one
from nba_sgp_advisor.data.models import SeasonAverage, TeamSeasonAverage
from nba_sgp_advisor.data.policy import EntityKind


def averages_params(season: int, season_type: str, category: str, stat_type: str) -> dict[str, Any]:
    params: dict[str, Any] = {"season": season, "season_type": season_type}
    if category != "hustle":
        params["type"] = stat_type
    return params


def averages_key(team_id: int, season: int, season_type: str, category: str, stat_type: str) -> str:
    return f"{team_id}:{season}:{season_type}:{category}:{stat_type}"


class SeasonAveragesFetcher(CachedFetcher):
    """Per-player season averages for a team's roster, cached 24h per team/season."""

    async def get_season_averages(
        self,
        team_id: int,
        player_ids: list[int],
        season: int,
        category: str = "general",
        season_type: str = "regular",
        stat_type: str = "base",
    ) -> list[SeasonAverage] | None:
        """Fetch season averages for the given players.

        Args:
            team_id: Team the players belong to (part of the cache key)
            player_ids: Roster player IDs
            season: Season start year
            category: Stat category path segment
            season_type: "regular", "playoffs", ...
            stat_type: "base", "advanced", ... (ignored for hustle)

        Returns:
            List of SeasonAverage, or None if the fetch failed
        """
        if not player_ids:
            return []

        async def fetch() -> list[SeasonAverage]:
            params = averages_params(season, season_type, category, stat_type)
            params["player_ids[]"] = list(player_ids)
            records = await self.client.paginate(f"/v1/season_averages/{category}", params)
            return parse_list(SeasonAverage)(records)

        key = averages_key(team_id, season, season_type, category, stat_type)
        return await self.load(EntityKind.SEASON_AVERAGES, key, fetch, parse_list(SeasonAverage))


class TeamSeasonAveragesFetcher(CachedFetcher):
    """Team-level season averages, at most one row per team and season."""

    async def get_team_season_averages(
        self,
        team_id: int,
        season: int,
        category: str = "general",
        season_type: str = "regular",
        stat_type: str = "base",
    ) -> TeamSeasonAverage | None:
        """Returns the team's row, or None if there is none or the fetch failed."""

        async def fetch() -> TeamSeasonAverage | None:
            params = averages_params(season, season_type, category, stat_type)
            params["team_ids[]"] = [team_id]
            records = await self.client.paginate(f"/v1/team_season_averages/{category}", params)
            rows = parse_list(TeamSeasonAverage)(records)
            return next((row for row in rows if row.team.id == team_id), None)

        key = averages_key(team_id, season, season_type, category, stat_type)
        return await self.load(
            EntityKind.TEAM_SEASON_AVERAGES, key, fetch, parse_one(TeamSeasonAverage)
        )
