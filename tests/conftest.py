"""Shared pytest fixtures for the NBA same-game parlay advisor tests."""

from unittest.mock import AsyncMock

import pytest

from nba_sgp_advisor.config import Settings
from nba_sgp_advisor.data.cache import CacheStore
from nba_sgp_advisor.data.client import BallDontLieClient
from nba_sgp_advisor.data.fetchers import build_fetchers
from nba_sgp_advisor.monitoring import configure_logging

OKC = {
    "id": 21,
    "conference": "West",
    "division": "Northwest",
    "city": "Oklahoma City",
    "name": "Thunder",
    "full_name": "Oklahoma City Thunder",
    "abbreviation": "OKC",
}

LAL = {
    "id": 14,
    "conference": "West",
    "division": "Pacific",
    "city": "Los Angeles",
    "name": "Lakers",
    "full_name": "Los Angeles Lakers",
    "abbreviation": "LAL",
}

BOS = {
    "id": 2,
    "conference": "East",
    "division": "Atlantic",
    "city": "Boston",
    "name": "Celtics",
    "full_name": "Boston Celtics",
    "abbreviation": "BOS",
}


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Configure structlog for test output."""
    configure_logging("development")


@pytest.fixture
def settings(tmp_path):
    """Settings with a test API key and an isolated cache directory."""
    return Settings(balldontlie_api_key="test-key", cache_dir=str(tmp_path / "settings_cache"))


@pytest.fixture
def clean_cache(tmp_path):
    """Provide a fresh cache instance for testing.

    Uses tmp_path to ensure isolated cache directory per test.
    """
    cache = CacheStore(cache_dir=str(tmp_path / "test_cache"))
    yield cache
    cache.clear()
    cache.close()


class FakeProvider:
    """Routes paginate(path, params) calls to canned records.

    Routes are matched on path plus a subset of query parameters; the first
    matching route wins. A route whose result is an exception raises it.
    Unmatched requests return an empty list.
    """

    def __init__(self):
        self.routes: dict[str, list] = {}
        self.calls: list[tuple[str, dict]] = []

    def add(self, path, result, **match):
        self.routes.setdefault(path, []).append((match, result))

    def calls_to(self, path):
        return [params for called, params in self.calls if called == path]

    async def paginate(self, path, params=None):
        params = dict(params or {})
        self.calls.append((path, params))
        for match, result in self.routes.get(path, []):
            if all(params.get(k) == v for k, v in match.items()):
                if isinstance(result, Exception):
                    raise result
                return result
        return []


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def fake_client(provider):
    """AsyncMock client whose paginate() is served by the fake provider."""
    client = AsyncMock(spec=BallDontLieClient)
    client.paginate.side_effect = provider.paginate
    return client


@pytest.fixture
def fetchers(fake_client, clean_cache, settings):
    return build_fetchers(client=fake_client, cache=clean_cache, settings=settings)


@pytest.fixture
def make_player():
    def make(player_id, first_name, last_name, team, position="G"):
        return {
            "id": player_id,
            "first_name": first_name,
            "last_name": last_name,
            "position": position,
            "team": team,
        }

    return make


@pytest.fixture
def make_game():
    def make(
        game_id=1001,
        home=OKC,
        visitor=LAL,
        date="2026-02-20",
        status="7:30 pm ET",
        home_score=0,
        visitor_score=0,
        season=2025,
    ):
        return {
            "id": game_id,
            "date": date,
            "season": season,
            "status": status,
            "period": 4 if status == "Final" else 0,
            "time": "Final" if status == "Final" else None,
            "postseason": False,
            "home_team": home,
            "visitor_team": visitor,
            "home_team_score": home_score,
            "visitor_team_score": visitor_score,
        }

    return make


@pytest.fixture
def make_odds():
    def make(vendor="draftkings", updated_at="2026-02-20T18:00:00Z", game_id=1001, odds_id=1, **overrides):
        record = {
            "id": odds_id,
            "game_id": game_id,
            "vendor": vendor,
            "spread_home_value": "-5.5",
            "spread_home_odds": -110,
            "spread_away_value": "5.5",
            "spread_away_odds": -110,
            "moneyline_home_odds": -200,
            "moneyline_away_odds": 170,
            "total_value": "224.5",
            "total_over_odds": -110,
            "total_under_odds": -110,
            "updated_at": updated_at,
        }
        record.update(overrides)
        return record

    return make


@pytest.fixture
def make_prop():
    def make(
        player_id=175,
        prop_type="points",
        updated_at="2026-02-20T18:00:00Z",
        vendor="draftkings",
        line_value="31.5",
        market=None,
        prop_id=1,
        game_id=1001,
    ):
        return {
            "id": prop_id,
            "game_id": game_id,
            "player_id": player_id,
            "vendor": vendor,
            "prop_type": prop_type,
            "line_value": line_value,
            "market": market or {"type": "over_under", "over_odds": -115, "under_odds": -105},
            "updated_at": updated_at,
        }

    return make


@pytest.fixture
def okc():
    return dict(OKC)


@pytest.fixture
def lal():
    return dict(LAL)


@pytest.fixture
def bos():
    return dict(BOS)
