"""Tests for same-game parlay advice assembly."""

from unittest.mock import AsyncMock

import pytest

from nba_sgp_advisor.analysis.advisor import (
    build_parlay_prompt,
    format_market_prices,
    same_game_parlay_advice,
)
from nba_sgp_advisor.analysis.aggregator import GameAnalysis, TeamAnalysis
from nba_sgp_advisor.analysis.formatter import NOT_AVAILABLE
from nba_sgp_advisor.data.errors import EntityFetchError, TransportError
from nba_sgp_advisor.data.models import Game, GameOdds, Team


@pytest.fixture
def generator():
    generator = AsyncMock()
    generator.complete.return_value = "Leg 1: SGA over 31.5 points"
    return generator


@pytest.fixture
def scheduled(provider, make_player, make_game, make_odds, okc, lal):
    provider.add("/v1/games", [make_game()], start_date="2026-02-19")
    provider.add("/v1/players/active", [make_player(175, "Shai", "Gilgeous-Alexander", okc)], **{"team_ids[]": [21]})
    provider.add("/v1/players/active", [make_player(237, "LeBron", "James", lal)], **{"team_ids[]": [14]})
    provider.add(
        "/v2/odds",
        [make_odds(vendor="polymarket", moneyline_away_odds=130), make_odds(vendor="draftkings", odds_id=2)],
    )
    return provider


def test_market_prices_as_probabilities(make_odds):
    odds = [GameOdds.model_validate(make_odds(vendor="polymarket", moneyline_away_odds=130))]

    text = format_market_prices(odds, "polymarket")

    assert text.startswith("polymarket: moneyline home 0.6667 / away 0.4348")
    assert "spread home -5.5 @ 0.5238" in text


def test_market_prices_filter_vendor(make_odds):
    odds = [GameOdds.model_validate(make_odds(vendor="draftkings"))]

    assert format_market_prices(odds, "polymarket") == NOT_AVAILABLE
    assert format_market_prices(odds, None).startswith("draftkings:")
    assert format_market_prices(None) == NOT_AVAILABLE


def test_prompt_embeds_analysis_and_prices(make_game, make_player, okc, lal):
    game = Game.model_validate(make_game())
    analysis = GameAnalysis(
        game=game,
        home=TeamAnalysis(team=Team.model_validate(okc), roster=[]),
        visitor=TeamAnalysis(team=Team.model_validate(lal), roster=[]),
    )

    prompt = build_parlay_prompt(analysis, vendor="polymarket")

    assert "=== GAME: Oklahoma City Thunder vs Los Angeles Lakers ===" in prompt
    assert "## Market Prices (polymarket)" in prompt
    assert f"BETTING ODDS: {NOT_AVAILABLE}" in prompt


def test_prompt_forbids_redundant_legs_and_requests_json(make_game, okc, lal):
    analysis = GameAnalysis(
        game=Game.model_validate(make_game()),
        home=TeamAnalysis(team=Team.model_validate(okc), roster=[]),
        visitor=TeamAnalysis(team=Team.model_validate(lal), roster=[]),
    )

    prompt = build_parlay_prompt(analysis)

    assert "DO NOT BUILD A PARLAY WITH INCOMPATIBLE OR REDUNDANT LEGS" in prompt
    assert "A moneyline and a\nspread for the same team" in prompt
    assert "Respond with ONLY a valid JSON object." in prompt
    for key in ('"confidence"', '"key_factors"', '"legs"', '"shares"', '"rationale"'):
        assert key in prompt
    assert "{{" not in prompt


@pytest.mark.asyncio
async def test_advice_for_scheduled_matchup(scheduled, fetchers, generator):
    advice = await same_game_parlay_advice(
        "Thunder", "Lakers", fetchers, generator, start_date="2026-02-19"
    )

    assert advice.found is True
    assert advice.game.id == 1001
    assert advice.message == "Leg 1: SGA over 31.5 points"
    generator.complete.assert_awaited_once_with(advice.prompt)
    assert "polymarket: moneyline home 0.6667 / away 0.4348" in advice.prompt
    assert "draftkings:" not in advice.prompt.split("## Market Prices")[1]


@pytest.mark.asyncio
async def test_unknown_matchup_returns_not_found(scheduled, fetchers, generator):
    advice = await same_game_parlay_advice(
        "Celtics", "Knicks", fetchers, generator, start_date="2026-02-19"
    )

    assert advice.found is False
    assert "Celtics" in advice.message and "Knicks" in advice.message
    assert advice.game is None
    generator.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_schedule_failure_propagates(provider, fetchers, generator):
    provider.add("/v1/games", TransportError("balldontlie API error: 500 Internal Server Error", status_code=500))

    with pytest.raises(EntityFetchError):
        await same_game_parlay_advice("Thunder", "Lakers", fetchers, generator, start_date="2026-02-19")


@pytest.mark.asyncio
async def test_generator_errors_propagate(scheduled, fetchers):
    generator = AsyncMock()
    generator.complete.side_effect = RuntimeError("completion failed")

    with pytest.raises(RuntimeError, match="completion failed"):
        await same_game_parlay_advice("Thunder", "Lakers", fetchers, generator, start_date="2026-02-19")
