"""Tests for American odds conversion and latest-wins collapsing."""

import pytest

from nba_sgp_advisor.analysis.odds import (
    american_to_probability,
    collapse_latest,
    latest_odds_by_vendor,
    latest_props,
    to_probability_shares,
)
from nba_sgp_advisor.data.models import GameOdds, PlayerProp


def test_negative_odds_to_probability():
    """-110 -> 110/210 = 0.5238"""
    assert american_to_probability(-110) == 0.5238
    assert american_to_probability(-200) == 0.6667


def test_positive_odds_to_probability():
    """+130 -> 100/230 = 0.4348"""
    assert american_to_probability(130) == 0.4348
    assert american_to_probability(100) == 0.5


def test_probability_monotonic():
    """Longer odds always imply a lower probability."""
    ladder = [-500, -200, -110, 100, 130, 250, 1000]
    probs = [american_to_probability(odds) for odds in ladder]

    assert probs == sorted(probs, reverse=True)
    assert all(0 < p < 1 for p in probs)


def test_zero_odds_rejected():
    with pytest.raises(ValueError):
        american_to_probability(0)


def test_latest_odds_wins_per_vendor(make_odds):
    older = GameOdds.model_validate(
        make_odds(vendor="draftkings", updated_at="2026-02-20T17:00:00Z", odds_id=1, moneyline_home_odds=-180)
    )
    newer = GameOdds.model_validate(
        make_odds(vendor="draftkings", updated_at="2026-02-20T18:00:00Z", odds_id=2, moneyline_home_odds=-200)
    )
    other = GameOdds.model_validate(make_odds(vendor="caesars", odds_id=3))

    collapsed = latest_odds_by_vendor([newer, other, older])

    assert [o.vendor for o in collapsed] == ["caesars", "draftkings"]
    assert collapsed[1].id == 2
    assert collapsed[1].moneyline_home_odds == -200


def test_collapse_tie_keeps_first_seen(make_odds):
    first = GameOdds.model_validate(make_odds(odds_id=1))
    second = GameOdds.model_validate(make_odds(odds_id=2))

    collapsed = collapse_latest([first, second], key=lambda o: o.vendor)

    assert collapsed["draftkings"].id == 1


def test_latest_props_per_player_and_type(make_prop):
    props = [
        PlayerProp.model_validate(make_prop(prop_id=1, updated_at="2026-02-20T17:00:00Z", line_value="30.5")),
        PlayerProp.model_validate(make_prop(prop_id=2, updated_at="2026-02-20T18:00:00Z", line_value="31.5")),
        PlayerProp.model_validate(make_prop(prop_id=3, prop_type="assists", line_value="6.5")),
        PlayerProp.model_validate(make_prop(prop_id=4, player_id=176, line_value="20.5")),
    ]

    collapsed = latest_props(props)

    assert [(p.player_id, p.prop_type, p.line_value) for p in collapsed] == [
        (175, "assists", "6.5"),
        (175, "points", "31.5"),
        (176, "points", "20.5"),
    ]


def test_to_probability_shares_converts_every_odds_field(make_odds):
    odds = GameOdds.model_validate(make_odds(moneyline_away_odds=130))

    shares = to_probability_shares(odds)

    assert shares["spread_home_odds"] == 0.5238
    assert shares["moneyline_home_odds"] == 0.6667
    assert shares["moneyline_away_odds"] == 0.4348
    assert shares["total_under_odds"] == 0.5238
    # Line values are left as-is
    assert shares["spread_home_value"] == "-5.5"
    assert shares["vendor"] == "draftkings"


def test_to_probability_shares_keeps_missing_odds(make_odds):
    odds = GameOdds.model_validate(make_odds(spread_home_odds=None, spread_away_odds=None))

    shares = to_probability_shares(odds)

    assert shares["spread_home_odds"] is None
