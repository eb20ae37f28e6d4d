"""Tests for provider models and stat typing."""

from nba_sgp_advisor.data.models import Game, Injury, InjuryStatus, StatKey, StatLine


def test_stat_line_splits_known_and_extension_fields():
    stats = StatLine.model_validate({"pts": 28.4, "fg_pct": 0.51, "deflections": 3.2, "w": 40})

    assert stats.known == {StatKey.PTS: 28.4, StatKey.FG_PCT: 0.51, StatKey.W: 40}
    assert stats.extensions == {"deflections": 3.2}
    assert stats.get(StatKey.PTS) == 28.4
    assert stats.get("deflections") == 3.2
    assert stats.get("ast") is None


def test_stat_line_select_preserves_order_and_skips_missing():
    stats = StatLine.model_validate({"reb": 5.0, "pts": 30.0, "ast": None})

    assert stats.select([StatKey.PTS, StatKey.AST, StatKey.REB]) == [
        (StatKey.PTS, 30.0),
        (StatKey.REB, 5.0),
    ]


def test_stat_line_survives_json_roundtrip():
    stats = StatLine.model_validate({"pts": 30.0, "custom": "x"})

    restored = StatLine.model_validate(stats.model_dump(mode="json"))

    assert restored == stats


def test_injury_status_accepts_unknown_values():
    known = Injury.model_validate(
        {"player": {"id": 1, "first_name": "A", "last_name": "B"}, "status": "Out"}
    )
    unknown = Injury.model_validate(
        {"player": {"id": 1, "first_name": "A", "last_name": "B"}, "status": "Suspended"}
    )

    assert known.status == InjuryStatus.OUT
    assert known.status_label == "Out"
    assert unknown.status_label == "Suspended"


def test_game_pairing_and_status(make_game):
    game = Game.model_validate(make_game(status="Final", home_score=120, visitor_score=110))

    assert game.is_pairing(21, 14)
    assert game.is_pairing(14, 21)
    assert not game.is_pairing(21, 2)
    assert game.involves(14)
    assert game.is_final
    assert not game.is_live
