"""Game analysis: aggregation, odds handling, rendering and parlay advice."""

from nba_sgp_advisor.analysis.advisor import (
    ParlayAdvice,
    TextGenerator,
    build_parlay_prompt,
    same_game_parlay_advice,
)
from nba_sgp_advisor.analysis.aggregator import (
    GameAnalysis,
    TeamAnalysis,
    build_all_game_analyses,
    build_game_analysis,
    build_team_analysis,
    find_game,
    find_scheduled_game,
    resolve_matchup,
    team_matches,
)
from nba_sgp_advisor.analysis.formatter import NOT_AVAILABLE, format_game_analysis
from nba_sgp_advisor.analysis.odds import (
    american_to_probability,
    latest_odds_by_vendor,
    latest_props,
    to_probability_shares,
)

__all__ = [
    "GameAnalysis",
    "TeamAnalysis",
    "build_team_analysis",
    "build_game_analysis",
    "build_all_game_analyses",
    "team_matches",
    "find_game",
    "find_scheduled_game",
    "resolve_matchup",
    "NOT_AVAILABLE",
    "format_game_analysis",
    "american_to_probability",
    "latest_odds_by_vendor",
    "latest_props",
    "to_probability_shares",
    "ParlayAdvice",
    "TextGenerator",
    "build_parlay_prompt",
    "same_game_parlay_advice",
]
