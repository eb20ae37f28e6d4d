"""Same-game parlay advice: matchup -> analysis -> prompt -> completion.

The text-generation step is any object with an async ``complete(prompt)``
method; its errors are propagated to the caller unchanged.
"""

from dataclasses import dataclass
from typing import Protocol

from nba_sgp_advisor.analysis.aggregator import GameAnalysis, build_game_analysis, resolve_matchup
from nba_sgp_advisor.analysis.formatter import NOT_AVAILABLE, format_game_analysis
from nba_sgp_advisor.analysis.odds import latest_odds_by_vendor, to_probability_shares
from nba_sgp_advisor.data.fetchers import Fetchers
from nba_sgp_advisor.data.models import Game, GameOdds
from nba_sgp_advisor.monitoring import bind_matchup, get_logger, unbind_matchup

log = get_logger()

DEFAULT_VENDOR = "polymarket"

SAME_GAME_PARLAY_PROMPT = '''Build a same-game parlay for this NBA matchup.

{analysis}

## Market Prices ({vendor})
Prices are implied probabilities, i.e. the cost of a share paying $1.00.
{market_prices}

---

Using only the data above:

1. Pick 2-4 legs (player props, spread, moneyline or total) that are positively correlated.
2. For each leg, cite the stats, injuries or lineup information that support it.
3. Flag any leg whose supporting section is "{not_available}".
4. Estimate the combined probability and compare it with the market prices.

DO NOT BUILD A PARLAY WITH INCOMPATIBLE OR REDUNDANT LEGS. A moneyline and a
spread for the same team, or a team under with that team's moneyline, add no value
together.

Keep analysis factual and tied to the provided data. Do not invent statistics.

## Output Format
Respond with ONLY a valid JSON object. No markdown, no explanation outside the JSON.
Use this exact structure:
{{
    "game": "Full matchup label, e.g. Oklahoma City Thunder vs Los Angeles Lakers",
    "date": "Game date in YYYY-MM-DD format",
    "confidence": "One of: Low, Medium, High",
    "summary": "One sentence describing the core thesis of the parlay",
    "key_factors": ["Most important injury, lineup or matchup factors"],
    "legs": [
        {{
            "type": "One of: moneyline, spread, total, player_prop",
            "bet": "Bet description using the quoted line, e.g. Over 224.5",
            "shares": "Market price of this leg as a decimal, e.g. 0.52",
            "rationale": "Why this leg fits and how it correlates with the other legs"
        }}
    ]
}}'''


class TextGenerator(Protocol):
    """Text-generation collaborator: one prompt in, one completion out."""

    async def complete(self, prompt: str) -> str: ...


@dataclass
class ParlayAdvice:
    """Result of a same-game parlay request.

    Attributes:
        team_a: First team query as given
        team_b: Second team query as given
        found: False when no upcoming game pairs the two teams
        message: Completion text, or the not-found message
        game: Resolved game
        prompt: Prompt sent to the text generator
    """

    team_a: str
    team_b: str
    found: bool
    message: str
    game: Game | None = None
    prompt: str | None = None


def format_market_prices(odds: list[GameOdds] | None, vendor: str | None = DEFAULT_VENDOR) -> str:
    """Latest quote per vendor as implied probabilities.

    Args:
        odds: Game odds, None if unavailable
        vendor: Only render this vendor, None for every vendor
    """
    quotes = latest_odds_by_vendor(odds or [])
    if vendor is not None:
        quotes = [q for q in quotes if q.vendor == vendor]
    if not quotes:
        return NOT_AVAILABLE

    lines = []
    for quote in quotes:
        shares = to_probability_shares(quote)
        lines.append(
            f"{quote.vendor}: "
            f"moneyline home {shares['moneyline_home_odds']} / away {shares['moneyline_away_odds']} | "
            f"spread home {quote.spread_home_value} @ {shares['spread_home_odds']}"
            f" / away {quote.spread_away_value} @ {shares['spread_away_odds']} | "
            f"total {quote.total_value} over {shares['total_over_odds']}"
            f" / under {shares['total_under_odds']}"
        )
    return "\n".join(lines)


def build_parlay_prompt(analysis: GameAnalysis, vendor: str | None = DEFAULT_VENDOR) -> str:
    """Assemble the same-game parlay prompt for a game analysis."""
    return SAME_GAME_PARLAY_PROMPT.format(
        analysis=format_game_analysis(analysis),
        vendor=vendor or "all vendors",
        market_prices=format_market_prices(analysis.odds, vendor),
        not_available=NOT_AVAILABLE,
    )


async def same_game_parlay_advice(
    team_a: str,
    team_b: str,
    fetchers: Fetchers,
    generator: TextGenerator,
    vendor: str | None = DEFAULT_VENDOR,
    start_date: str | None = None,
) -> ParlayAdvice:
    """Resolve a matchup from two team queries and ask for parlay advice.

    Args:
        team_a: Team query (city, name, full name or abbreviation)
        team_b: Team query
        fetchers: Entity fetchers
        generator: Text-generation collaborator
        vendor: Market vendor to price against, None for all
        start_date: First date to search for the game (default: yesterday)

    Returns:
        ParlayAdvice, with found=False if the teams have no upcoming game

    Raises:
        EntityFetchError: If the schedule or either roster cannot be fetched
    """
    bind_matchup(team_a, team_b)
    try:
        game = await resolve_matchup(fetchers, team_a, team_b, start_date)
        if game is None:
            return ParlayAdvice(
                team_a=team_a,
                team_b=team_b,
                found=False,
                message=f"No upcoming game found between {team_a} and {team_b}.",
            )

        analysis = await build_game_analysis(game, fetchers)
        prompt = build_parlay_prompt(analysis, vendor)
        completion = await generator.complete(prompt)
        log.info("parlay_advice_generated", game_id=game.id, prompt_chars=len(prompt))

        return ParlayAdvice(
            team_a=team_a,
            team_b=team_b,
            found=True,
            message=completion,
            game=game,
            prompt=prompt,
        )
    finally:
        unbind_matchup()
