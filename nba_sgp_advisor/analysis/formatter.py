"""Text rendering of a GameAnalysis for the text-generation prompt.

Output is deterministic: identical analyses produce byte-identical text.
Every section is always present; a section whose data could not be fetched
renders NOT_AVAILABLE instead of being omitted.
"""

from typing import Iterable

from nba_sgp_advisor.analysis.aggregator import GameAnalysis, TeamAnalysis
from nba_sgp_advisor.analysis.odds import latest_odds_by_vendor, latest_props
from nba_sgp_advisor.data.models import (
    Game,
    GameOdds,
    LineupEntry,
    Player,
    PlayerProp,
    StatKey,
    StatLine,
)

NOT_AVAILABLE = "Not available"

KEY_PLAYER_STATS = (
    StatKey.PTS,
    StatKey.AST,
    StatKey.REB,
    StatKey.STL,
    StatKey.BLK,
    StatKey.FG_PCT,
    StatKey.FG3_PCT,
    StatKey.TURNOVER,
)

KEY_TEAM_STATS = (
    StatKey.PTS,
    StatKey.AST,
    StatKey.REB,
    StatKey.STL,
    StatKey.BLK,
    StatKey.FG_PCT,
    StatKey.FG3_PCT,
    StatKey.OPP_PTS,
    StatKey.PACE,
)


def format_stat_line(stats: StatLine, keys: Iterable[StatKey]) -> str:
    """Render selected stats as "pts: 25.1 | ast: 6.2", skipping missing ones."""
    parts = [f"{key.value}: {value}" for key, value in stats.select(keys)]
    return " | ".join(parts) if parts else NOT_AVAILABLE


def format_american(odds: float | None) -> str:
    """Render American odds with an explicit sign, e.g. -110 or +130."""
    if odds is None:
        return "n/a"
    if float(odds).is_integer():
        return f"{int(odds):+d}"
    return f"{odds:+}"


def _format_injuries(team: TeamAnalysis) -> list[str]:
    if team.injuries is None:
        return [f"INJURY REPORT: {NOT_AVAILABLE}"]
    if not team.injuries:
        return ["INJURY REPORT: None reported"]

    lines = [f"INJURY REPORT ({len(team.injuries)}):"]
    for injury in team.injuries:
        line = f"  {injury.player.display_name}"
        if injury.player.position:
            line += f" ({injury.player.position})"
        line += f" - {injury.status_label}"
        if injury.return_date:
            line += f" | Return: {injury.return_date}"
        if injury.description:
            line += f" | {injury.description}"
        lines.append(line)
    return lines


def _format_lineup(team: TeamAnalysis) -> list[str]:
    starters = [entry for entry in team.lineups or [] if entry.starter]
    if not starters:
        return [f"STARTING LINEUP: {NOT_AVAILABLE}"]

    lines = ["STARTING LINEUP:"]
    for entry in starters:
        position = entry.position or entry.player.position
        suffix = f" ({position})" if position else ""
        lines.append(f"  {entry.player.display_name}{suffix}")
    return lines


def _format_result(game: Game, team_id: int) -> str:
    at_home = game.home_team.id == team_id
    opponent = game.visitor_team if at_home else game.home_team
    own = game.home_team_score if at_home else game.visitor_team_score
    other = game.visitor_team_score if at_home else game.home_team_score
    venue = "vs" if at_home else "@"

    if own is None or other is None:
        return f"  {game.date} {venue} {opponent.abbreviation}"
    result = "W" if own > other else "L"
    return f"  {game.date} {venue} {opponent.abbreviation} {result} {own}-{other}"


def _format_recent_form(team: TeamAnalysis) -> list[str]:
    if not team.recent_games:
        return [f"RECENT FORM: {NOT_AVAILABLE}"]

    lines = [f"RECENT FORM (last {len(team.recent_games)}):"]
    lines.extend(_format_result(game, team.team.id) for game in team.recent_games)
    return lines


def _format_recent_starters(team: TeamAnalysis) -> list[str]:
    """Starters per recent game, in recent-form order; games without lineups are skipped."""
    by_game: dict[int, list[LineupEntry]] = {}
    for entry in team.recent_lineups or []:
        if entry.starter:
            by_game.setdefault(entry.game_id, []).append(entry)

    lines = []
    for game in team.recent_games or []:
        starters = by_game.get(game.id)
        if not starters:
            continue
        names = []
        for entry in starters:
            position = entry.position or entry.player.position
            names.append(f"{entry.player.display_name} ({position})" if position else entry.player.display_name)
        lines.append(f"  {game.date}: {', '.join(names)}")

    if not lines:
        return [f"RECENT STARTERS: {NOT_AVAILABLE}"]
    return ["RECENT STARTERS:", *lines]


def _format_team_stats(team: TeamAnalysis) -> list[str]:
    averages = team.team_averages
    if averages is None:
        return [f"TEAM STATS: {NOT_AVAILABLE}"]
    return [
        f"TEAM STATS ({averages.season} {averages.season_type}):",
        f"  {format_stat_line(averages.stats, KEY_TEAM_STATS)}",
    ]


def _format_player_averages(team: TeamAnalysis) -> list[str]:
    if not team.player_averages:
        return [f"PLAYER AVERAGES: {NOT_AVAILABLE}"]

    lines = [f"PLAYER AVERAGES ({len(team.player_averages)} players):"]
    for average in team.player_averages:
        stats = format_stat_line(average.stats, KEY_PLAYER_STATS)
        lines.append(f"  {average.player.display_name}: {stats}")
    return lines


def format_team_analysis(team: TeamAnalysis, side: str) -> str:
    """Render one side's sections in fixed order."""
    lines = [f"--- {team.team.label} ({side}) ---", ""]
    for section in (
        _format_injuries,
        _format_lineup,
        _format_recent_form,
        _format_recent_starters,
        _format_team_stats,
        _format_player_averages,
    ):
        lines.extend(section(team))
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def format_odds(odds: list[GameOdds] | None, game: Game) -> str:
    """Latest quote per vendor, vendors in alphabetical order."""
    if not odds:
        return f"BETTING ODDS: {NOT_AVAILABLE}"

    home = game.home_team.abbreviation
    away = game.visitor_team.abbreviation
    lines = ["BETTING ODDS (latest per vendor):"]
    for quote in latest_odds_by_vendor(odds):
        lines.append(f"  {quote.vendor} (updated {quote.updated_at.isoformat()}):")
        if quote.spread_home_value is not None or quote.spread_away_value is not None:
            lines.append(
                f"    Spread: {home} {quote.spread_home_value} ({format_american(quote.spread_home_odds)}), "
                f"{away} {quote.spread_away_value} ({format_american(quote.spread_away_odds)})"
            )
        if quote.moneyline_home_odds is not None or quote.moneyline_away_odds is not None:
            lines.append(
                f"    Moneyline: {home} {format_american(quote.moneyline_home_odds)}, "
                f"{away} {format_american(quote.moneyline_away_odds)}"
            )
        if quote.total_value is not None:
            lines.append(
                f"    Total: {quote.total_value} (Over {format_american(quote.total_over_odds)}, "
                f"Under {format_american(quote.total_under_odds)})"
            )
    return "\n".join(lines)


def format_player_props(props: list[PlayerProp] | None, players: Iterable[Player]) -> str:
    """Latest quote per (player, prop type), grouped by player."""
    if not props:
        return f"PLAYER PROPS: {NOT_AVAILABLE}"

    names = {p.id: p.display_name for p in players}
    lines = ["PLAYER PROPS (latest per player and prop type):"]
    current_player = None
    for prop in latest_props(props):
        if prop.player_id != current_player:
            current_player = prop.player_id
            lines.append(f"  {names.get(prop.player_id, f'Player #{prop.player_id}')}:")

        market = prop.market
        if market.is_over_under:
            price = f"O {format_american(market.over_odds)}, U {format_american(market.under_odds)}"
        else:
            price = format_american(market.odds)
        lines.append(f"    {prop.prop_type}: {prop.line_value} ({price}) [{prop.vendor}]")
    return "\n".join(lines)


def format_game_header(game: Game) -> str:
    return "\n".join(
        [
            f"=== GAME: {game.home_team.label} vs {game.visitor_team.label} ===",
            f"Date: {game.date} | Season: {game.season} | Game ID: {game.id}",
            f"Status: {game.status}",
        ]
    )


def format_game_analysis(analysis: GameAnalysis) -> str:
    """Render a full game analysis.

    Sections, in order: header, home team, visitor team, betting odds,
    player props.
    """
    return "\n\n".join(
        [
            format_game_header(analysis.game),
            format_team_analysis(analysis.home, "HOME"),
            format_team_analysis(analysis.visitor, "AWAY"),
            format_odds(analysis.odds, analysis.game),
            format_player_props(analysis.player_props, analysis.players),
        ]
    )
