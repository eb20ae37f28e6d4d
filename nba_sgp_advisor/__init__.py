"""NBA same-game parlay advisor.

Fetches teams, rosters, season averages, injuries, games, lineups, odds and
player props from the balldontlie API, caches them per entity kind, and
merges them into a per-game analysis that is rendered for a text-generation
step.
"""

__version__ = "0.1.0"
