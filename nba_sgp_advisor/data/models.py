"""Pydantic models for balldontlie entities.

Models are read-only snapshots of one fetch. Unknown provider fields are
ignored, except inside stat lines where they are kept as explicit
extensions.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, model_validator

StatValue = int | float | str | None


class ProviderModel(BaseModel):
    """Base for provider records: frozen, tolerant of extra fields."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Team(ProviderModel):
    """Team reference data.

    Attributes:
        id: balldontlie team ID
        conference: "East" or "West"
        division: Division name
        city: Team city (e.g. "Oklahoma City")
        name: Short name (e.g. "Thunder")
        full_name: City + name (e.g. "Oklahoma City Thunder")
        abbreviation: Three letter code (e.g. "OKC")
    """

    id: int
    conference: str = ""
    division: str = ""
    city: str
    name: str
    full_name: str
    abbreviation: str

    @property
    def label(self) -> str:
        return f"{self.city} {self.name}"


class PlayerRef(ProviderModel):
    """Minimal player reference embedded in other records."""

    id: int
    first_name: str
    last_name: str
    position: str = ""
    team_id: int | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Player(ProviderModel):
    """Active player with the team they belonged to at fetch time."""

    id: int
    first_name: str
    last_name: str
    position: str = ""
    team: Team

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class StatKey(str, Enum):
    """Stat names with a known meaning across categories."""

    GP = "gp"
    MIN = "min"
    PTS = "pts"
    REB = "reb"
    OREB = "oreb"
    DREB = "dreb"
    AST = "ast"
    STL = "stl"
    BLK = "blk"
    TURNOVER = "turnover"
    PF = "pf"
    FGM = "fgm"
    FGA = "fga"
    FG_PCT = "fg_pct"
    FG3M = "fg3m"
    FG3A = "fg3a"
    FG3_PCT = "fg3_pct"
    FTM = "ftm"
    FTA = "fta"
    FT_PCT = "ft_pct"
    PLUS_MINUS = "plus_minus"
    W = "w"
    L = "l"
    OPP_PTS = "opp_pts"
    PACE = "pace"
    OFF_RATING = "off_rating"
    DEF_RATING = "def_rating"
    NET_RATING = "net_rating"


_KNOWN_STATS = {key.value for key in StatKey}


class StatLine(ProviderModel):
    """Stat mapping split into known keys and provider extensions.

    Built from the provider's flat ``stats`` object. Keys found in StatKey
    land in ``known``; everything else is kept verbatim in ``extensions``.

    Attributes:
        known: Values for recognised stat names
        extensions: Provider-specific fields outside StatKey
    """

    known: dict[StatKey, StatValue] = {}
    extensions: dict[str, StatValue] = {}

    @model_validator(mode="before")
    @classmethod
    def split_raw_stats(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data and set(data) <= {"known", "extensions"}:
            return data
        known = {k: v for k, v in data.items() if k in _KNOWN_STATS}
        extensions = {k: v for k, v in data.items() if k not in _KNOWN_STATS}
        return {"known": known, "extensions": extensions}

    def get(self, key: StatKey | str) -> StatValue:
        if isinstance(key, StatKey) or key in _KNOWN_STATS:
            return self.known.get(StatKey(key))
        return self.extensions.get(key)

    def select(self, keys: Iterable[StatKey]) -> list[tuple[StatKey, StatValue]]:
        """Return (key, value) pairs in the given order, skipping missing values."""
        return [(key, self.known[key]) for key in keys if self.known.get(key) is not None]


class SeasonAverage(ProviderModel):
    """One player's averages for a season / season type / category."""

    player: PlayerRef
    season: int
    season_type: str = "regular"
    stats: StatLine = StatLine()


class TeamSeasonAverage(ProviderModel):
    """One team's averages for a season / season type / category."""

    team: Team
    season: int
    season_type: str = "regular"
    stats: StatLine = StatLine()


class InjuryStatus(str, Enum):
    OUT = "Out"
    DAY_TO_DAY = "Day-To-Day"
    QUESTIONABLE = "Questionable"
    DOUBTFUL = "Doubtful"
    PROBABLE = "Probable"


class Injury(ProviderModel):
    """Injury report entry.

    ``status`` is an InjuryStatus when the provider uses a known label and
    the raw string otherwise.
    """

    player: PlayerRef
    status: InjuryStatus | str
    return_date: str | None = None
    description: str | None = None

    @property
    def status_label(self) -> str:
        return self.status.value if isinstance(self.status, InjuryStatus) else self.status


FINAL_STATUSES = frozenset({"Final", "Completed"})


class Game(ProviderModel):
    """Scheduled, live or completed game."""

    id: int
    date: str
    season: int
    status: str = "Scheduled"
    home_team: Team
    visitor_team: Team
    home_team_score: int | None = None
    visitor_team_score: int | None = None
    postseason: bool = False
    datetime: str | None = None
    period: int = 0
    time: str | None = None

    @property
    def is_final(self) -> bool:
        return self.status in FINAL_STATUSES

    @property
    def is_live(self) -> bool:
        return self.period > 0 and not self.is_final

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team.id, self.visitor_team.id)

    def is_pairing(self, team_a_id: int, team_b_id: int) -> bool:
        """True if the two team IDs play each other here, in either order."""
        pair = (self.home_team.id, self.visitor_team.id)
        return pair in ((team_a_id, team_b_id), (team_b_id, team_a_id))


class LineupEntry(ProviderModel):
    """One player's lineup slot in one game."""

    id: int
    game_id: int
    starter: bool
    position: str = ""
    player: PlayerRef
    team: Team


class GameOdds(ProviderModel):
    """One vendor's game lines (American odds)."""

    id: int
    game_id: int
    vendor: str
    spread_home_value: str | None = None
    spread_home_odds: float | None = None
    spread_away_value: str | None = None
    spread_away_odds: float | None = None
    moneyline_home_odds: float | None = None
    moneyline_away_odds: float | None = None
    total_value: str | None = None
    total_over_odds: float | None = None
    total_under_odds: float | None = None
    updated_at: datetime


class PropMarket(ProviderModel):
    """Prop market: "over_under" uses over/under odds, "milestone" uses odds."""

    type: str
    over_odds: float | None = None
    under_odds: float | None = None
    odds: float | None = None

    @property
    def is_over_under(self) -> bool:
        return self.type == "over_under"


class PlayerProp(ProviderModel):
    """One vendor's line for one player and prop type."""

    id: int
    game_id: int
    player_id: int
    vendor: str
    prop_type: str
    line_value: str
    market: PropMarket
    updated_at: datetime
