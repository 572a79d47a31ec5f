from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import BoardKey

RECORD_PATTERN = r"^\d{1,3}-\d{1,3}$"


class RankEntry(BaseModel):
    """One parsed ranking row. Transient: derived from raw text on every read."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    rank: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    overall: Optional[str] = Field(None, pattern=RECORD_PATTERN)
    conf: Optional[str] = Field(None, pattern=RECORD_PATTERN)
    logo: Optional[str] = None


class RankingBoard(BaseModel):
    """A rankings page backed by one site_settings key."""

    model_config = ConfigDict(frozen=True)

    key: BoardKey
    title: str
    subtitle: str
    show_conference: bool = False
    placeholder: str = ""

    @property
    def format_hint(self) -> str:
        if self.show_conference:
            return "1. Ohio State (8-0, 5-0) - overall record first, conference record second."
        return "1. Alabama (8-0) - logos load automatically."


TOP25_BOARD = RankingBoard(
    key=BoardKey.TOP25,
    title="Top 25",
    subtitle="National top 25 rankings",
    show_conference=False,
    placeholder="1. Alabama (8-0)\n2. Georgia (7-1)\n3. Ohio State (7-1)\n...",
)

BIG10_BOARD = RankingBoard(
    key=BoardKey.BIG10,
    title="Big 10 Rankings",
    subtitle="Big 10 conference standings & rankings",
    show_conference=True,
    placeholder="1. Ohio State (8-0, 5-0)\n2. Michigan (7-1, 4-1)\n3. Penn State (7-1, 4-1)\n...",
)

BOARDS: Dict[BoardKey, RankingBoard] = {
    TOP25_BOARD.key: TOP25_BOARD,
    BIG10_BOARD.key: BIG10_BOARD,
}


def get_board(key: str) -> RankingBoard:
    """Looks up a board by setting key (e.g. 'rankings_top25') or short name ('top25')."""
    normalized = key.strip().lower()
    if not normalized.startswith("rankings_"):
        normalized = f"rankings_{normalized}"
    try:
        return BOARDS[BoardKey(normalized)]
    except ValueError:
        raise KeyError(f"Unknown rankings board: {key}") from None


class RankingsSnapshot(BaseModel):
    """A published weekly rankings snapshot row (rankings_snapshots table)."""

    season_id: int
    week: int
    rankings_json: Optional[Dict[str, Any]] = None
    published_at: Optional[datetime] = None
