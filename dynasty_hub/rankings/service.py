from typing import List

from loguru import logger
from supabase import AsyncClient

from dynasty_hub.models.rankings import RankEntry, RankingBoard
from dynasty_hub.parsing.rankings_parser import parse_rankings
from dynasty_hub.storage.supabase_client import fetch_setting, upsert_setting


class RankingsSaveError(Exception):
    """Raised when a rankings board cannot be saved or cleared."""

    pass


class RankingsBoardService:
    """Loads, previews, saves and clears one rankings board.

    Only the raw pasted text is stored (in site_settings under the board key);
    parsed entries are recomputed from it every time.
    """

    def __init__(self, client: AsyncClient, board: RankingBoard):
        self.client = client
        self.board = board
        self.raw_text = ""

    def preview(self, draft: str) -> List[RankEntry]:
        """Parses a draft without saving it (live preview while editing)."""
        return parse_rankings(draft, self.board.show_conference)

    async def load(self) -> List[RankEntry]:
        text = await fetch_setting(self.client, self.board.key.value)
        if text is None:
            logger.warning(
                f"Could not load rankings for {self.board.key.value}; showing none."
            )
            text = ""
        self.raw_text = text
        return self.preview(text)

    async def save(self, draft: str) -> List[RankEntry]:
        """Stores the trimmed draft and returns its parsed entries."""
        text = (draft or "").strip()
        if not text:
            raise RankingsSaveError("Paste your rankings first.")

        if not await upsert_setting(self.client, self.board.key.value, text):
            raise RankingsSaveError("Failed to save rankings.")

        self.raw_text = text
        entries = self.preview(text)
        logger.info(self.summary(entries))
        return entries

    async def clear(self) -> None:
        if not await upsert_setting(self.client, self.board.key.value, ""):
            raise RankingsSaveError("Failed to clear rankings.")
        self.raw_text = ""
        logger.info(f"Rankings cleared for {self.board.key.value}.")

    @staticmethod
    def summary(entries: List[RankEntry]) -> str:
        return f"Rankings updated - {len(entries)} teams."
