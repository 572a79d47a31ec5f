from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dynasty_hub.models.rankings import RankEntry, RankingBoard

EMPTY_CELL = "—"
LOGO_PLACEHOLDER = "[ ]"

# Gold / silver / bronze for the top three
RANK_COLORS = {1: "#FFD700", 2: "#C0C0C0", 3: "#cd7f32"}


def rank_color(rank: int) -> Optional[str]:
    return RANK_COLORS.get(rank)


def build_rankings_table(entries: List[RankEntry], board: RankingBoard) -> Table:
    """Builds a rich table for parsed entries; conference column only on conference boards."""
    table = Table(title=board.title, caption=f"{len(entries)} teams")
    table.add_column("#", justify="right")
    table.add_column("Logo", overflow="fold")
    table.add_column("Team", no_wrap=True)
    table.add_column("Overall", justify="center")
    if board.show_conference:
        table.add_column("Conf", justify="center")

    for entry in entries:
        color = rank_color(entry.rank)
        row = [
            Text(str(entry.rank), style=f"bold {color}" if color else ""),
            entry.logo or Text(LOGO_PLACEHOLDER),
            Text(entry.name, style="bold" if entry.rank <= 3 else ""),
            entry.overall or EMPTY_CELL,
        ]
        if board.show_conference:
            row.append(entry.conf or EMPTY_CELL)
        table.add_row(*row)
    return table


def render_rankings(
    entries: List[RankEntry], board: RankingBoard, console: Optional[Console] = None
) -> None:
    console = console or Console()
    if not entries:
        console.print(
            Panel(
                f"No rankings posted yet\n{board.subtitle}",
                title=board.title,
            )
        )
        return
    console.print(build_rankings_table(entries, board))
