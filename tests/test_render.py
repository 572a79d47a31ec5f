from rich.console import Console

from dynasty_hub.models.rankings import BIG10_BOARD, TOP25_BOARD
from dynasty_hub.parsing.rankings_parser import parse_rankings
from dynasty_hub.rankings.render import (
    build_rankings_table,
    rank_color,
    render_rankings,
)


def test_rank_colors_top_three():
    assert rank_color(1) == "#FFD700"
    assert rank_color(2) == "#C0C0C0"
    assert rank_color(3) == "#cd7f32"
    assert rank_color(4) is None


def test_table_columns_without_conference():
    entries = parse_rankings("1. Alabama (8-0)", False)
    table = build_rankings_table(entries, TOP25_BOARD)
    assert [c.header for c in table.columns] == ["#", "Logo", "Team", "Overall"]
    assert table.row_count == 1


def test_table_columns_with_conference():
    entries = parse_rankings("1. Ohio State (8-0, 5-0)\n2. Nowhere Tech", True)
    table = build_rankings_table(entries, BIG10_BOARD)
    assert [c.header for c in table.columns][-1] == "Conf"
    assert table.row_count == 2


def test_render_shows_placeholders():
    console = Console(record=True, width=200)
    entries = parse_rankings("1. Nowhere Tech\n2. Alabama (8-0)", False)
    render_rankings(entries, TOP25_BOARD, console=console)
    output = console.export_text()
    assert "Nowhere Tech" in output
    assert "—" in output
    assert "[ ]" in output
    assert "teamlogos/ncaa/500/333.png" in output


def test_render_empty_board():
    console = Console(record=True, width=120)
    render_rankings([], BIG10_BOARD, console=console)
    output = console.export_text()
    assert "No rankings posted yet" in output
