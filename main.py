import sys
import argparse
import asyncio
import inspect
import json
from pathlib import Path
from typing import List, Optional

from dynasty_hub.logging.setup import setup_logging
from dynasty_hub.config.settings import settings

setup_logging()

from loguru import logger

from dynasty_hub.models.rankings import RankingBoard, TOP25_BOARD, BIG10_BOARD, get_board
from dynasty_hub.models.weekly import UploadRef, WeeklyPreview
from dynasty_hub.parsing.rankings_parser import parse_rankings
from dynasty_hub.rankings.render import render_rankings
from dynasty_hub.rankings.service import RankingsBoardService, RankingsSaveError
from dynasty_hub.storage.supabase_client import (
    initialize_supabase,
    fetch_latest_snapshot,
    upload_screenshot,
)
from dynasty_hub.weekly.functions_client import (
    WeeklyFunctionsClient,
    WeeklyUpdateError,
    rankings_text_from_preview,
)

from rich import print
from rich.panel import Panel


def read_text(path: str) -> str:
    """Reads rankings text from a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_preview(args: argparse.Namespace) -> int:
    board = BIG10_BOARD if args.conference else TOP25_BOARD
    entries = parse_rankings(read_text(args.file), board.show_conference)
    render_rankings(entries, board)
    return 0


async def _board_service(board: RankingBoard) -> Optional[RankingsBoardService]:
    client = await initialize_supabase()
    if not client:
        logger.critical("Failed to initialize Supabase client. Exiting.")
        return None
    return RankingsBoardService(client, board)


async def cmd_show(args: argparse.Namespace) -> int:
    service = await _board_service(get_board(args.board))
    if not service:
        return 1
    entries = await service.load()
    render_rankings(entries, service.board)
    return 0


async def cmd_post(args: argparse.Namespace) -> int:
    service = await _board_service(get_board(args.board))
    if not service:
        return 1
    try:
        entries = await service.save(read_text(args.file))
    except RankingsSaveError as e:
        logger.error(str(e))
        return 1
    print(Panel(service.summary(entries), style="green"))
    render_rankings(entries, service.board)
    return 0


async def cmd_clear(args: argparse.Namespace) -> int:
    service = await _board_service(get_board(args.board))
    if not service:
        return 1
    try:
        await service.clear()
    except RankingsSaveError as e:
        logger.error(str(e))
        return 1
    print(Panel("Rankings cleared.", style="green"))
    return 0


async def cmd_latest_snapshot(args: argparse.Namespace) -> int:
    client = await initialize_supabase()
    if not client:
        return 1
    snapshot = await fetch_latest_snapshot(client)
    if not snapshot:
        print(Panel("No rankings uploaded yet."))
        return 0
    top25 = (snapshot.rankings_json or {}).get("top25") or []
    lines = [f"#{row.get('rank')}  {row.get('team')}" for row in top25]
    print(
        Panel(
            "\n".join(lines) or "(empty)",
            title=f"Season {snapshot.season_id} - Week {snapshot.week}",
        )
    )
    return 0


def _functions_client() -> WeeklyFunctionsClient:
    if not settings.supabase_url:
        raise WeeklyUpdateError("Supabase URL not configured.")
    return WeeklyFunctionsClient(settings.supabase_url, settings.supabase_access_token)


async def cmd_weekly_process(args: argparse.Namespace) -> int:
    client = await initialize_supabase()
    if not client:
        return 1

    uploads: List[UploadRef] = []
    for path in args.upload:
        file_path = Path(path)
        ref = await upload_screenshot(
            client, args.season, args.week, file_path.name, file_path.read_bytes()
        )
        if not ref:
            logger.error(f"Upload failed: {file_path.name}")
            return 1
        uploads.append(ref)
    logger.info(f"Uploaded {len(uploads)} file(s).")

    functions = _functions_client()
    try:
        preview = await functions.process_weekly(
            args.season, args.week, uploads, args.api_key or settings.openai_api_key
        )
    finally:
        await functions.close()

    output = {
        "uploads": [u.model_dump() for u in uploads],
        "preview": preview.model_dump(mode="json"),
    }
    Path(args.output).write_text(json.dumps(output, indent=4), encoding="utf-8")
    logger.success(f"Preview saved to {args.output}. Review then publish.")

    text = rankings_text_from_preview(preview)
    if text:
        render_rankings(parse_rankings(text), TOP25_BOARD)
    return 0


async def cmd_weekly_publish(args: argparse.Namespace) -> int:
    saved = json.loads(Path(args.preview_file).read_text(encoding="utf-8"))
    preview = WeeklyPreview.model_validate(saved["preview"])
    uploads = [UploadRef.model_validate(u) for u in saved.get("uploads", [])]

    if args.season is not None and args.season != preview.season_id:
        raise WeeklyUpdateError(
            f"Preview is for season {preview.season_id}, not {args.season}"
        )
    if args.week is not None and args.week != preview.week:
        raise WeeklyUpdateError(f"Preview is for week {preview.week}, not {args.week}")

    functions = _functions_client()
    try:
        ok = await functions.publish_weekly(preview, uploads)
    finally:
        await functions.close()
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dynasty Hub commissioner tools")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("preview", help="Parse rankings text locally (no save)")
    p.add_argument("file", help="Rankings text file, or '-' for stdin")
    p.add_argument("--conference", action="store_true", help="Parse conference records")
    p.set_defaults(handler=cmd_preview)

    for name, handler, help_text in (
        ("show", cmd_show, "Show a saved rankings board"),
        ("clear", cmd_clear, "Clear a rankings board"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("board", help="top25 / big10 (or the full setting key)")
        p.set_defaults(handler=handler)

    p = sub.add_parser("post", help="Save rankings text to a board")
    p.add_argument("board", help="top25 / big10 (or the full setting key)")
    p.add_argument("file", help="Rankings text file, or '-' for stdin")
    p.set_defaults(handler=cmd_post)

    p = sub.add_parser("latest-snapshot", help="Show the latest published weekly snapshot")
    p.set_defaults(handler=cmd_latest_snapshot)

    p = sub.add_parser("weekly-process", help="Upload screenshots and extract weekly data")
    p.add_argument("--season", type=int, required=True)
    p.add_argument("--week", type=int, required=True)
    p.add_argument("--upload", nargs="+", required=True, help="Screenshot files")
    p.add_argument("--api-key", default=None, help="Vision API key (defaults to OPENAI_API_KEY)")
    p.add_argument("--output", default="weekly_preview.json")
    p.set_defaults(handler=cmd_weekly_process)

    p = sub.add_parser("weekly-publish", help="Publish a reviewed weekly preview")
    p.add_argument("--season", type=int, default=None, help="Expected season of the preview")
    p.add_argument("--week", type=int, default=None, help="Expected week of the preview")
    p.add_argument("--preview-file", default="weekly_preview.json")
    p.set_defaults(handler=cmd_weekly_publish)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the commissioner CLI."""
    args = build_parser().parse_args(argv)
    try:
        if inspect.iscoroutinefunction(args.handler):
            return asyncio.run(args.handler(args))
        return args.handler(args)
    except KeyError as e:
        logger.error(str(e.args[0]) if e.args else str(e))
        return 2
    except WeeklyUpdateError as e:
        logger.error(f"Weekly update failed: {e}")
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
