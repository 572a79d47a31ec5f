"""Free-text rankings parser.

Turns loosely formatted, human-pasted lines such as::

    1. Ohio State (8-0, 5-0)
    2) Michigan 7-1
    Penn State

into ordered :class:`RankEntry` rows. Malformed lines never raise: missing
pieces become ``None`` and lines without a team name are dropped.
"""

import re
from operator import attrgetter
from typing import Callable, List, Optional

from loguru import logger

from dynasty_hub.logos.resolver import resolve_logo_url
from dynasty_hub.models.rankings import RankEntry

LogoResolver = Callable[[str], Optional[str]]

# Leading rank: one or two digits followed by '.', ')', ':' or whitespace
RANK_PREFIX_RE = re.compile(r"^(\d{1,2})[.):\s]\s*", re.ASCII)
RECORD_RE = re.compile(r"\d{1,3}-\d{1,3}", re.ASCII)
PAREN_GROUP_RE = re.compile(r"\(([^)]+)\)", re.ASCII)
BARE_RECORD_RE = re.compile(r"\b(\d{1,3}-\d{1,3})\b", re.ASCII)

NAME_TRAILING_CHARS = "()., "


def extract_records(text: str) -> List[str]:
    """Returns all W-L record tokens in ``text``, left to right."""
    return RECORD_RE.findall(text)


def _clean_name(name: str) -> str:
    return name.strip().rstrip(NAME_TRAILING_CHARS).strip()


def parse_line(
    line: str, position: int, include_conference: bool = False
) -> Optional[dict]:
    """Parses one trimmed, non-blank line.

    ``position`` is the one-based position of the line among non-blank lines,
    used as the rank when the line has no leading number. Returns the entry
    fields (without logo) or None when no team name is left.
    """
    rank_match = RANK_PREFIX_RE.match(line)
    if rank_match:
        rank = int(rank_match.group(1))
        rest = line[rank_match.end():].strip()
    else:
        rank = position
        rest = line

    overall: Optional[str] = None
    conf: Optional[str] = None
    name = rest

    paren_match = PAREN_GROUP_RE.search(rest)
    if paren_match:
        records = extract_records(paren_match.group(1))
        if records:
            overall = records[0]
        if include_conference and len(records) > 1:
            conf = records[1]
        name = rest[: paren_match.start()]
    else:
        bare_match = BARE_RECORD_RE.search(rest)
        if bare_match:
            overall = bare_match.group(1)
            name = rest[: bare_match.start()]

    name = _clean_name(name)
    if not name:
        return None

    return {"rank": rank, "name": name, "overall": overall, "conf": conf}


def parse_rankings(
    raw: Optional[str],
    include_conference: bool = False,
    logo_resolver: Optional[LogoResolver] = resolve_logo_url,
) -> List[RankEntry]:
    """Parses pasted rankings text into entries sorted by rank.

    Args:
        raw: Multi-line text, one team per line. None is treated as empty.
        include_conference: Capture a second record inside the parentheses,
            e.g. ``(8-0, 5-0)``, as the conference record.
        logo_resolver: Called with each team name to attach a logo URL.
            Pass None to skip logo resolution.

    Returns:
        Entries stable-sorted by ascending rank. Lines that yield no team name
        are dropped.
    """
    lines = [line.strip() for line in (raw or "").split("\n")]
    lines = [line for line in lines if line]

    entries: List[RankEntry] = []
    for i, line in enumerate(lines):
        fields = parse_line(line, i + 1, include_conference)
        if fields is None:
            logger.trace(f"Dropping rankings line without a team name: {line!r}")
            continue
        logo = logo_resolver(fields["name"]) if logo_resolver else None
        entries.append(RankEntry(logo=logo, **fields))

    # sorted() is stable: ties keep their input order
    entries = sorted(entries, key=attrgetter("rank"))
    logger.debug(
        f"Parsed {len(entries)} ranking entries from {len(lines)} non-blank lines."
    )
    return entries
