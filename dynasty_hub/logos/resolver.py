from typing import List, Optional, Tuple

from loguru import logger

from .aliases import ALIAS_TO_ESPN_ID, LOGO_URL_TEMPLATE, TEAM_ALIASES


def logo_url_for_id(espn_id: int) -> str:
    """Builds the CDN logo URL for an ESPN team id."""
    return LOGO_URL_TEMPLATE.format(espn_id=espn_id)


def _normalize(name: Optional[str]) -> str:
    return (name or "").lower().strip()


def matching_aliases(name: Optional[str]) -> List[Tuple[str, int]]:
    """Returns every (alias, id) pair that partially matches ``name``, in table order.

    An alias matches when it is contained in the name or the name is contained
    in it.
    """
    key = _normalize(name)
    if not key:
        return []
    return [(alias, espn_id) for alias, espn_id in TEAM_ALIASES if alias in key or key in alias]


def find_alias_collisions(name: Optional[str]) -> List[int]:
    """Distinct ids reachable from ``name`` by partial matching.

    More than one id means the alias table is ambiguous for this name and the
    table (not the lookup) should be fixed, usually with a more specific alias.
    """
    ids: List[int] = []
    for _, espn_id in matching_aliases(name):
        if espn_id not in ids:
            ids.append(espn_id)
    return ids if len(ids) > 1 else []


def resolve_logo_url(name: Optional[str]) -> Optional[str]:
    """Maps a team display name to its logo URL, or None when nothing matches.

    Exact alias match wins; otherwise the first alias in table order that
    partially matches is used.
    """
    key = _normalize(name)
    if not key:
        return None

    espn_id = ALIAS_TO_ESPN_ID.get(key)
    if espn_id is not None:
        return logo_url_for_id(espn_id)

    for alias, espn_id in TEAM_ALIASES:
        if alias in key or key in alias:
            logger.trace(f"Partial logo match for '{name}' via alias '{alias}'")
            return logo_url_for_id(espn_id)

    return None
