# dynasty_hub/utils/misc_utils.py
import re
import uuid
from datetime import datetime, timezone


def safe_filename(filename: str) -> str:
    """Makes an uploaded file name safe to use as a storage object key."""
    base = filename.strip().replace(" ", "_")
    # Keep word characters, dots and hyphens only
    safe = re.sub(r"[^\w.\-]+", "", base)
    return safe or "upload"


def build_upload_path(season_id: int, week: int, filename: str) -> str:
    """Storage path for a weekly screenshot: ``week-{season}-{week}/{uuid}-{name}``."""
    return f"week-{season_id}-{week}/{uuid.uuid4()}-{safe_filename(filename)}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
