# dynasty_hub/storage/supabase_client.py
import mimetypes
from typing import Optional

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import AsyncClient, create_async_client

from dynasty_hub.config.settings import settings
from dynasty_hub.models.enums import StorageBucket
from dynasty_hub.models.rankings import RankingsSnapshot
from dynasty_hub.models.weekly import UploadRef
from dynasty_hub.utils.misc_utils import build_upload_path, utc_now_iso

SETTINGS_TABLE = "site_settings"
SNAPSHOTS_TABLE = "rankings_snapshots"


async def initialize_supabase(
    url: Optional[str] = None, key: Optional[str] = None
) -> Optional[AsyncClient]:
    """Creates an ASYNC Supabase client from explicit values or settings."""
    url = url or settings.supabase_url
    key = key or settings.supabase_key

    if not url or not key:
        logger.critical("Supabase URL or Key not configured in settings.")
        raise SystemExit("Supabase configuration missing.")

    logger.debug(f"Attempting to initialize Async Supabase client with URL: {url}")
    try:
        client: AsyncClient = await create_async_client(url, key)
        logger.success("Async Supabase client initialized successfully.")
        return client
    except Exception as e:
        logger.exception(f"Failed to initialize Async Supabase client: {e}")
        return None


async def fetch_setting(client: AsyncClient, key: str) -> Optional[str]:
    """Reads the text value of one site_settings row.

    Returns "" when the row does not exist and None when the read failed.
    """
    try:
        response: Optional[APIResponse] = (
            await client.table(SETTINGS_TABLE)
            .select("value")
            .eq("key", key)
            .maybe_single()
            .execute()
        )
    except APIError as e:
        logger.error(f"Supabase API error reading setting '{key}': {e.message}")
        logger.debug(f"Full APIError details: {e}")
        return None
    except Exception as e:
        logger.error(f"An unexpected error occurred reading setting '{key}': {e}")
        logger.exception("Traceback:")
        return None

    # maybe_single() yields no response (or empty data) when the row is missing
    if response is None or not response.data:
        logger.info(f"No value stored for setting '{key}'.")
        return ""
    return response.data.get("value") or ""


async def upsert_setting(client: AsyncClient, key: str, value: str) -> bool:
    """Writes one site_settings row, keyed by ``key``."""
    row = {"key": key, "value": value, "updated_at": utc_now_iso()}
    try:
        await client.table(SETTINGS_TABLE).upsert(row, on_conflict="key").execute()
        logger.success(f"Saved setting '{key}' ({len(value)} chars).")
        return True
    except APIError as e:
        logger.error(f"Error saving setting '{key}': {e.message}")
        logger.debug(f"Full APIError details: {e}")
        return False
    except Exception as e:
        logger.error(f"An unexpected error occurred saving setting '{key}': {e}")
        logger.exception("Traceback:")
        return False


async def fetch_latest_snapshot(client: AsyncClient) -> Optional[RankingsSnapshot]:
    """Returns the most recently published weekly rankings snapshot, if any."""
    try:
        response: APIResponse = (
            await client.table(SNAPSHOTS_TABLE)
            .select("*")
            .order("season_id", desc=True)
            .order("week", desc=True)
            .limit(1)
            .execute()
        )
    except APIError as e:
        logger.error(f"Supabase API error fetching latest snapshot: {e.message}")
        logger.debug(f"Full APIError details: {e}")
        return None
    except Exception as e:
        logger.error(f"An unexpected error occurred fetching latest snapshot: {e}")
        logger.exception("Traceback:")
        return None

    if not response.data:
        logger.info("No rankings snapshots published yet.")
        return None
    try:
        return RankingsSnapshot.model_validate(response.data[0])
    except ValidationError as e:
        logger.error(f"Latest rankings snapshot row is malformed: {e}")
        return None


async def upload_screenshot(
    client: AsyncClient,
    season_id: int,
    week: int,
    filename: str,
    content: bytes,
) -> Optional[UploadRef]:
    """Uploads a weekly screenshot to the temp-uploads bucket."""
    path = build_upload_path(season_id, week, filename)
    content_type = mimetypes.guess_type(filename)[0] or "image/png"
    try:
        await client.storage.from_(StorageBucket.TEMP_UPLOADS.value).upload(
            path,
            content,
            {"content-type": content_type, "upsert": "false"},
        )
    except Exception as e:
        logger.error(f"Upload failed for {filename}: {e}")
        return None

    logger.info(f"Uploaded {filename} to {path}")
    return UploadRef(path=path, name=filename)
