import asyncio
import re

import pytest

from dynasty_hub.config.settings import settings
from dynasty_hub.storage.supabase_client import initialize_supabase, upload_screenshot
from tests.fakes import FakeSupabase

UPLOAD_PATH_RE = re.compile(r"^week-2026-3/[0-9a-f-]{36}-top25\.png$")


def test_upload_screenshot_stores_in_temp_bucket():
    client = FakeSupabase()
    ref = asyncio.run(upload_screenshot(client, 2026, 3, "top25.png", b"\x89PNG"))

    assert ref is not None
    assert UPLOAD_PATH_RE.match(ref.path)
    assert ref.name == "top25.png"

    bucket, path, content, options = client.uploads[0]
    assert bucket == "temp-uploads"
    assert path == ref.path
    assert content == b"\x89PNG"
    assert options == {"content-type": "image/png", "upsert": "false"}


def test_upload_screenshot_guesses_content_type():
    client = FakeSupabase()
    asyncio.run(upload_screenshot(client, 2026, 3, "standings.jpg", b"jpeg"))
    assert client.uploads[0][3]["content-type"] == "image/jpeg"


def test_upload_screenshot_unknown_extension_defaults_to_png():
    client = FakeSupabase()
    asyncio.run(upload_screenshot(client, 2026, 3, "screen", b"raw"))
    assert client.uploads[0][3]["content-type"] == "image/png"


def test_upload_screenshot_failure_returns_none():
    client = FakeSupabase(fail=True)
    assert asyncio.run(upload_screenshot(client, 2026, 3, "top25.png", b"\x89PNG")) is None
    assert client.uploads == []


@pytest.mark.parametrize(
    "url, key",
    [
        (None, "anon-key"),
        ("", "anon-key"),
        ("https://project.supabase.co", None),
        ("https://project.supabase.co", ""),
    ],
)
def test_initialize_supabase_requires_url_and_key(monkeypatch, url, key):
    monkeypatch.setattr(settings, "supabase_url", None)
    monkeypatch.setattr(settings, "supabase_key", None)
    with pytest.raises(SystemExit, match="Supabase configuration missing"):
        asyncio.run(initialize_supabase(url, key))
