from datetime import datetime

from dynasty_hub.utils.misc_utils import build_upload_path, safe_filename, utc_now_iso


def test_safe_filename():
    assert safe_filename("Top 25 (week 3).png") == "Top_25_week_3.png"
    assert safe_filename("???") == "upload"


def test_build_upload_path_layout():
    path = build_upload_path(2026, 3, "top25.png")
    folder, obj = path.split("/")
    assert folder == "week-2026-3"
    assert obj.endswith("-top25.png")
    assert build_upload_path(2026, 3, "top25.png") != path


def test_utc_now_iso_is_timezone_aware():
    assert datetime.fromisoformat(utc_now_iso()).tzinfo is not None
