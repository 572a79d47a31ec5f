import asyncio
import json

import httpx
import pytest
from tenacity import wait_none

from dynasty_hub.models.weekly import UploadRef, WeeklyPreview
from dynasty_hub.weekly.functions_client import (
    AuthenticationError,
    WeeklyFunctionsClient,
    WeeklyUpdateError,
    rankings_text_from_preview,
)

BASE_URL = "https://project.supabase.co"
UPLOADS = [UploadRef(path="week-2026-3/abc-top25.png", name="top25.png")]

EXTRACTED = {
    "season_id": 2026,
    "week": 3,
    "preview": {
        "season_id": 2026,
        "week": 3,
        "rankings": {"top25": [{"rank": 2, "team": "Georgia"}, {"rank": 1, "team": "Alabama"}]},
        "schedules": None,
        "results": {
            "games": [
                {"home": "Alabama", "away": "Auburn", "home_score": 31, "away_score": 17, "week": 3}
            ]
        },
        "notes": ["Awards screen unreadable"],
    },
}


def make_client(handler, token="jwt-token"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WeeklyFunctionsClient(
        BASE_URL, token, http_client=http_client, retry_wait=wait_none()
    )


def run(coro):
    return asyncio.run(coro)


def test_process_weekly_sends_request_and_parses_preview():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=EXTRACTED)

    client = make_client(handler)
    preview = run(client.process_weekly(2026, 3, UPLOADS, "sk-test"))

    assert seen["url"] == f"{BASE_URL}/functions/v1/process_weekly"
    assert seen["auth"] == "Bearer jwt-token"
    assert seen["body"] == {
        "season_id": 2026,
        "week": 3,
        "provider": "openai",
        "api_key": "sk-test",
        "uploads": [{"path": "week-2026-3/abc-top25.png", "name": "top25.png"}],
    }
    assert preview.week == 3
    assert preview.preview.schedules is None
    assert preview.preview.results.games[0].home_score == 31
    assert preview.preview.notes == ["Awards screen unreadable"]


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"season_id": 0}, "Missing inputs"),
        ({"week": 0}, "Missing inputs"),
        ({"uploads": []}, "Missing inputs"),
        ({"api_key": "  "}, "Missing api_key"),
        ({"provider": "anthropic"}, "Only openai supported"),
    ],
)
def test_process_weekly_validates_before_calling(kwargs, message):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=EXTRACTED)

    args = {"season_id": 2026, "week": 3, "uploads": UPLOADS, "api_key": "sk-test"}
    args.update(kwargs)
    with pytest.raises(WeeklyUpdateError, match=message):
        run(make_client(handler).process_weekly(**args))
    assert calls == []


def test_missing_session_rejected():
    client = make_client(lambda request: httpx.Response(200, json=EXTRACTED), token="")
    with pytest.raises(WeeklyUpdateError, match="Not signed in"):
        run(client.process_weekly(2026, 3, UPLOADS, "sk-test"))


def test_unauthorized_raises_authentication_error():
    client = make_client(lambda request: httpx.Response(401, json={"error": "Missing Authorization"}))
    with pytest.raises(AuthenticationError, match="Missing Authorization"):
        run(client.process_weekly(2026, 3, UPLOADS, "sk-test"))


def test_function_error_message_propagates():
    client = make_client(lambda request: httpx.Response(400, json={"error": "Download failed: top25.png"}))
    with pytest.raises(WeeklyUpdateError, match="Download failed: top25.png"):
        run(client.process_weekly(2026, 3, UPLOADS, "sk-test"))


def test_unexpected_response_shape():
    client = make_client(lambda request: httpx.Response(200, json={"week": 3}))
    with pytest.raises(WeeklyUpdateError, match="Could not read"):
        run(client.process_weekly(2026, 3, UPLOADS, "sk-test"))


def test_publish_weekly():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"ok": True})

    preview = WeeklyPreview.model_validate(EXTRACTED)
    assert run(make_client(handler).publish_weekly(preview, UPLOADS)) is True
    assert seen["url"].endswith("/functions/v1/publish_weekly")
    assert seen["body"]["season_id"] == 2026
    assert seen["body"]["week"] == 3
    assert seen["body"]["uploads"][0]["path"] == UPLOADS[0].path
    assert seen["body"]["preview"]["preview"]["rankings"]["top25"][0]["team"] == "Georgia"


def test_publish_weekly_without_ok():
    preview = WeeklyPreview.model_validate(EXTRACTED)
    client = make_client(lambda request: httpx.Response(200, json={}))
    assert run(client.publish_weekly(preview, [])) is False


def test_rankings_text_from_preview():
    preview = WeeklyPreview.model_validate(EXTRACTED)
    assert rankings_text_from_preview(preview) == "1. Alabama\n2. Georgia"


def test_rankings_text_from_preview_without_rankings():
    preview = WeeklyPreview(season_id=2026, week=3)
    assert rankings_text_from_preview(preview) == ""


def counting_handler(*responses):
    """Replays ``responses`` in order, recording each request; exceptions are raised."""
    calls = []
    queue = list(responses)

    def handler(request):
        calls.append(request)
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return handler, calls


def test_process_weekly_server_error_is_not_retried():
    handler, calls = counting_handler(httpx.Response(500, json={"error": "OpenAI error: boom"}))
    with pytest.raises(WeeklyUpdateError, match="OpenAI error: boom"):
        run(make_client(handler).process_weekly(2026, 3, UPLOADS, "sk-test"))
    assert len(calls) == 1


def test_publish_weekly_server_error_is_not_retried():
    handler, calls = counting_handler(httpx.Response(500, json={"error": "Article insert failed"}))
    preview = WeeklyPreview.model_validate(EXTRACTED)
    with pytest.raises(WeeklyUpdateError, match="Article insert failed"):
        run(make_client(handler).publish_weekly(preview, UPLOADS))
    assert len(calls) == 1


def test_publish_weekly_unavailable_is_not_retried():
    handler, calls = counting_handler(httpx.Response(503, json={"error": "Unavailable"}))
    preview = WeeklyPreview.model_validate(EXTRACTED)
    with pytest.raises(WeeklyUpdateError, match="Unavailable"):
        run(make_client(handler).publish_weekly(preview, UPLOADS))
    assert len(calls) == 1


def test_publish_weekly_read_timeout_is_not_retried():
    handler, calls = counting_handler(httpx.ReadTimeout("timed out"))
    preview = WeeklyPreview.model_validate(EXTRACTED)
    with pytest.raises(WeeklyUpdateError, match="request failed"):
        run(make_client(handler).publish_weekly(preview, UPLOADS))
    assert len(calls) == 1


def test_process_weekly_retries_rate_limit_then_succeeds():
    handler, calls = counting_handler(
        httpx.Response(429, json={"error": "Too many requests"}),
        httpx.Response(200, json=EXTRACTED),
    )
    preview = run(make_client(handler).process_weekly(2026, 3, UPLOADS, "sk-test"))
    assert preview.week == 3
    assert len(calls) == 2


def test_connect_error_retried_until_attempts_run_out():
    handler, calls = counting_handler(httpx.ConnectError("connection refused"))
    with pytest.raises(WeeklyUpdateError, match="Could not reach process_weekly"):
        run(make_client(handler).process_weekly(2026, 3, UPLOADS, "sk-test"))
    assert len(calls) == 4
