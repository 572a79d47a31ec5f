from typing import Any, Dict, FrozenSet, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dynasty_hub.config.settings import settings
from dynasty_hub.models.enums import VisionProvider
from dynasty_hub.models.weekly import UploadRef, WeeklyPreview

# Both functions are non-idempotent POSTs (a paid vision call, an article
# insert). Only statuses returned before the function ran are retried.
PROCESS_RETRY_STATUS_CODES: FrozenSet[int] = frozenset({429, 503})
PUBLISH_RETRY_STATUS_CODES: FrozenSet[int] = frozenset({429})

PROCESS_FUNCTION = "process_weekly"
PUBLISH_FUNCTION = "publish_weekly"


class WeeklyUpdateError(Exception):
    """Raised when a weekly update request is invalid or an edge function fails."""

    pass


class AuthenticationError(WeeklyUpdateError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class RetryableStatusError(WeeklyUpdateError):
    """A status code the function answered without doing any work (rate limit, unavailable)."""

    pass


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


class WeeklyFunctionsClient:
    """Calls the process_weekly / publish_weekly edge functions.

    The functions do the work (downloading screenshots, calling the vision
    model, writing the snapshot and the League Wire post); this client checks
    inputs, forwards the request and parses the response.
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str],
        http_client: Optional[httpx.AsyncClient] = None,
        max_attempts: int = 4,
        retry_wait=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = (access_token or "").strip()
        self.client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.functions_timeout),
            follow_redirects=True,
        )
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=10)

    def _function_url(self, name: str) -> str:
        return f"{self.base_url}/functions/v1/{name}"

    async def _post_once(
        self, name: str, payload: Dict[str, Any], retry_statuses: FrozenSet[int]
    ) -> Dict[str, Any]:
        """Makes a single POST to an edge function and classifies the outcome."""
        url = self._function_url(name)
        logger.debug(f"Calling edge function {name}")
        try:
            response = await self.client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
        except httpx.ConnectError as e:
            # Nothing reached the function, safe to retry
            logger.warning(f"Could not connect to {name}: {e}")
            raise
        except httpx.RequestError as e:
            # The function may have run (read timeout etc.)
            logger.error(f"Request error calling {name}: {e}")
            raise WeeklyUpdateError(f"{name} request failed: {e}") from e

        if response.status_code in {401, 403}:
            logger.warning(f"Authentication error ({response.status_code}) calling {name}.")
            raise AuthenticationError(_error_message(response))

        if response.status_code in retry_statuses:
            message = _error_message(response)
            logger.warning(f"{name} returned {response.status_code}: {message}")
            raise RetryableStatusError(message)

        if response.is_error:
            message = _error_message(response)
            logger.error(f"{name} failed with {response.status_code}: {message}")
            raise WeeklyUpdateError(message)

        try:
            body = response.json()
        except ValueError as e:
            raise WeeklyUpdateError(f"{name} returned invalid JSON") from e
        logger.debug(f"Edge function {name} succeeded: {response.status_code}")
        return body

    async def _call_function(
        self, name: str, payload: Dict[str, Any], retry_statuses: FrozenSet[int]
    ) -> Dict[str, Any]:
        """POSTs ``payload``, retrying only failures where the function did not run."""
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type((httpx.ConnectError, RetryableStatusError)),
                reraise=True,
            ):
                with attempt:
                    return await self._post_once(name, payload, retry_statuses)
        except httpx.ConnectError as e:
            raise WeeklyUpdateError(f"Could not reach {name}") from e

    def _require_session(self) -> None:
        if not self.access_token:
            raise WeeklyUpdateError("Not signed in.")

    async def process_weekly(
        self,
        season_id: int,
        week: int,
        uploads: List[UploadRef],
        api_key: Optional[str],
        provider: VisionProvider = VisionProvider.OPENAI,
    ) -> WeeklyPreview:
        """Asks process_weekly to extract structured data from uploaded screenshots."""
        self._require_session()
        if season_id <= 0 or week <= 0 or not uploads:
            raise WeeklyUpdateError("Missing inputs")
        if not (api_key or "").strip():
            raise WeeklyUpdateError("Missing api_key")
        try:
            provider = VisionProvider(provider)
        except ValueError:
            raise WeeklyUpdateError("Only openai supported in MVP") from None

        payload = {
            "season_id": season_id,
            "week": week,
            "provider": provider.value,
            "api_key": api_key.strip(),
            "uploads": [u.model_dump() for u in uploads],
        }
        logger.info(
            f"Processing week {week} of season {season_id} from {len(uploads)} upload(s)..."
        )
        body = await self._call_function(
            PROCESS_FUNCTION, payload, PROCESS_RETRY_STATUS_CODES
        )
        try:
            preview = WeeklyPreview.model_validate(body)
        except ValidationError as e:
            logger.error(f"Unexpected process_weekly response: {e}")
            raise WeeklyUpdateError("Could not read extracted weekly data") from e

        logger.success(f"Preview ready for week {preview.week}. Review then publish.")
        return preview

    async def publish_weekly(
        self, preview: WeeklyPreview, uploads: List[UploadRef]
    ) -> bool:
        """Publishes a reviewed preview; the function also deletes the temp uploads."""
        self._require_session()
        payload = {
            "season_id": preview.season_id,
            "week": preview.week,
            "uploads": [u.model_dump() for u in uploads],
            "preview": preview.model_dump(mode="json"),
        }
        body = await self._call_function(
            PUBLISH_FUNCTION, payload, PUBLISH_RETRY_STATUS_CODES
        )
        ok = bool(body.get("ok")) if isinstance(body, dict) else False
        if ok:
            logger.success(f"Published week {preview.week} update.")
        else:
            logger.warning(f"publish_weekly did not confirm success: {body}")
        return ok

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()


def rankings_text_from_preview(preview: WeeklyPreview) -> str:
    """Formats extracted top-25 rows as pasteable rankings text ("1. Team" lines)."""
    rankings = preview.preview.rankings
    if not rankings or not rankings.top25:
        return ""
    rows = sorted(rankings.top25, key=lambda row: row.rank)
    return "\n".join(f"{row.rank}. {row.team.strip()}" for row in rows if row.team.strip())
