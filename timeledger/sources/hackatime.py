"""Hackatime heartbeat span source.

Source: https://hackatime.hackclub.com/api/v1/users/{identity}/heartbeats/spans
Method: HTTP JSON, one request per (identity, project)
Payload: {"spans": [{"start_time": ..., "end_time": ..., "duration": ...}]}

Any non-2xx response, transport error, timeout or undecodable body is
treated as "no data" for that project.
"""

import logging
import re
from typing import Any

import httpx

from timeledger.config import Settings, settings as default_settings
from timeledger.errors import InvalidInput, SourceUnavailable
from timeledger.sources.base import BaseSpanSource, TimeSpan, decode_seconds

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "timeledger/0.1 (+https://hackatime.hackclub.com)",
}

_ALLOWED_CHARS = re.compile(r"[a-zA-Z0-9@#$%^&+_\-=?:/]")


def clean_identifier(value: str | None) -> str:
    """Keep only allow-listed characters of a user-supplied identifier."""
    if not value:
        return ""
    return "".join(_ALLOWED_CHARS.findall(value))


def parse_spans(payload: Any, project_name: str) -> tuple[list[TimeSpan], int]:
    """Decode a provider payload into spans.

    Returns:
        (spans, skipped): decoded spans and the count of invalid records.
    """
    if not isinstance(payload, dict):
        return [], 0
    raw_spans = payload.get("spans")
    if not isinstance(raw_spans, list):
        return [], 0

    spans: list[TimeSpan] = []
    skipped = 0
    for raw in raw_spans:
        try:
            spans.append(_decode_span(raw, project_name))
        except InvalidInput as exc:
            skipped += 1
            logger.debug("Skipping span for project %s: %s", project_name, exc)
    return spans, skipped


def _decode_span(raw: Any, project_name: str) -> TimeSpan:
    if not isinstance(raw, dict):
        raise InvalidInput("span is not an object")
    if raw.get("end_time") is None:
        raise InvalidInput("end_time missing")

    end_time = decode_seconds(raw["end_time"], field_name="end_time")
    # Missing duration counts as zero tracked time
    duration = raw.get("duration")
    duration_seconds = 0.0 if duration is None else decode_seconds(duration, field_name="duration")

    start_time = None
    if raw.get("start_time") is not None:
        try:
            start_time = decode_seconds(raw["start_time"], field_name="start_time")
        except InvalidInput:
            start_time = None

    return TimeSpan(
        source_project=project_name,
        end_time=end_time,
        duration_seconds=duration_seconds,
        start_time=start_time,
    )


class HackatimeSpanSource(BaseSpanSource):
    source_name = "Hackatime heartbeat spans"

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or default_settings
        self.transport = transport
        self.concurrency = self.config.provider_concurrency
        self.timeout_seconds = self.config.provider_timeout_seconds

    def _spans_path(self, identity: str) -> str:
        return f"/users/{identity}/heartbeats/spans"

    async def fetch(self, identity: str, project_name: str) -> list[TimeSpan]:
        cleaned_identity = clean_identifier(identity)
        cleaned_project = clean_identifier(project_name)
        if not cleaned_identity or not cleaned_project:
            return []

        try:
            payload = await self._request(cleaned_identity, cleaned_project)
        except SourceUnavailable as exc:
            logger.warning("%s; treating project %s as empty", exc, cleaned_project)
            return []

        spans, skipped = parse_spans(payload, cleaned_project)
        if skipped:
            logger.info(
                "Excluded %d invalid span(s) for %s/%s", skipped, cleaned_identity, cleaned_project
            )
        logger.debug("Fetched %d span(s) for %s/%s", len(spans), cleaned_identity, cleaned_project)
        return spans

    async def _request(self, identity: str, project_name: str) -> Any:
        async with httpx.AsyncClient(
            base_url=self.config.hackatime_base_url,
            timeout=self.config.provider_timeout_seconds,
            follow_redirects=True,
            headers=DEFAULT_HEADERS,
            transport=self.transport,
        ) as client:
            try:
                resp = await client.get(
                    self._spans_path(identity), params={"project": project_name}
                )
            except httpx.HTTPError as exc:
                raise SourceUnavailable(self.source_name, repr(exc)) from exc

            if not resp.is_success:
                raise SourceUnavailable(self.source_name, f"HTTP {resp.status_code}")
            try:
                return resp.json()
            except ValueError as exc:
                raise SourceUnavailable(self.source_name, "invalid JSON body") from exc
