"""OpenAI-compatible implementation of the NarrativeDrafter protocol."""

from __future__ import annotations

import time
import typing as typ

import httpx

from bulletin.drafting.errors import (
    OpenAIAPIError,
    OpenAIConfigError,
    OpenAIResponseShapeError,
)
from bulletin.drafting.models import ModelInvocationMetrics
from bulletin.drafting.prompts import SYSTEM_PROMPT, build_user_prompt
from bulletin.reporting.sections import FENCE

if typ.TYPE_CHECKING:
    from bulletin.drafting.config import OpenAIDraftingConfig
    from bulletin.drafting.models import DraftRequest

_HTTP_ERROR_STATUS_THRESHOLD = 400
_HTTP_RATE_LIMITED = 429


def _to_int_or_none(value: object) -> int | None:
    """Return ``int`` for integer values, else ``None``."""
    if isinstance(value, int):
        return value
    return None


def _get_retry_after(response: httpx.Response) -> int | None:
    """Extract Retry-After header value if present and numeric."""
    retry_after = response.headers.get("Retry-After")
    if retry_after and retry_after.isdigit():
        return int(retry_after)
    return None


def _get_nested(data: dict[str, object], *keys: str) -> object:
    """Traverse nested dict path, returning None for missing keys."""
    current: object = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current_dict = typ.cast("dict[str, object]", current)
        current = current_dict.get(key)
    return current


def strip_outer_fence(content: str) -> str:
    """Remove a code fence wrapping the whole reply, if the model added one.

    Examples
    --------
    >>> strip_outer_fence("```markdown\\n# Title\\n```")
    '# Title'
    >>> strip_outer_fence("# Title")
    '# Title'

    """
    lines = content.strip().split("\n")
    minimum_wrapped_lines = 2
    if (
        len(lines) >= minimum_wrapped_lines
        and lines[0].strip().startswith(FENCE)
        and lines[-1].strip() == FENCE
    ):
        return "\n".join(lines[1:-1])
    return content


class OpenAINarrativeDrafter:
    """Draft report prose through an OpenAI-compatible chat endpoint.

    Parameters
    ----------
    config
        Configuration for the API client.
    http_client
        Optional ``httpx.AsyncClient`` for testing. If not provided, the
        instance creates and owns its own client.

    Examples
    --------
    >>> import asyncio
    >>> from bulletin.drafting import OpenAIDraftingConfig, OpenAINarrativeDrafter
    >>> drafter = OpenAINarrativeDrafter(OpenAIDraftingConfig(api_key="sk-..."))
    >>> asyncio.run(drafter.aclose())

    """

    def __init__(
        self,
        config: OpenAIDraftingConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with configuration."""
        if not config.api_key.strip():
            raise OpenAIConfigError.empty_api_key()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            },
        )
        self._last_invocation_metrics: ModelInvocationMetrics | None = None

    @property
    def config(self) -> OpenAIDraftingConfig:
        """Read-only access to the client configuration."""
        return self._config

    @property
    def model(self) -> str:
        """Model identifier sent with each request."""
        return self._config.model

    @property
    def last_invocation_metrics(self) -> ModelInvocationMetrics | None:
        """Return metrics captured from the most recent invocation."""
        return self._last_invocation_metrics

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def draft(self, request: DraftRequest) -> str:
        """Return the drafted report for ``request``.

        Raises
        ------
        OpenAIAPIError
            If the API returns an error response or the request fails.
        OpenAIResponseShapeError
            If the response is not JSON, lacks the message content, or the
            content is blank.

        """
        payload = self._build_payload(build_user_prompt(request))
        started = time.perf_counter()
        response = await self._send_request(payload)
        latency_ms = (time.perf_counter() - started) * 1000
        self._check_response_errors(response)
        data = self._parse_json(response)
        self._last_invocation_metrics = self._extract_usage_metrics(data, latency_ms)
        content = strip_outer_fence(self._extract_content(data, response.text))
        if not content.strip():
            raise OpenAIResponseShapeError.empty_content()
        return content

    def _build_payload(self, user_prompt: str) -> dict[str, object]:
        """Construct the chat-completions request body."""
        return {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def _send_request(self, payload: dict[str, object]) -> httpx.Response:
        """POST ``payload``, translating transport failures."""
        try:
            return await self._client.post(self._config.endpoint, json=payload)
        except httpx.TimeoutException as exc:
            raise OpenAIAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise OpenAIAPIError.network_error(str(exc)) from exc

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Raise for rate limiting and other HTTP error statuses."""
        if response.status_code == _HTTP_RATE_LIMITED:
            raise OpenAIAPIError.rate_limited(
                _get_retry_after(response), body=response.text
            )
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise OpenAIAPIError.http_error(response.status_code, body=response.text)

    def _parse_json(self, response: httpx.Response) -> dict[str, object]:
        """Decode the response body as a JSON object."""
        try:
            data = response.json()
        except ValueError as exc:  # invalid JSON or undecodable bytes
            raise OpenAIResponseShapeError.invalid_json(response.text) from exc
        if not isinstance(data, dict):
            raise OpenAIResponseShapeError.missing("response", body=response.text)
        return typ.cast("dict[str, object]", data)

    def _extract_usage_metrics(
        self,
        data: dict[str, object],
        latency_ms: float,
    ) -> ModelInvocationMetrics:
        """Extract token usage metrics from the API response payload."""
        usage = data.get("usage")
        if not isinstance(usage, dict):
            return ModelInvocationMetrics(latency_ms=latency_ms)

        usage_dict = typ.cast("dict[str, object]", usage)
        return ModelInvocationMetrics(
            prompt_tokens=_to_int_or_none(usage_dict.get("prompt_tokens")),
            completion_tokens=_to_int_or_none(usage_dict.get("completion_tokens")),
            total_tokens=_to_int_or_none(usage_dict.get("total_tokens")),
            latency_ms=latency_ms,
        )

    def _extract_content(self, data: dict[str, object], body: str) -> str:
        """Return ``choices[0].message.content`` from the response."""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise OpenAIResponseShapeError.missing("choices", body=body)

        first_choice = choices[0]
        if not isinstance(first_choice, dict):
            raise OpenAIResponseShapeError.missing("choices[0]", body=body)

        first_choice_dict = typ.cast("dict[str, object]", first_choice)
        content = _get_nested(first_choice_dict, "message", "content")
        if not isinstance(content, str):
            raise OpenAIResponseShapeError.missing(
                "choices[0].message.content", body=body
            )
        return content
