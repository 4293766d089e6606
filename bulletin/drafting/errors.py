"""Errors raised by narrative drafting backends."""

from __future__ import annotations

import typing as typ

from bulletin.errors import ConfigurationError, UpstreamError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Content preview length for error messages
_CONTENT_PREVIEW_LIMIT = 100


class OpenAIAPIError(UpstreamError):
    """Raised when the chat-completions endpoint returns an error response."""

    @classmethod
    def http_error(cls, status_code: int, body: str | None = None) -> OpenAIAPIError:
        """Create error for HTTP error responses.

        Parameters
        ----------
        status_code
            HTTP status code from the response.
        body
            Raw response body.

        """
        return cls(
            f"OpenAI API HTTP error {status_code}", status_code=status_code, body=body
        )

    @classmethod
    def rate_limited(
        cls, retry_after: int | None = None, body: str | None = None
    ) -> OpenAIAPIError:
        """Create error for rate limit (429) responses."""
        msg = "OpenAI API rate limited"
        if retry_after is not None:
            msg = f"{msg}, retry after {retry_after}s"
        return cls(msg, status_code=429, body=body)

    @classmethod
    def timeout(cls) -> OpenAIAPIError:
        """Create error for request timeouts."""
        return cls("OpenAI API request timed out")

    @classmethod
    def network_error(cls, detail: str) -> OpenAIAPIError:
        """Create error for network failures (DNS, connection, TLS, etc.)."""
        return cls(f"OpenAI API network error: {detail}")


class OpenAIResponseShapeError(UpstreamError):
    """Raised when a completion response is missing fields or malformed."""

    @classmethod
    def missing(cls, field: str, body: str | None = None) -> OpenAIResponseShapeError:
        """Create error for a missing response field."""
        return cls(f"OpenAI response missing expected field: {field}", body=body)

    @classmethod
    def invalid_json(cls, content: str) -> OpenAIResponseShapeError:
        """Create error for a body that is not JSON, with a short preview."""
        if len(content) > _CONTENT_PREVIEW_LIMIT:
            preview = content[:_CONTENT_PREVIEW_LIMIT] + "..."
        else:
            preview = content
        return cls(f"Failed to parse JSON from response: {preview}", body=content)

    @classmethod
    def empty_content(cls) -> OpenAIResponseShapeError:
        """Create error for a completion whose message content is blank."""
        return cls("OpenAI response contained an empty draft")


class OpenAIConfigError(ConfigurationError):
    """Raised when the OpenAI drafter configuration is invalid."""

    @classmethod
    def missing_api_key(cls) -> OpenAIConfigError:
        """Create error for a missing ``BULLETIN_OPENAI_API_KEY``."""
        return cls(
            "BULLETIN_OPENAI_API_KEY environment variable is required "
            "when drafting with the 'openai' backend"
        )

    @classmethod
    def empty_api_key(cls) -> OpenAIConfigError:
        """Create error for a blank API key."""
        return cls("OpenAI API key must be non-empty")


class DraftingConfigError(ConfigurationError):
    """Raised when the drafting backend selection is invalid."""

    @classmethod
    def invalid_backend(
        cls, name: str, valid_backends: cabc.Iterable[str]
    ) -> DraftingConfigError:
        """Create error listing the accepted backend names."""
        valid = ", ".join(f"'{b}'" for b in sorted(valid_backends))
        return cls(f"Invalid drafting backend '{name}'. Valid options are: {valid}")
