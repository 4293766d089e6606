"""Root error taxonomy for a daily report run.

Every failure that should end the run with exit code 1 derives from
:class:`BulletinError`, so the CLI catches exactly one type. Sub-packages
specialise the two branches below with their own factory classmethods.
"""

from __future__ import annotations

# Response bodies are echoed into error messages up to this many characters.
_BODY_PREVIEW_LIMIT = 500


def preview_body(body: str | None, limit: int = _BODY_PREVIEW_LIMIT) -> str:
    """Return ``body`` shortened to ``limit`` characters with an ellipsis."""
    if not body:
        return ""
    if len(body) > limit:
        return body[:limit] + "..."
    return body


class BulletinError(Exception):
    """Base class for all errors that abort a report run."""


class ConfigurationError(BulletinError):
    """Raised when a required setting is missing or malformed.

    Detected while building :class:`bulletin.config.BulletinConfig`, before
    any network call is made.
    """

    @classmethod
    def missing(cls, env_var: str) -> ConfigurationError:
        """Return an error for a required environment variable that is unset."""
        return cls(f"{env_var} environment variable is required")

    @classmethod
    def invalid(cls, env_var: str, value: str, constraint: str) -> ConfigurationError:
        """Return an error for a setting whose value violates ``constraint``."""
        return cls(f"Invalid {env_var} {value!r}. {constraint}")


class UpstreamError(BulletinError):
    """Raised when a collaborator service returns a non-success response.

    Attributes
    ----------
    status_code
        HTTP status code, when a response was received.
    body
        Raw response body, kept for diagnostics.

    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialise with a message and optional response context."""
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    def describe(self) -> str:
        """Return the message followed by a preview of the response body."""
        preview = preview_body(self.body)
        if preview:
            return f"{self}: {preview}"
        return str(self)


__all__ = [
    "BulletinError",
    "ConfigurationError",
    "UpstreamError",
    "preview_body",
]
