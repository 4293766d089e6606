"""Notion client errors."""

from __future__ import annotations

from bulletin.errors import ConfigurationError, UpstreamError


class NotionAPIError(UpstreamError):
    """Raised when the Notion API rejects a page or cannot be reached."""

    @classmethod
    def http_error(cls, status_code: int, body: str) -> NotionAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(f"Notion API HTTP {status_code}", status_code=status_code, body=body)

    @classmethod
    def timeout(cls) -> NotionAPIError:
        """Return an error for request timeouts."""
        return cls("Notion API request timed out")

    @classmethod
    def network_error(cls, detail: str) -> NotionAPIError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"Notion API network error: {detail}")

    @classmethod
    def missing_page_id(cls, body: str) -> NotionAPIError:
        """Return an error for a success response without a page ``id``."""
        return cls("Notion API response missing page id", body=body)


class NotionConfigError(ConfigurationError):
    """Raised when a page is published without publishing settings."""

    @classmethod
    def publishing_disabled(cls) -> NotionConfigError:
        """Return an error for a run that has no Notion destination."""
        return cls(
            "BULLETIN_NOTION_API_KEY and BULLETIN_NOTION_DATABASE_ID are "
            "required to publish; use --dry-run to skip publishing"
        )
