"""Linear client errors."""

from __future__ import annotations

from bulletin.errors import UpstreamError


class LinearAPIError(UpstreamError):
    """Raised when Linear returns an error response."""

    @classmethod
    def http_error(cls, status_code: int, body: str) -> LinearAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"Linear GraphQL HTTP {status_code}", status_code=status_code, body=body
        )

    @classmethod
    def graphql_errors(cls, errors: object, body: str) -> LinearAPIError:
        """Return an error for GraphQL ``errors`` payloads."""
        return cls(f"Linear GraphQL errors: {errors}", body=body)

    @classmethod
    def timeout(cls) -> LinearAPIError:
        """Return an error for request timeouts."""
        return cls("Linear GraphQL request timed out")

    @classmethod
    def network_error(cls, detail: str) -> LinearAPIError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"Linear GraphQL network error: {detail}")


class LinearResponseShapeError(UpstreamError):
    """Raised when a Linear response is missing expected fields."""

    @classmethod
    def missing(cls, field: str, body: str | None = None) -> LinearResponseShapeError:
        """Return an error for a missing GraphQL response field."""
        return cls(
            f"Linear GraphQL response missing expected field: {field}", body=body
        )
