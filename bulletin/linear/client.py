"""Linear GraphQL client used to fetch the issues for one report run."""

from __future__ import annotations

import dataclasses
import datetime as dt
import typing as typ

import httpx

from bulletin.common.env import parse_int, require_str
from bulletin.common.time import ensure_utc

from .errors import LinearAPIError, LinearResponseShapeError
from .models import UNKNOWN_STATUS_LABEL, Issue
from .status import normalize_status

if typ.TYPE_CHECKING:
    from bulletin.common.env import Environ

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_PAGE_SIZE = 100
_MAX_PAGE_SIZE = 250


class IssueSource(typ.Protocol):
    """Interface for fetching the issues a report is built from."""

    async def fetch_issues(
        self, *, since: dt.datetime, project_id: str
    ) -> list[Issue]:
        """Return issues of ``project_id`` updated at or after ``since``."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class LinearConfig:
    """Configuration for the Linear GraphQL API client.

    Attributes
    ----------
    api_key
        Personal or workspace API key, sent verbatim as ``Authorization``.
    project_id
        Project whose issues are reported.
    page_size
        Number of issues requested; issues beyond it are not seen.

    """

    api_key: str
    project_id: str
    endpoint: str = "https://api.linear.app/graphql"
    page_size: int = _DEFAULT_PAGE_SIZE
    timeout_s: float = 20.0

    @classmethod
    def from_env(cls, environ: Environ) -> LinearConfig:
        """Build configuration from ``BULLETIN_LINEAR_*`` variables."""
        return cls(
            api_key=require_str(environ, "BULLETIN_LINEAR_API_KEY"),
            project_id=require_str(environ, "BULLETIN_LINEAR_PROJECT_ID"),
            page_size=parse_int(
                environ,
                "BULLETIN_LINEAR_PAGE_SIZE",
                _DEFAULT_PAGE_SIZE,
                minimum=1,
                maximum=_MAX_PAGE_SIZE,
            ),
        )


_ISSUES_QUERY = """
query DailyIssues($updatedAfter: DateTimeOrDuration!, $projectId: ID!, $first: Int!) {
  issues(
    filter: {
      project: { id: { eq: $projectId } }
      updatedAt: { gte: $updatedAfter }
    }
    orderBy: updatedAt
    first: $first
  ) {
    nodes {
      identifier
      title
      url
      state { name type }
      assignee { name }
      description
      createdAt
      updatedAt
      completedAt
      dueDate
    }
  }
}
"""


def _maybe_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _nested_str(node: dict[str, typ.Any], key: str, field: str) -> str | None:
    inner = node.get(key)
    if not isinstance(inner, dict):
        return None
    return _maybe_str(inner.get(field))


def _parse_due_date(value: object) -> dt.date | None:
    if not isinstance(value, str):
        return None
    try:
        return dt.date.fromisoformat(value[:10])
    except ValueError:
        return None


def _parse_instant(value: object) -> dt.datetime | None:
    if not isinstance(value, str):
        return None
    try:
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(parsed)


def issue_from_node(node: dict[str, typ.Any]) -> Issue:
    """Map one GraphQL issue node onto :class:`Issue`.

    Missing or mistyped fields fall back to defaults instead of failing the
    run: an absent state becomes ``"Unknown"``, unparseable dates ``None``.
    """
    status_name = _nested_str(node, "state", "name")
    state_type = _nested_str(node, "state", "type")
    return Issue(
        identifier=_maybe_str(node.get("identifier")) or "",
        title=_maybe_str(node.get("title")) or "",
        url=_maybe_str(node.get("url")) or "",
        status=normalize_status(status_name, state_type),
        status_name=status_name or UNKNOWN_STATUS_LABEL,
        assignee=_nested_str(node, "assignee", "name"),
        description=_maybe_str(node.get("description")),
        due_date=_parse_due_date(node.get("dueDate")),
        completed_at=_parse_instant(node.get("completedAt")),
    )


def _parse_graphql_payload(response: httpx.Response) -> dict[str, typ.Any]:
    """Decode a GraphQL response and return its ``data`` member."""
    try:
        payload = response.json()
    except ValueError as exc:  # invalid JSON or undecodable bytes
        raise LinearResponseShapeError.missing("response", response.text) from exc
    if not isinstance(payload, dict):
        raise LinearResponseShapeError.missing("response", response.text)

    errors = payload.get("errors")
    if errors:
        raise LinearAPIError.graphql_errors(errors, response.text)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise LinearResponseShapeError.missing("data", response.text)
    return data


def _issue_nodes(data: dict[str, typ.Any], body: str) -> list[dict[str, typ.Any]]:
    issues = data.get("issues")
    if not isinstance(issues, dict):
        raise LinearResponseShapeError.missing("issues", body)
    nodes = issues.get("nodes")
    if not isinstance(nodes, list):
        raise LinearResponseShapeError.missing("issues.nodes", body)
    return [node for node in nodes if isinstance(node, dict)]


class LinearGraphQLClient:
    """Linear GraphQL implementation of :class:`IssueSource`.

    Parameters
    ----------
    config
        API configuration.
    http_client
        Optional ``httpx.AsyncClient`` for testing. When omitted the instance
        creates and owns its own client.

    """

    def __init__(
        self,
        config: LinearConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": config.api_key,
                "Content-Type": "application/json",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_issues(
        self, *, since: dt.datetime, project_id: str
    ) -> list[Issue]:
        """Fetch one page of issues updated since ``since``.

        Raises
        ------
        LinearAPIError
            On transport failures, HTTP errors or GraphQL ``errors``.
        LinearResponseShapeError
            If the response lacks ``data.issues.nodes``.

        """
        variables = {
            "updatedAfter": ensure_utc(since).isoformat().replace("+00:00", "Z"),
            "projectId": project_id,
            "first": self._config.page_size,
        }
        try:
            response = await self._client.post(
                self._config.endpoint,
                json={"query": _ISSUES_QUERY, "variables": variables},
            )
        except httpx.TimeoutException as exc:
            raise LinearAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise LinearAPIError.network_error(str(exc)) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise LinearAPIError.http_error(response.status_code, response.text)

        data = _parse_graphql_payload(response)
        return [issue_from_node(node) for node in _issue_nodes(data, response.text)]
