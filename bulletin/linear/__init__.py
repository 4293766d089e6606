"""Linear issue source: domain model, status mapping and GraphQL client."""

from __future__ import annotations

from .client import IssueSource, LinearConfig, LinearGraphQLClient, issue_from_node
from .errors import LinearAPIError, LinearResponseShapeError
from .models import UNASSIGNED_LABEL, UNKNOWN_STATUS_LABEL, Issue, IssueStatus
from .status import normalize_status

__all__ = [
    "UNASSIGNED_LABEL",
    "UNKNOWN_STATUS_LABEL",
    "Issue",
    "IssueSource",
    "IssueStatus",
    "LinearAPIError",
    "LinearConfig",
    "LinearGraphQLClient",
    "LinearResponseShapeError",
    "issue_from_node",
    "normalize_status",
]
