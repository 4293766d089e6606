"""Typed domain models for Linear issues."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import datetime as dt

UNASSIGNED_LABEL = "Unassigned"
UNKNOWN_STATUS_LABEL = "Unknown"


class IssueStatus(enum.StrEnum):
    """Normalised workflow status of an issue."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    OTHER = "other"


@dataclasses.dataclass(frozen=True, slots=True)
class Issue:
    """One issue snapshot as fetched from the tracker for a single run.

    Attributes
    ----------
    identifier
        Human-facing key such as ``DDK-42``.
    status_name
        Workflow state name exactly as the tracker reports it.
    due_date
        Calendar due date without a time component.
    completed_at
        Completion instant in UTC, ``None`` while the issue is open.

    """

    identifier: str
    title: str
    url: str = ""
    status: IssueStatus = IssueStatus.OTHER
    status_name: str = UNKNOWN_STATUS_LABEL
    assignee: str | None = None
    description: str | None = None
    due_date: dt.date | None = None
    completed_at: dt.datetime | None = None

    @property
    def assignee_label(self) -> str:
        """Assignee display name, or the unassigned placeholder."""
        return self.assignee or UNASSIGNED_LABEL
