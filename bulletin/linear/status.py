"""Workflow status normalisation for Linear states.

Linear exposes both a team-defined state ``name`` ("In Review", "QA", ...)
and a fixed state ``type``. The type is authoritative when present; the
name is matched against common aliases otherwise.
"""

from __future__ import annotations

from .models import IssueStatus

STATE_TYPE_MAP: dict[str, IssueStatus] = {
    "triage": IssueStatus.OPEN,
    "backlog": IssueStatus.OPEN,
    "unstarted": IssueStatus.OPEN,
    "started": IssueStatus.IN_PROGRESS,
    "completed": IssueStatus.DONE,
}

# Keys are lowercase; lookups strip and lowercase the raw name.
STATE_NAME_ALIASES: dict[str, IssueStatus] = {
    "triage": IssueStatus.OPEN,
    "backlog": IssueStatus.OPEN,
    "todo": IssueStatus.OPEN,
    "to do": IssueStatus.OPEN,
    "open": IssueStatus.OPEN,
    "new": IssueStatus.OPEN,
    "in progress": IssueStatus.IN_PROGRESS,
    "in-progress": IssueStatus.IN_PROGRESS,
    "inprogress": IssueStatus.IN_PROGRESS,
    "started": IssueStatus.IN_PROGRESS,
    "done": IssueStatus.DONE,
    "completed": IssueStatus.DONE,
    "complete": IssueStatus.DONE,
    "closed": IssueStatus.DONE,
    "resolved": IssueStatus.DONE,
}


def normalize_status(name: str | None, state_type: str | None = None) -> IssueStatus:
    """Map a raw state name and optional state type onto :class:`IssueStatus`.

    Parameters
    ----------
    name
        State name as shown in the tracker, e.g. ``"In Progress"``.
    state_type
        Linear state type, e.g. ``"started"``.

    Returns
    -------
    IssueStatus
        ``OTHER`` for anything unrecognised, including cancelled states.

    Examples
    --------
    >>> normalize_status("In Progress")
    <IssueStatus.IN_PROGRESS: 'in_progress'>
    >>> normalize_status("In Review", "started")
    <IssueStatus.IN_PROGRESS: 'in_progress'>
    >>> normalize_status("Canceled", "canceled")
    <IssueStatus.OTHER: 'other'>

    """
    if state_type:
        by_type = STATE_TYPE_MAP.get(state_type.strip().lower())
        if by_type is not None:
            return by_type
        return IssueStatus.OTHER
    if not name:
        return IssueStatus.OTHER
    return STATE_NAME_ALIASES.get(name.strip().lower(), IssueStatus.OTHER)
