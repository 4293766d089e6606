"""Bucket issues relative to a :class:`TimeWindow`.

Each issue is assigned to exactly one bucket; the first matching rule wins:

1. completed during the shifted ``yesterday``     -> ``completed_yesterday``
2. due ``yesterday`` and not completed             -> ``not_done_from_yesterday``
3. due ``today`` or currently in progress          -> ``due_today``
4. anything else                                   -> ``remaining``

A late issue completed yesterday is reported as a win, and an overdue issue
that is also in progress is reported once.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from bulletin.linear.models import Issue, IssueStatus

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .window import TimeWindow


class Bucket(enum.StrEnum):
    """Mutually exclusive classification outcomes."""

    COMPLETED_YESTERDAY = "completed_yesterday"
    NOT_DONE_FROM_YESTERDAY = "not_done_from_yesterday"
    DUE_TODAY = "due_today"
    REMAINING = "remaining"


@dc.dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Issues partitioned into the four buckets, input order preserved."""

    completed_yesterday: tuple[Issue, ...] = ()
    not_done_from_yesterday: tuple[Issue, ...] = ()
    due_today: tuple[Issue, ...] = ()
    remaining: tuple[Issue, ...] = ()

    def bucket(self, bucket: Bucket) -> tuple[Issue, ...]:
        """Return the issues held in ``bucket``."""
        return typ.cast("tuple[Issue, ...]", getattr(self, bucket.value))

    def __len__(self) -> int:
        """Total number of classified issues."""
        return sum(len(self.bucket(bucket)) for bucket in Bucket)


def classify_issue(issue: Issue, window: TimeWindow) -> Bucket:
    """Return the bucket ``issue`` belongs to within ``window``."""
    if (
        issue.completed_at is not None
        and window.local_date(issue.completed_at) == window.yesterday
    ):
        return Bucket.COMPLETED_YESTERDAY
    if issue.due_date == window.yesterday and issue.completed_at is None:
        return Bucket.NOT_DONE_FROM_YESTERDAY
    if issue.due_date == window.today or issue.status is IssueStatus.IN_PROGRESS:
        return Bucket.DUE_TODAY
    return Bucket.REMAINING


def classify(issues: cabc.Iterable[Issue], window: TimeWindow) -> ClassificationResult:
    """Partition ``issues`` into buckets relative to ``window``.

    Examples
    --------
    >>> import datetime as dt
    >>> from bulletin.reporting.window import TimeWindow
    >>> window = TimeWindow.at(dt.datetime(2024, 7, 8, tzinfo=dt.UTC), 9)
    >>> len(classify([], window))
    0

    """
    grouped: dict[Bucket, list[Issue]] = {bucket: [] for bucket in Bucket}
    for issue in issues:
        grouped[classify_issue(issue, window)].append(issue)
    return ClassificationResult(
        **{bucket.value: tuple(items) for bucket, items in grouped.items()}
    )
