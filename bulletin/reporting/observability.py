"""Emit structured observability events for one report run.

This module defines event identifiers and a logger wrapper used by
``DailyReportService`` to emit start, progress, success, and failure
telemetry.

Usage
-----
Create a logger and call lifecycle methods during a run:

>>> event_logger = ReportingEventLogger()
>>> event_logger.log_run_started(
...     project_id="proj-1",
...     date_label="2024-05-02",
...     since=since,
... )

"""

from __future__ import annotations

import enum
import typing as typ

from bulletin.logging import get_logger, log_error, log_info

if typ.TYPE_CHECKING:
    import datetime as dt

    from bulletin.drafting.models import ModelInvocationMetrics
    from bulletin.reporting.classifier import ClassificationResult

logger = get_logger(__name__)


class ReportingEventType(enum.StrEnum):
    """Structured log event types for daily report runs."""

    RUN_STARTED = "report.run.started"
    ISSUES_FETCHED = "report.issues.fetched"
    DRAFT_COMPLETED = "report.draft.completed"
    PAGE_PUBLISHED = "report.page.published"
    RUN_FAILED = "report.run.failed"


class ReportingEventLogger:
    """Emit structured reporting events via femtologging."""

    def log_run_started(
        self,
        *,
        project_id: str,
        date_label: str,
        since: dt.datetime,
    ) -> None:
        """Log the start of a run for one project and report date.

        Parameters
        ----------
        project_id
            Tracker project whose issues are fetched.
        date_label
            ``YYYY-MM-DD`` date of the report.
        since
            Lower bound of the ``updatedAt`` filter, in UTC.

        """
        log_info(
            logger,
            "[%s] project_id=%s date=%s since=%s",
            ReportingEventType.RUN_STARTED,
            project_id,
            date_label,
            since.isoformat(),
        )

    def log_issues_fetched(
        self,
        *,
        issue_count: int,
        buckets: ClassificationResult,
    ) -> None:
        """Log the number of fetched issues and the size of each bucket."""
        log_info(
            logger,
            "[%s] issues=%d completed_yesterday=%d not_done_from_yesterday=%d "
            "due_today=%d remaining=%d",
            ReportingEventType.ISSUES_FETCHED,
            issue_count,
            len(buckets.completed_yesterday),
            len(buckets.not_done_from_yesterday),
            len(buckets.due_today),
            len(buckets.remaining),
        )

    def log_draft_completed(
        self,
        *,
        model: str,
        metrics: ModelInvocationMetrics | None,
    ) -> None:
        """Log a finished draft with latency and token fields.

        Parameters
        ----------
        model
            Model identifier used for drafting, ``template`` when disabled.
        metrics
            Invocation metrics captured for the drafting call.

        """
        latency = metrics.latency_ms if metrics is not None else None
        prompt_tokens = metrics.prompt_tokens if metrics is not None else None
        completion_tokens = metrics.completion_tokens if metrics is not None else None
        total_tokens = metrics.total_tokens if metrics is not None else None
        latency_text = "None" if latency is None else f"{latency:.3f}"
        log_info(
            logger,
            "[%s] model=%s latency_ms=%s "
            "prompt_tokens=%s completion_tokens=%s total_tokens=%s",
            ReportingEventType.DRAFT_COMPLETED,
            model,
            latency_text,
            prompt_tokens,
            completion_tokens,
            total_tokens,
        )

    def log_page_published(
        self, *, title: str, page_id: str, block_count: int
    ) -> None:
        """Log the created page and the number of blocks sent."""
        log_info(
            logger,
            "[%s] title=%s page_id=%s blocks=%d",
            ReportingEventType.PAGE_PUBLISHED,
            title,
            page_id,
            block_count,
        )

    def log_run_failed(
        self,
        *,
        project_id: str,
        error: BaseException,
        duration: dt.timedelta,
    ) -> None:
        """Log a failed run with error details.

        Parameters
        ----------
        project_id
            Tracker project of the run.
        error
            Raised exception from the run.
        duration
            Elapsed runtime between run start and failure.

        """
        log_error(
            logger,
            "[%s] project_id=%s duration_seconds=%.3f error_type=%s error_message=%s",
            ReportingEventType.RUN_FAILED,
            project_id,
            duration.total_seconds(),
            type(error).__name__,
            str(error),
        )
