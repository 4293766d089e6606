"""Unit tests for reporting observability logging."""

from __future__ import annotations

import datetime as dt

import pytest

from bulletin.drafting.models import ModelInvocationMetrics
from bulletin.reporting.classifier import ClassificationResult
from bulletin.reporting.observability import ReportingEventLogger, ReportingEventType
from tests.helpers.femtologging_capture import capture_femto_logs
from tests.helpers.issues import make_issue

_LOGGER_NAME = "bulletin.reporting.observability"


class TestReportingEventLogger:
    """Tests for ``ReportingEventLogger`` structured log events."""

    @pytest.fixture
    def logger_instance(self) -> ReportingEventLogger:
        """Return a fresh reporting event logger."""
        return ReportingEventLogger()

    def test_log_run_started_emits_info(
        self,
        logger_instance: ReportingEventLogger,
    ) -> None:
        """Start events carry project, date and the fetch lower bound."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_run_started(
                project_id="proj-1",
                date_label="2024-07-09",
                since=dt.datetime(2024, 7, 7, 15, 0, tzinfo=dt.UTC),
            )
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level == "INFO"
            assert ReportingEventType.RUN_STARTED in record.message
            assert "project_id=proj-1" in record.message
            assert "since=2024-07-07T15:00:00+00:00" in record.message

    def test_log_issues_fetched_reports_bucket_sizes(
        self,
        logger_instance: ReportingEventLogger,
    ) -> None:
        """Fetch events include the issue count and every bucket size."""
        buckets = ClassificationResult(
            due_today=(make_issue("DDK-1"),),
            remaining=(make_issue("DDK-2"), make_issue("DDK-3")),
        )

        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_issues_fetched(issue_count=3, buckets=buckets)
            capture.wait_for_count(1)
            message = capture.records[0].message
            assert ReportingEventType.ISSUES_FETCHED in message
            assert "issues=3" in message
            assert "due_today=1" in message
            assert "remaining=2" in message
            assert "completed_yesterday=0" in message

    def test_log_draft_completed_emits_metrics(
        self,
        logger_instance: ReportingEventLogger,
    ) -> None:
        """Draft events include latency and token usage fields."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_draft_completed(
                model="gpt-4o-mini",
                metrics=ModelInvocationMetrics(
                    latency_ms=123.4,
                    prompt_tokens=200,
                    completion_tokens=80,
                    total_tokens=280,
                ),
            )
            capture.wait_for_count(1)
            message = capture.records[0].message
            assert ReportingEventType.DRAFT_COMPLETED in message
            assert "model=gpt-4o-mini" in message
            assert "latency_ms=123.400" in message
            assert "total_tokens=280" in message

    def test_log_draft_completed_without_metrics(
        self,
        logger_instance: ReportingEventLogger,
    ) -> None:
        """Missing metrics are rendered as ``None``."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_draft_completed(model="template", metrics=None)
            capture.wait_for_count(1)
            assert "latency_ms=None" in capture.records[0].message

    def test_log_page_published(
        self,
        logger_instance: ReportingEventLogger,
    ) -> None:
        """Publish events name the page and block count."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_page_published(
                title="Linear daily report 2024-07-09", page_id="page-1", block_count=42
            )
            capture.wait_for_count(1)
            message = capture.records[0].message
            assert ReportingEventType.PAGE_PUBLISHED in message
            assert "page_id=page-1" in message
            assert "blocks=42" in message

    def test_log_run_failed_emits_error(
        self,
        logger_instance: ReportingEventLogger,
    ) -> None:
        """Failure events are logged at ERROR with error metadata."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_run_failed(
                project_id="proj-1",
                error=RuntimeError("boom"),
                duration=dt.timedelta(seconds=2),
            )
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level == "ERROR"
            assert ReportingEventType.RUN_FAILED in record.message
            assert "error_type=RuntimeError" in record.message
            assert "duration_seconds=2.000" in record.message
