"""Daily report pipeline service.

This module provides the DailyReportService class which orchestrates one
run: computing the time window, fetching issues, classifying them,
composing and cleaning the report text, converting it to blocks, and
publishing the page.

Usage
-----
Create a service and run it:

>>> from bulletin.drafting import TemplateDrafter
>>> from bulletin.linear import LinearConfig, LinearGraphQLClient
>>> from bulletin.notion import NotionConfig, NotionPageSink
>>> from bulletin.reporting import (
...     DailyReportDependencies,
...     DailyReportService,
...     ReportConfig,
... )
>>>
>>> dependencies = DailyReportDependencies(
...     issue_source=LinearGraphQLClient(linear_config),
...     drafter=TemplateDrafter(),
...     sink=NotionPageSink(notion_config),
... )
>>> service = DailyReportService(
...     dependencies, project_id=linear_config.project_id, config=ReportConfig()
... )
>>> result = await service.run()

"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import time
import typing as typ

from bulletin.common.time import utcnow
from bulletin.logging import get_logger, log_debug
from bulletin.notion.errors import NotionConfigError

from .blocks import to_blocks
from .classifier import classify
from .composer import ReportComposer
from .config import ReportConfig
from .postprocess import strip_identifiers_outside_section
from .sections import ISSUES_SECTION
from .window import TimeWindow

if typ.TYPE_CHECKING:
    from bulletin.drafting.protocol import NarrativeDrafter
    from bulletin.linear.client import IssueSource
    from bulletin.notion.sink import PageSink

    from .blocks import BlockLimits, DocumentBlock
    from .observability import ReportingEventLogger

logger = get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class DailyReportDependencies:
    """Collaborators of DailyReportService.

    Attributes
    ----------
    issue_source
        Tracker adapter supplying the issues.
    drafter
        Backend rewriting the skeleton into prose.
    sink
        Publishing adapter; ``None`` when the run never publishes.

    """

    issue_source: IssueSource
    drafter: NarrativeDrafter
    sink: PageSink | None = None


@dc.dataclass(frozen=True, slots=True)
class DailyReportResult:
    """Outcome of one run.

    Attributes
    ----------
    title
        Page title, also set for unpublished runs.
    text
        Post-processed report text.
    blocks
        Blocks derived from ``text``, capped to the platform limit.
    issue_count
        Number of fetched issues.
    page_id
        Identifier of the created page, ``None`` when not published.

    """

    title: str
    text: str
    blocks: tuple[DocumentBlock, ...]
    issue_count: int
    page_id: str | None = None

    @property
    def published(self) -> bool:
        """Return whether a page was created."""
        return self.page_id is not None


class DailyReportService:
    """Orchestrates one daily report run.

    Stages run strictly in sequence and the page is published only after
    every earlier stage succeeded, so a failure never produces a partial
    page.
    """

    def __init__(  # noqa: PLR0913
        self,
        dependencies: DailyReportDependencies,
        *,
        project_id: str,
        config: ReportConfig | None = None,
        event_logger: ReportingEventLogger | None = None,
        block_limits: BlockLimits | None = None,
        clock: typ.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Configure the service with dependencies.

        Parameters
        ----------
        dependencies
            Issue source, drafter and optional sink.
        project_id
            Tracker project whose issues are reported.
        config
            Report settings; uses defaults if not provided.
        event_logger
            Optional structured event logger for lifecycle events.
        block_limits
            Block conversion limits; defaults to the Notion limits.
        clock
            Source of the current instant when ``run`` gets no ``as_of``.

        """
        self._issue_source = dependencies.issue_source
        self._drafter = dependencies.drafter
        self._sink = dependencies.sink
        self._project_id = project_id
        self._config = config or ReportConfig()
        self._event_logger = event_logger
        self._block_limits = block_limits
        self._clock = clock
        self._composer = ReportComposer(
            self._drafter, self._config.composer_settings
        )

    def _log_to_event_logger(
        self,
        event_method_name: str,
        **kwargs: typ.Any,  # noqa: ANN401
    ) -> None:
        """Delegate to an event logger method if the logger is configured."""
        if self._event_logger is None:
            return
        method = getattr(self._event_logger, event_method_name)
        method(**kwargs)

    def window_for(self, as_of: dt.datetime | None = None) -> TimeWindow:
        """Return the time window for ``as_of``, or for the clock's now."""
        offset = self._config.tz_offset_hours
        if as_of is None:
            return TimeWindow.current(offset, clock=self._clock)
        return TimeWindow.at(as_of, offset)

    async def run(
        self,
        *,
        as_of: dt.datetime | None = None,
        publish: bool = True,
    ) -> DailyReportResult:
        """Produce the report and, when ``publish`` is set, create the page.

        Parameters
        ----------
        as_of
            Reference instant; defaults to the service clock.
        publish
            Send the blocks to the sink. When ``False`` the run stops after
            block conversion.

        Returns
        -------
        DailyReportResult
            Title, text, blocks and, if published, the page id.

        Raises
        ------
        NotionConfigError
            If ``publish`` is set but no sink was provided.
        BulletinError
            Any collaborator failure, re-raised after the failure event.

        """
        if publish and self._sink is None:
            raise NotionConfigError.publishing_disabled()

        window = self.window_for(as_of)
        started = time.monotonic()
        self._log_to_event_logger(
            "log_run_started",
            project_id=self._project_id,
            date_label=window.date_label,
            since=window.since_utc,
        )
        try:
            return await self._run_stages(window, publish=publish)
        except Exception as exc:
            self._log_to_event_logger(
                "log_run_failed",
                project_id=self._project_id,
                error=exc,
                duration=_elapsed(started),
            )
            raise

    async def _run_stages(
        self, window: TimeWindow, *, publish: bool
    ) -> DailyReportResult:
        issues = await self._issue_source.fetch_issues(
            since=window.since_utc, project_id=self._project_id
        )
        buckets = classify(issues, window)
        self._log_to_event_logger(
            "log_issues_fetched", issue_count=len(issues), buckets=buckets
        )

        composed = await self._composer.compose(buckets, window.date_label, issues)
        self._log_to_event_logger(
            "log_draft_completed",
            model=getattr(self._drafter, "model", type(self._drafter).__name__),
            metrics=self._drafter.last_invocation_metrics,
        )

        text = strip_identifiers_outside_section(composed, ISSUES_SECTION)
        blocks = tuple(to_blocks(text.rstrip("\n"), self._block_limits))
        title = self._config.page_title(window.date_label)
        log_debug(logger, "Converted report to %d blocks", len(blocks))

        page_id: str | None = None
        if publish and self._sink is not None:
            page_id = await self._sink.publish(title, blocks)
            self._log_to_event_logger(
                "log_page_published",
                title=title,
                page_id=page_id,
                block_count=len(blocks),
            )

        return DailyReportResult(
            title=title,
            text=text,
            blocks=blocks,
            issue_count=len(issues),
            page_id=page_id,
        )


def _elapsed(started: float) -> dt.timedelta:
    return dt.timedelta(seconds=time.monotonic() - started)
