"""Build the daily Linear report and publish it to Notion."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import datetime as dt
import typing as typ

from bulletin.common.time import ensure_utc
from bulletin.config import LOG_LEVEL_ENV_VAR, BulletinConfig, load_log_level
from bulletin.drafting.factory import create_drafter
from bulletin.errors import BulletinError, UpstreamError
from bulletin.linear.client import LinearGraphQLClient
from bulletin.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)
from bulletin.notion.sink import NotionPageSink
from bulletin.reporting.observability import ReportingEventLogger
from bulletin.reporting.service import (
    DailyReportDependencies,
    DailyReportResult,
    DailyReportService,
)

if typ.TYPE_CHECKING:
    from bulletin.drafting.protocol import NarrativeDrafter

logger = get_logger(__name__)


def parse_as_of(raw: str) -> dt.datetime:
    """Parse an ISO 8601 instant; naive values are taken as UTC.

    Raises
    ------
    argparse.ArgumentTypeError
        If ``raw`` is not an ISO 8601 date or datetime.

    """
    try:
        parsed = dt.datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        msg = f"invalid ISO 8601 instant: {raw!r}"
        raise argparse.ArgumentTypeError(msg) from exc
    return ensure_utc(parsed)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``bulletin`` command."""
    parser = argparse.ArgumentParser(prog="bulletin", description=__doc__)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the report instead of publishing it; Notion settings optional",
    )
    parser.add_argument(
        "--no-draft",
        action="store_true",
        help="Skip the drafting service and publish the rendered skeleton",
    )
    parser.add_argument(
        "--as-of",
        type=parse_as_of,
        default=None,
        metavar="ISO",
        help="Reference instant instead of the current time",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help=f"Log level; overrides {LOG_LEVEL_ENV_VAR}",
    )
    return parser


async def _aclose_drafter(drafter: NarrativeDrafter) -> None:
    aclose = getattr(drafter, "aclose", None)
    if aclose is not None:
        await aclose()


async def run_report(
    config: BulletinConfig,
    *,
    as_of: dt.datetime | None = None,
    publish: bool = True,
) -> DailyReportResult:
    """Wire the adapters from ``config`` and execute one run.

    Every HTTP client created here is closed before returning, whether the
    run succeeded or not.
    """
    async with contextlib.AsyncExitStack() as stack:
        issue_source = LinearGraphQLClient(config.linear)
        stack.push_async_callback(issue_source.aclose)

        drafter = create_drafter(config.drafting)
        stack.push_async_callback(_aclose_drafter, drafter)

        sink: NotionPageSink | None = None
        if publish and config.notion is not None:
            sink = NotionPageSink(config.notion)
            stack.push_async_callback(sink.aclose)

        service = DailyReportService(
            DailyReportDependencies(
                issue_source=issue_source, drafter=drafter, sink=sink
            ),
            project_id=config.linear.project_id,
            config=config.report,
            event_logger=ReportingEventLogger(),
        )
        return await service.run(as_of=as_of, publish=publish)


def _setup_logging(cli_level: str | None) -> None:
    raw_level = cli_level or load_log_level()
    normalized, invalid = configure_logging(raw_level)
    if invalid and raw_level is not None:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            raw_level,
            normalized,
        )


def main(argv: list[str] | None = None) -> int:
    """Run the daily report once.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 on configuration or collaborator failure.

    """
    args = build_parser().parse_args(argv)
    _setup_logging(args.log_level)

    try:
        config = BulletinConfig.from_env(
            require_publishing=not args.dry_run,
            force_template=args.no_draft,
        )
        result = asyncio.run(
            run_report(config, as_of=args.as_of, publish=not args.dry_run)
        )
    except UpstreamError as exc:
        log_error(logger, "%s: %s", type(exc).__name__, exc.describe())
        return 1
    except BulletinError as exc:
        log_error(logger, "%s: %s", type(exc).__name__, exc)
        return 1

    if args.dry_run:
        print(result.text, end="" if result.text.endswith("\n") else "\n")
    else:
        log_info(
            logger,
            "Published %r with %d blocks (page_id=%s)",
            result.title,
            len(result.blocks),
            result.page_id,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
