"""Unit tests for the ``bulletin`` command-line entry point."""

from __future__ import annotations

import argparse
import datetime as dt
import typing as typ

import pytest

from bulletin import cli
from bulletin.config import BulletinConfig
from bulletin.drafting.config import DraftingBackend, DraftingConfig
from bulletin.linear.client import LinearConfig
from bulletin.notion.errors import NotionAPIError
from bulletin.reporting.blocks import Paragraph
from bulletin.reporting.config import ReportConfig
from bulletin.reporting.service import DailyReportResult
from tests.helpers.issues import REFERENCE_INSTANT, make_issue

_LINEAR_ENV = {
    "BULLETIN_LINEAR_API_KEY": "lin-key",
    "BULLETIN_LINEAR_PROJECT_ID": "proj-1",
}
_NOTION_ENV = {
    "BULLETIN_NOTION_API_KEY": "notion-key",
    "BULLETIN_NOTION_DATABASE_ID": "db-1",
}


class _RunRecorder:
    """Stand-in for ``run_report`` capturing its arguments."""

    def __init__(
        self,
        result: DailyReportResult | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.result = result or DailyReportResult(
            title="Linear daily report 2024-07-09",
            text="# 2024-07-09 Daily report: Team\n",
            blocks=(Paragraph(text="x"),),
            issue_count=0,
        )
        self.error = error
        self.calls: list[tuple[BulletinConfig, dt.datetime | None, bool]] = []

    async def __call__(
        self,
        config: BulletinConfig,
        *,
        as_of: dt.datetime | None = None,
        publish: bool = True,
    ) -> DailyReportResult:
        self.calls.append((config, as_of, publish))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def cli_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Silence logging setup and provide tracker credentials."""
    clean_env.setattr(
        cli, "configure_logging", lambda level, **_: ("INFO", False)
    )
    for name, value in _LINEAR_ENV.items():
        clean_env.setenv(name, value)
    clean_env.setenv("BULLETIN_DRAFTING_BACKEND", "template")
    return clean_env


class TestParseAsOf:
    """Tests for ``--as-of`` parsing."""

    def test_zulu_suffix_is_accepted(self) -> None:
        """A trailing ``Z`` denotes UTC."""
        assert cli.parse_as_of("2024-07-08T15:30:00Z") == REFERENCE_INSTANT

    def test_naive_value_is_taken_as_utc(self) -> None:
        """Values without an offset are interpreted in UTC."""
        assert cli.parse_as_of("2024-07-08T15:30") == REFERENCE_INSTANT

    def test_offset_value_is_converted_to_utc(self) -> None:
        """Explicit offsets are normalised to UTC."""
        assert cli.parse_as_of("2024-07-09T00:30+09:00") == REFERENCE_INSTANT

    def test_invalid_value_is_rejected(self) -> None:
        """Garbage input raises ``ArgumentTypeError`` for argparse."""
        with pytest.raises(argparse.ArgumentTypeError, match="yesterday"):
            cli.parse_as_of("yesterday")

    def test_parser_exits_on_invalid_as_of(self) -> None:
        """The parser turns a bad ``--as-of`` into a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            cli.build_parser().parse_args(["--as-of", "not-a-date"])

        assert excinfo.value.code == 2


class TestMain:
    """Tests for ``main`` exit codes and output."""

    def test_missing_configuration_returns_one(
        self, cli_env: pytest.MonkeyPatch
    ) -> None:
        """A publishing run without Notion settings fails with exit code 1."""
        recorder = _RunRecorder()
        cli_env.setattr(cli, "run_report", recorder)

        assert cli.main([]) == 1
        assert recorder.calls == [], "Expected no run without configuration"

    def test_dry_run_prints_report(
        self,
        cli_env: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """``--dry-run`` prints the text and never requires Notion settings."""
        recorder = _RunRecorder()
        cli_env.setattr(cli, "run_report", recorder)

        exit_code = cli.main(["--dry-run", "--as-of", "2024-07-08T15:30:00Z"])

        assert exit_code == 0
        assert capsys.readouterr().out == "# 2024-07-09 Daily report: Team\n"
        config, as_of, publish = recorder.calls[0]
        assert config.notion is None
        assert as_of == REFERENCE_INSTANT
        assert publish is False

    def test_publishing_run_returns_zero(self, cli_env: pytest.MonkeyPatch) -> None:
        """A configured publishing run passes ``publish=True``."""
        for name, value in _NOTION_ENV.items():
            cli_env.setenv(name, value)
        recorder = _RunRecorder()
        cli_env.setattr(cli, "run_report", recorder)

        assert cli.main([]) == 0
        config, as_of, publish = recorder.calls[0]
        assert config.notion is not None
        assert as_of is None
        assert publish is True

    def test_no_draft_forces_template_backend(
        self, cli_env: pytest.MonkeyPatch
    ) -> None:
        """``--no-draft`` ignores the configured backend and the OpenAI key."""
        cli_env.setenv("BULLETIN_DRAFTING_BACKEND", "openai")
        recorder = _RunRecorder()
        cli_env.setattr(cli, "run_report", recorder)

        assert cli.main(["--dry-run", "--no-draft"]) == 0
        config = recorder.calls[0][0]
        assert config.drafting.backend is DraftingBackend.TEMPLATE

    def test_openai_backend_without_key_returns_one(
        self, cli_env: pytest.MonkeyPatch
    ) -> None:
        """Selecting OpenAI without a key is a configuration error."""
        cli_env.setenv("BULLETIN_DRAFTING_BACKEND", "openai")
        cli_env.setattr(cli, "run_report", _RunRecorder())

        assert cli.main(["--dry-run"]) == 1

    def test_upstream_error_returns_one(self, cli_env: pytest.MonkeyPatch) -> None:
        """Collaborator failures map to exit code 1."""
        cli_env.setattr(
            cli,
            "run_report",
            _RunRecorder(error=NotionAPIError.http_error(502, "bad gateway")),
        )

        assert cli.main(["--dry-run"]) == 1

    def test_unexpected_error_propagates(self, cli_env: pytest.MonkeyPatch) -> None:
        """Programming errors are not converted into exit codes."""
        cli_env.setattr(cli, "run_report", _RunRecorder(error=KeyError("boom")))

        with pytest.raises(KeyError):
            cli.main(["--dry-run"])

    def test_invalid_log_level_is_reported(
        self, cli_env: pytest.MonkeyPatch
    ) -> None:
        """An unknown ``--log-level`` falls back and emits a warning."""
        warnings: list[tuple[str, tuple[object, ...]]] = []
        cli_env.setattr(
            cli, "configure_logging", lambda level, **_: ("INFO", True)
        )
        cli_env.setattr(
            cli,
            "log_warning",
            lambda _logger, template, *args, **_: warnings.append((template, args)),
        )
        cli_env.setattr(cli, "run_report", _RunRecorder())

        assert cli.main(["--dry-run", "--log-level", "loud"]) == 0
        assert warnings == [
            ("Invalid log level %r, falling back to %s", ("loud", "INFO"))
        ]


class _FakeIssueSource:
    """Issue source standing in for the Linear client."""

    instances: typ.ClassVar[list[_FakeIssueSource]] = []

    def __init__(self, config: LinearConfig) -> None:
        self.config = config
        self.closed = False
        _FakeIssueSource.instances.append(self)

    async def fetch_issues(
        self, *, since: dt.datetime, project_id: str
    ) -> list[typ.Any]:
        return [make_issue("DDK-9")]

    async def aclose(self) -> None:
        self.closed = True


class TestRunReport:
    """Tests for adapter wiring in ``run_report``."""

    @pytest.mark.asyncio
    async def test_dry_run_wires_adapters_and_closes_them(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The tracker client is closed after the run completes."""
        _FakeIssueSource.instances.clear()
        monkeypatch.setattr(cli, "LinearGraphQLClient", _FakeIssueSource)
        config = BulletinConfig(
            linear=LinearConfig(api_key="lin-key", project_id="proj-1"),
            notion=None,
            drafting=DraftingConfig(),
            report=ReportConfig(project_name="Reef"),
        )

        result = await cli.run_report(config, as_of=REFERENCE_INSTANT, publish=False)

        assert result.issue_count == 1
        assert "**DDK-9**" in result.text
        assert result.page_id is None
        (source,) = _FakeIssueSource.instances
        assert source.closed is True
