"""Unit tests for femtologging integration helpers.

Run with:
    pytest tests/unit/test_logging.py
"""

from __future__ import annotations

import pytest

from bulletin.logging import (
    configure_logging,
    format_log_message,
    log_debug,
    log_error,
    log_exception,
    log_info,
    log_warning,
    normalize_log_level,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info, stack_info))
        return message


@pytest.mark.parametrize(
    ("input_level", "expected_level", "expected_invalid"),
    [
        ("warning", "WARNING", False),
        (" debug ", "DEBUG", False),
        ("TRACE", "TRACE", False),
        (None, "INFO", True),
        ("", "INFO", True),
        ("loud", "INFO", True),
    ],
)
def test_normalize_log_level(
    input_level: str | None,
    expected_level: str,
    *,
    expected_invalid: bool,
) -> None:
    """Known levels are upper-cased; anything else falls back to INFO."""
    level, invalid = normalize_log_level(input_level)

    assert level == expected_level, (
        f"Expected {input_level!r} to normalize to {expected_level}."
    )
    assert invalid is expected_invalid, (
        f"Expected invalid flag to be {expected_invalid} for {input_level!r}."
    )


def test_format_log_message_uses_percent_formatting() -> None:
    """Percent formatting produces the expected message."""
    assert format_log_message("fetched %d issues for %s", 3, "proj") == (
        "fetched 3 issues for proj"
    )


def test_format_log_message_without_args_keeps_percent_signs() -> None:
    """Templates are not interpolated when no arguments are given."""
    assert format_log_message("100% done") == "100% done"


@pytest.mark.parametrize(
    ("emit", "level"),
    [
        (log_debug, "DEBUG"),
        (log_info, "INFO"),
        (log_warning, "WARNING"),
        (log_error, "ERROR"),
    ],
)
def test_level_helpers_format_and_pass_level(emit: object, level: str) -> None:
    """Each helper formats its template and emits at its own level."""
    logger = _FakeLogger()

    emit(logger, "hello %s", "world")  # type: ignore[operator]

    assert logger.calls == [(level, "hello world", None, False)], (
        f"Expected {level} log entry with formatted message."
    )


def test_log_warning_forwards_exc_info() -> None:
    """log_warning forwards exc_info to the logger."""
    logger = _FakeLogger()
    exc = ValueError("boom")

    log_warning(logger, "warning: %s", "oops", exc_info=exc)

    assert logger.calls == [("WARNING", "warning: oops", exc, False)]


def test_log_exception_passes_exc_info() -> None:
    """log_exception forwards the exception payload to the logger."""
    logger = _FakeLogger()
    exc = RuntimeError("boom")

    log_exception(logger, "run failed", exc)

    assert logger.calls == [("ERROR", "run failed", exc, False)]


@pytest.mark.parametrize(
    ("input_level", "expected_normalized", "expected_invalid", "force"),
    [
        ("DEBUG", "DEBUG", False, False),
        ("nope", "INFO", True, False),
        ("error", "ERROR", False, True),
    ],
)
def test_configure_logging(
    monkeypatch: pytest.MonkeyPatch,
    input_level: str,
    expected_normalized: str,
    *,
    expected_invalid: bool,
    force: bool,
) -> None:
    """configure_logging normalizes input levels and installs the handler."""
    captured: dict[str, object] = {}

    def fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("bulletin.logging.basicConfig", fake_basic_config)

    normalized, invalid = configure_logging(input_level, force=force)

    assert normalized == expected_normalized
    assert invalid is expected_invalid
    assert captured == {"level": expected_normalized, "force": force}
