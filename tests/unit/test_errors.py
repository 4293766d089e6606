"""Unit tests for the error taxonomy."""

from __future__ import annotations

import pytest

from bulletin.drafting.errors import OpenAIAPIError, OpenAIConfigError
from bulletin.errors import (
    BulletinError,
    ConfigurationError,
    UpstreamError,
    preview_body,
)
from bulletin.linear.errors import LinearAPIError, LinearResponseShapeError
from bulletin.notion.errors import NotionAPIError


@pytest.mark.parametrize(
    "error",
    [
        LinearAPIError.timeout(),
        LinearResponseShapeError.missing("data"),
        OpenAIAPIError.http_error(500),
        NotionAPIError.http_error(400, "{}"),
    ],
)
def test_upstream_errors_share_the_root(error: UpstreamError) -> None:
    """Collaborator failures are ``UpstreamError`` and ``BulletinError``."""
    assert isinstance(error, UpstreamError)
    assert isinstance(error, BulletinError)


def test_configuration_errors_share_the_root() -> None:
    """Drafting configuration errors are configuration errors."""
    assert isinstance(OpenAIConfigError.missing_api_key(), ConfigurationError)
    assert isinstance(ConfigurationError.missing("X"), BulletinError)


def test_describe_appends_body_preview() -> None:
    """``describe`` adds a bounded preview of the response body."""
    error = NotionAPIError.http_error(400, "x" * 600)

    description = error.describe()

    assert description.startswith("Notion API HTTP 400: ")
    assert description.endswith("x" * 500 + "...")


def test_describe_without_body() -> None:
    """Errors without a body describe as their message."""
    assert LinearAPIError.timeout().describe() == "Linear GraphQL request timed out"


@pytest.mark.parametrize(
    ("body", "expected"),
    [(None, ""), ("", ""), ("short", "short"), ("abcdef", "abc...")],
)
def test_preview_body(body: str | None, expected: str) -> None:
    """Bodies are shortened with an ellipsis."""
    assert preview_body(body, limit=3 if body == "abcdef" else 500) == expected


def test_invalid_names_variable_and_constraint() -> None:
    """``invalid`` quotes the value and states the constraint."""
    error = ConfigurationError.invalid("BULLETIN_X", "abc", "Must be an integer")

    assert str(error) == "Invalid BULLETIN_X 'abc'. Must be an integer"
