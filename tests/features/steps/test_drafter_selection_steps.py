"""Step definitions for drafting backend selection feature tests."""

from __future__ import annotations

import asyncio
import typing as typ

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from bulletin.drafting.config import DraftingConfig
from bulletin.drafting.errors import DraftingConfigError, OpenAIConfigError
from bulletin.drafting.factory import create_drafter
from bulletin.drafting.openai_client import OpenAINarrativeDrafter
from bulletin.drafting.template import TemplateDrafter
from bulletin.errors import ConfigurationError

if typ.TYPE_CHECKING:
    from bulletin.drafting.protocol import NarrativeDrafter

scenarios("../drafter_selection.feature")


class DrafterSelectionContext(typ.TypedDict, total=False):
    """Context shared between BDD steps."""

    env_vars: dict[str, str]
    drafter: NarrativeDrafter
    error: ConfigurationError | None


@pytest.fixture
def drafter_context() -> DrafterSelectionContext:
    """Provide shared context for drafter selection steps."""
    return DrafterSelectionContext(env_vars={}, error=None)


@given(parsers.parse('{name} is set to "{value}"'))
def given_env_var(
    drafter_context: DrafterSelectionContext, name: str, value: str
) -> None:
    """Record an environment variable for drafter creation."""
    drafter_context["env_vars"][name] = value


@when("I create the drafter from the environment")
def when_create_drafter(drafter_context: DrafterSelectionContext) -> None:
    """Create the drafter, capturing configuration errors."""
    try:
        config = DraftingConfig.from_env(drafter_context["env_vars"])
        drafter_context["drafter"] = create_drafter(config)
    except ConfigurationError as exc:
        drafter_context["error"] = exc


def _drafter(drafter_context: DrafterSelectionContext) -> NarrativeDrafter:
    error = drafter_context.get("error")
    assert error is None, f"Expected a drafter but creation failed: {error}"
    drafter = drafter_context.get("drafter")
    assert drafter is not None, "Expected a drafter but got None"
    return drafter


@then("the drafter is a TemplateDrafter")
def then_drafter_is_template(drafter_context: DrafterSelectionContext) -> None:
    """Verify the template backend was selected."""
    drafter = _drafter(drafter_context)
    assert isinstance(drafter, TemplateDrafter), (
        f"Expected TemplateDrafter but got {type(drafter).__name__}"
    )


@then("the drafter is an OpenAINarrativeDrafter")
def then_drafter_is_openai(drafter_context: DrafterSelectionContext) -> None:
    """Verify the OpenAI backend was selected."""
    drafter = _drafter(drafter_context)
    assert isinstance(drafter, OpenAINarrativeDrafter), (
        f"Expected OpenAINarrativeDrafter but got {type(drafter).__name__}"
    )


@then(parsers.parse('the drafter uses model "{model}"'))
def then_drafter_uses_model(
    drafter_context: DrafterSelectionContext, model: str
) -> None:
    """Verify the configured model identifier and release the client."""
    drafter = _drafter(drafter_context)
    assert isinstance(drafter, OpenAINarrativeDrafter)
    assert drafter.model == model, f"Expected model {model}, got {drafter.model}"
    asyncio.run(drafter.aclose())


@then("drafter creation fails with an OpenAI configuration error")
def then_openai_config_error(drafter_context: DrafterSelectionContext) -> None:
    """Verify a missing key is reported as an OpenAI configuration error."""
    error = drafter_context.get("error")
    assert isinstance(error, OpenAIConfigError), (
        f"Expected OpenAIConfigError but got {type(error).__name__}: {error}"
    )
    assert "BULLETIN_OPENAI_API_KEY" in str(error)


@then("drafter creation fails with a drafting configuration error")
def then_drafting_config_error(drafter_context: DrafterSelectionContext) -> None:
    """Verify an unknown backend lists the valid options."""
    error = drafter_context.get("error")
    assert isinstance(error, DraftingConfigError), (
        f"Expected DraftingConfigError but got {type(error).__name__}: {error}"
    )
    message = str(error).lower()
    assert "openai" in message, f"Expected 'openai' in error message, got: {error}"
    assert "template" in message, (
        f"Expected 'template' in error message, got: {error}"
    )
