"""Narrative drafting for the daily report.

The ``NarrativeDrafter`` protocol turns a rendered report skeleton into
prose. ``OpenAINarrativeDrafter`` calls an OpenAI-compatible chat endpoint;
``TemplateDrafter`` returns the skeleton unchanged.

Public API
----------
NarrativeDrafter
    Protocol implemented by drafting backends.
DraftRequest
    Input for one drafting call.
ModelInvocationMetrics
    Token and latency figures of the last call.
TemplateDrafter
    Deterministic drafter without network access.
OpenAINarrativeDrafter
    OpenAI-compatible drafter.
DraftingConfig, OpenAIDraftingConfig, DraftingBackend
    Configuration types.
create_drafter
    Factory selecting the backend from configuration.
OpenAIAPIError, OpenAIResponseShapeError, OpenAIConfigError, DraftingConfigError
    Errors raised by drafting.

"""

from __future__ import annotations

from bulletin.drafting.config import (
    DraftingBackend,
    DraftingConfig,
    OpenAIDraftingConfig,
)
from bulletin.drafting.errors import (
    DraftingConfigError,
    OpenAIAPIError,
    OpenAIConfigError,
    OpenAIResponseShapeError,
)
from bulletin.drafting.factory import create_drafter
from bulletin.drafting.models import DraftRequest, ModelInvocationMetrics
from bulletin.drafting.openai_client import OpenAINarrativeDrafter
from bulletin.drafting.protocol import NarrativeDrafter
from bulletin.drafting.template import TemplateDrafter

__all__ = [
    "DraftRequest",
    "DraftingBackend",
    "DraftingConfig",
    "DraftingConfigError",
    "ModelInvocationMetrics",
    "NarrativeDrafter",
    "OpenAIAPIError",
    "OpenAIConfigError",
    "OpenAIDraftingConfig",
    "OpenAINarrativeDrafter",
    "OpenAIResponseShapeError",
    "TemplateDrafter",
    "create_drafter",
]
