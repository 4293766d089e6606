"""Deterministic drafter that returns the skeleton unchanged."""

from __future__ import annotations

import typing as typ

from bulletin.drafting.models import ModelInvocationMetrics

if typ.TYPE_CHECKING:
    from bulletin.drafting.models import DraftRequest


class TemplateDrafter:
    """NarrativeDrafter that performs no generation.

    Used when drafting is disabled (``--no-draft`` or
    ``BULLETIN_DRAFTING_BACKEND=template``) and in tests. The report is then
    exactly the rendered skeleton.
    """

    model = "template"

    def __init__(self) -> None:
        """Initialise metrics storage."""
        self._last_invocation_metrics: ModelInvocationMetrics | None = None

    @property
    def last_invocation_metrics(self) -> ModelInvocationMetrics | None:
        """Return zeroed metrics once a draft has been produced."""
        return self._last_invocation_metrics

    async def draft(self, request: DraftRequest) -> str:
        """Return ``request.skeleton`` verbatim."""
        self._last_invocation_metrics = ModelInvocationMetrics(
            prompt_tokens=0,
            completion_tokens=0,
            total_tokens=0,
            latency_ms=0.0,
        )
        return request.skeleton
