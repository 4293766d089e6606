"""NarrativeDrafter protocol for text-generation backends."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from bulletin.drafting.models import DraftRequest, ModelInvocationMetrics


@typ.runtime_checkable
class NarrativeDrafter(typ.Protocol):
    """Turn a rendered report skeleton into narrative prose.

    Output is untrusted for anything that must be exact: the composer
    replaces the authoritative sections after drafting, so implementations
    only need to keep the top-level headings intact.

    Examples
    --------
    >>> from bulletin.drafting import NarrativeDrafter, TemplateDrafter
    >>> isinstance(TemplateDrafter(), NarrativeDrafter)
    True

    """

    @property
    def last_invocation_metrics(self) -> ModelInvocationMetrics | None:
        """Metrics of the most recent call, if any."""
        ...

    async def draft(self, request: DraftRequest) -> str:
        """Return the drafted report text for ``request``."""
        ...
