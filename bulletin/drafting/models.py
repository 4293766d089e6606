"""Request and metrics types exchanged with narrative drafters."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class DraftRequest:
    """Input for one drafting call.

    Attributes
    ----------
    date_label
        ``YYYY-MM-DD`` date of the report.
    project_name
        Project shown in the document heading.
    skeleton
        Fully rendered report built from classified data; the drafter
        rewrites its narrative parts and keeps the headings.
    issue_count
        Number of issues the skeleton was built from.

    """

    date_label: str
    project_name: str
    skeleton: str
    issue_count: int = 0


@dc.dataclass(frozen=True, slots=True)
class ModelInvocationMetrics:
    """Token and latency figures from a single drafting call, when known."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None
    latency_ms: float | None = None
