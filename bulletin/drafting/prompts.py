"""Prompt templates for the OpenAI drafter."""

from __future__ import annotations

import typing as typ

from bulletin.reporting.sections import NONE_PLACEHOLDER

if typ.TYPE_CHECKING:
    from bulletin.drafting.models import DraftRequest

SYSTEM_PROMPT = """\
You are an assistant that writes a software team's daily status report in \
Markdown. You write concise, friendly, factual prose and never invent work.
"""

_INSTRUCTIONS = f"""\
Below is the daily report, already filled in from the team's issue tracker.

Rules:
- Use ONLY the items that appear below. Do not add, merge or reorder tasks.
- Keep every line that starts with "# " exactly as written, in the same order.
- Keep "---" divider lines and fenced code blocks where they are.
- Where a group has no items, write "{NONE_PLACEHOLDER}".
- Do not put issue identifiers (such as ABC-123) outside the "Issues" section.
- Reply with the finished Markdown document only, without surrounding code fences.
"""


def build_user_prompt(request: DraftRequest) -> str:
    """Build the user message for ``request``.

    Parameters
    ----------
    request
        Drafting input carrying the rendered skeleton.

    Returns
    -------
    str
        Instructions followed by the skeleton.

    """
    sections = [
        _INSTRUCTIONS,
        f"Project: {request.project_name}",
        f"Date: {request.date_label}",
        f"Issues considered: {request.issue_count}",
        "",
        request.skeleton,
    ]
    return "\n".join(sections)
