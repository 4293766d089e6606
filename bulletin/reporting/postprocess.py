"""Section-scoped rewrites applied to the composed report.

Issue identifiers may only appear in the canonical issue listing; every
narrative section must read as plain language. The scan below is a
two-state machine over lines: top-level headings move it ``INSIDE`` the
marked section or back ``OUTSIDE``, and only ``OUTSIDE`` lines are
rewritten. A rewrite never turns a line into a heading or a fence, so the
state sequence of a rewritten document matches the original and the pass is
idempotent.
"""

from __future__ import annotations

import enum
import re

from .sections import ISSUES_SECTION, is_fence, top_level_heading

# Leading indentation and bullets, then one or more identifier tokens such
# as ``DDK-12`` or ``**DDK-12**`` with their separators.
_LEADING_IDENTIFIERS = re.compile(
    r"^(?P<lead>\s*(?:[-*+]\s+)*)"
    r"(?:(?:\*\*)?[A-Za-z][A-Za-z0-9]{0,9}-\d+(?![\w-])(?:\*\*)?[ \t:]*)+"
)


class SectionState(enum.Enum):
    """Position of the scan relative to the designated section."""

    OUTSIDE = "outside"
    INSIDE = "inside"


def enters_section(line: str, marker: str) -> bool:
    """Return ``True`` for a top-level heading whose text equals ``marker``."""
    return top_level_heading(line) == marker


def leaves_section(line: str, marker: str) -> bool:
    """Return ``True`` for any other top-level heading."""
    heading = top_level_heading(line)
    return heading is not None and heading != marker


def next_state(state: SectionState, line: str, marker: str) -> SectionState:
    """Return the scan state after reading ``line``."""
    if enters_section(line, marker):
        return SectionState.INSIDE
    if leaves_section(line, marker):
        return SectionState.OUTSIDE
    return state


def strip_leading_identifiers(line: str) -> str:
    """Remove identifier tokens that open ``line``, keeping indent and bullets.

    Removal repeats until the line stops changing, so identifiers uncovered
    behind a bullet are removed too.

    Examples
    --------
    >>> strip_leading_identifiers("- DDK-12 Fix login")
    '- Fix login'
    >>> strip_leading_identifiers("- **DDK-3** DDK-4: Ship it")
    '- Ship it'
    >>> strip_leading_identifiers("DDK-1 - DDK-2 fix login")
    '- fix login'
    >>> strip_leading_identifiers("- Fix DDK-12 later")
    '- Fix DDK-12 later'

    """
    while True:
        stripped = _LEADING_IDENTIFIERS.sub(r"\g<lead>", line, count=1)
        if stripped == line:
            return line
        line = stripped


def _rewrite(line: str) -> str:
    stripped = strip_leading_identifiers(line)
    if top_level_heading(stripped) is not None or is_fence(stripped):
        return line
    return stripped


def strip_identifiers_outside_section(text: str, section_marker: str = ISSUES_SECTION) -> str:
    """Strip leading issue identifiers from every line outside ``section_marker``.

    Parameters
    ----------
    text
        Composed report text.
    section_marker
        Heading text of the one section where identifiers are kept.

    Returns
    -------
    str
        Rewritten text. Applying the function twice gives the same result as
        applying it once. A line whose rewrite would read as a heading or a
        fence is left as it was.

    """
    state = SectionState.OUTSIDE
    out: list[str] = []
    for line in text.split("\n"):
        state = next_state(state, line, section_marker)
        if state is SectionState.OUTSIDE and top_level_heading(line) is None:
            out.append(_rewrite(line))
        else:
            out.append(line)
    return "\n".join(out)
