"""Section markers and fixed labels of the daily report skeleton.

The composer renders these headings and the post-processor and section
splicer look them up again, so both sides import the same constants instead
of re-deriving them with patterns.
"""

from __future__ import annotations

import typing as typ

# Top-level ("# ") section markers, in skeleton order.
ISSUES_SECTION: typ.Final = "Issues"
YESTERDAY_SECTION: typ.Final = "Yesterday"
TODAY_SECTION: typ.Final = "Today"
REMAINING_SECTION: typ.Final = "Remaining work"

# Sections rendered from classified data and never taken from a draft.
AUTHORITATIVE_SECTIONS: typ.Final = (ISSUES_SECTION, TODAY_SECTION, REMAINING_SECTION)

COMPLETED_HEADING: typ.Final = "Completed"
NOT_COMPLETED_HEADING: typ.Final = "Not completed (reason, follow-up)"
MORNING_HEADING: typ.Final = "Morning"
AFTERNOON_HEADING: typ.Final = "Afternoon"
OVERTIME_HEADING: typ.Final = "(Overtime)"

MORNING_TAG: typ.Final = "[morning]"
AFTERNOON_TAG: typ.Final = "[afternoon]"

NONE_PLACEHOLDER: typ.Final = "none"
OTHER_GROUP: typ.Final = "Other"

HEADING_PREFIX: typ.Final = "# "
DIVIDER: typ.Final = "---"
FENCE: typ.Final = "```"


def top_level_heading(line: str) -> str | None:
    """Return the heading text when ``line`` is a ``# `` heading, else ``None``."""
    stripped = line.strip()
    if stripped.startswith(HEADING_PREFIX):
        return stripped[len(HEADING_PREFIX) :].strip()
    return None


def is_fence(line: str) -> bool:
    """Return ``True`` when ``line`` opens or closes a fenced code region."""
    return line.strip().startswith(FENCE)
