"""Compose the daily report text from classified issues.

The composer renders a fixed skeleton from the buckets, hands it to a
narrative drafter, then splices its own rendering of the authoritative
sections (issue listing, today's targets, remaining work) back over the
draft. A drafter may reword, drop or invent list items; the sections that
state verifiable facts therefore never come from the draft.

Usage
-----
>>> composer = ReportComposer(TemplateDrafter(), ComposerSettings(project_name="Reef"))
>>> text = await composer.compose(buckets, "2024-07-09", issues)

"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from bulletin.drafting.models import DraftRequest

from .sections import (
    AFTERNOON_HEADING,
    AFTERNOON_TAG,
    AUTHORITATIVE_SECTIONS,
    COMPLETED_HEADING,
    DIVIDER,
    FENCE,
    ISSUES_SECTION,
    MORNING_HEADING,
    MORNING_TAG,
    NONE_PLACEHOLDER,
    NOT_COMPLETED_HEADING,
    OTHER_GROUP,
    OVERTIME_HEADING,
    REMAINING_SECTION,
    TODAY_SECTION,
    YESTERDAY_SECTION,
    is_fence,
    top_level_heading,
)

if typ.TYPE_CHECKING:
    from bulletin.drafting.protocol import NarrativeDrafter
    from bulletin.linear.models import Issue

    from .classifier import ClassificationResult

DESCRIPTION_PREVIEW_LIMIT = 120
TITLE_PREVIEW_LIMIT = 200
LABEL_PREVIEW_LIMIT = 80
ELLIPSIS = "..."

_CODE_LANGUAGE = "text"
_CODE_ESCAPE = "\\"
_SECTION_SEPARATOR = f"\n\n{DIVIDER}\n\n"


@dc.dataclass(frozen=True, slots=True)
class ComposerSettings:
    """Static inputs of the report skeleton.

    Attributes
    ----------
    project_name
        Name shown in the document heading.
    roster
        Assignees who get their own group under "Completed", in order.
        Everyone else is listed under "Other".
    description_limit, title_limit, label_limit
        Preview bounds for descriptions, titles, and status or assignee
        labels.

    """

    project_name: str = "Team"
    roster: tuple[str, ...] = ()
    description_limit: int = DESCRIPTION_PREVIEW_LIMIT
    title_limit: int = TITLE_PREVIEW_LIMIT
    label_limit: int = LABEL_PREVIEW_LIMIT


def preview(text: str | None, limit: int) -> str:
    """Collapse whitespace in ``text`` and cut it to ``limit`` characters.

    Truncated text is followed by ``...``; shorter text is returned as is.

    Examples
    --------
    >>> preview("line one\\nline two", 100)
    'line one line two'
    >>> preview("abcdef", 3)
    'abc...'

    """
    if not text:
        return ""
    collapsed = " ".join(text.split())
    if len(collapsed) > limit:
        return collapsed[:limit] + ELLIPSIS
    return collapsed


# ---------------------------------------------------------------------------
# Skeleton rendering
# ---------------------------------------------------------------------------


def code_safe(line: str) -> str:
    """Return ``line`` escaped so it cannot close a fence or open a section.

    Examples
    --------
    >>> code_safe("```bash snippet cleanup")
    '\\\\```bash snippet cleanup'
    >>> code_safe("plain text")
    'plain text'

    """
    if is_fence(line) or top_level_heading(line) is not None:
        return _CODE_ESCAPE + line
    return line


def _fenced(lines: list[str], body: cabc.Sequence[str]) -> None:
    lines.append(f"{FENCE}{_CODE_LANGUAGE}")
    lines.extend(code_safe(line) for line in body or [NONE_PLACEHOLDER])
    lines.append(FENCE)


def _bullets_or_none(lines: list[str], items: cabc.Sequence[str]) -> None:
    if items:
        lines.extend(f"- {item}" for item in items)
    else:
        lines.append(f"- {NONE_PLACEHOLDER}")


class _Renderer:
    """Render individual skeleton sections from classified issues."""

    def __init__(self, settings: ComposerSettings) -> None:
        self._settings = settings

    def title(self, issue: Issue) -> str:
        return preview(issue.title, self._settings.title_limit)

    def description(self, issue: Issue) -> str:
        return preview(issue.description, self._settings.description_limit)

    def label(self, text: str) -> str:
        return preview(text, self._settings.label_limit)

    def heading(self, date_label: str) -> str:
        return f"# {date_label} Daily report: {self._settings.project_name}"

    def issues(self, issues: cabc.Sequence[Issue]) -> str:
        lines = [f"# {ISSUES_SECTION}"]
        if not issues:
            lines.append(f"- {NONE_PLACEHOLDER}")
        for issue in issues:
            lines.append(
                f"- **{issue.identifier}** {self.title(issue)} "
                f"(status: {self.label(issue.status_name)}, "
                f"assignee: {self.label(issue.assignee_label)})"
            )
            if issue.url:
                lines.append(f"  - {issue.url}")
            description = self.description(issue)
            if description:
                lines.append(f"  - description: {description}")
        return "\n".join(lines)

    def yesterday(self, buckets: ClassificationResult) -> str:
        lines = [f"# {YESTERDAY_SECTION}", "", f"## {COMPLETED_HEADING}"]
        roster = self._settings.roster
        for member in roster:
            lines.append(f"- {member}:")
            _fenced(
                lines,
                [
                    self.title(issue)
                    for issue in buckets.completed_yesterday
                    if issue.assignee == member
                ],
            )
        lines.append(f"- {OTHER_GROUP}:")
        _fenced(
            lines,
            [
                f"{self.label(issue.assignee_label)}: {self.title(issue)}"
                for issue in buckets.completed_yesterday
                if issue.assignee not in roster
            ],
        )
        lines.extend(["", f"## {NOT_COMPLETED_HEADING}"])
        _bullets_or_none(
            lines,
            [
                f"{self.label(issue.assignee_label)}: {self.title(issue)}"
                for issue in buckets.not_done_from_yesterday
            ],
        )
        return "\n".join(lines)

    def _task(self, lines: list[str], issue: Issue) -> None:
        lines.append(f"- {self.label(issue.assignee_label)}:")
        body = [self.title(issue)]
        description = self.description(issue)
        if description:
            body.append(f"details: {description}")
        _fenced(lines, body)

    def today(self, buckets: ClassificationResult) -> str:
        morning: list[Issue] = []
        afternoon: list[Issue] = []
        for issue in buckets.due_today:
            tag = half_day_of(issue.title)
            if tag != AFTERNOON_TAG:
                morning.append(issue)
            if tag != MORNING_TAG:
                afternoon.append(issue)

        lines = [f"# {TODAY_SECTION}"]
        for heading, tasks in ((MORNING_HEADING, morning), (AFTERNOON_HEADING, afternoon)):
            lines.extend(["", f"## {heading}"])
            if not tasks:
                lines.append(f"- {NONE_PLACEHOLDER}")
            for issue in tasks:
                self._task(lines, issue)
        lines.extend(["", f"## {OVERTIME_HEADING}", f"- {NONE_PLACEHOLDER}"])
        return "\n".join(lines)

    def remaining(self, buckets: ClassificationResult) -> str:
        lines = [f"# {REMAINING_SECTION}"]
        _fenced(lines, [f"- {self.title(issue)}" for issue in buckets.remaining])
        return "\n".join(lines)


def half_day_of(title: str) -> str | None:
    """Return the half-day tag found in ``title``, or ``None`` when untagged.

    A title carrying both tags counts as morning work.
    """
    lowered = title.lower()
    if MORNING_TAG in lowered:
        return MORNING_TAG
    if AFTERNOON_TAG in lowered:
        return AFTERNOON_TAG
    return None


def render_authoritative_sections(
    buckets: ClassificationResult,
    issues: cabc.Sequence[Issue],
    settings: ComposerSettings,
) -> dict[str, str]:
    """Render the sections that must match the classified data exactly."""
    renderer = _Renderer(settings)
    return {
        ISSUES_SECTION: renderer.issues(issues),
        TODAY_SECTION: renderer.today(buckets),
        REMAINING_SECTION: renderer.remaining(buckets),
    }


def render_skeleton(
    buckets: ClassificationResult,
    date_label: str,
    issues: cabc.Sequence[Issue],
    settings: ComposerSettings,
) -> str:
    """Render the complete report without any drafted narrative."""
    renderer = _Renderer(settings)
    authoritative = render_authoritative_sections(buckets, issues, settings)
    sections = [
        renderer.heading(date_label),
        authoritative[ISSUES_SECTION],
        renderer.yesterday(buckets),
        authoritative[TODAY_SECTION],
        authoritative[REMAINING_SECTION],
    ]
    return _SECTION_SEPARATOR.join(sections) + "\n"


# ---------------------------------------------------------------------------
# Section splicing
# ---------------------------------------------------------------------------


@dc.dataclass(slots=True)
class _Section:
    """One top-level section of a document.

    ``heading`` is ``None`` for text before the first heading; ``trailer``
    holds the blank and divider lines that close the section.
    """

    heading: str | None
    body: list[str] = dc.field(default_factory=list)
    trailer: list[str] = dc.field(default_factory=list)


def _is_trailer_line(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped == DIVIDER


def split_sections(text: str) -> list[_Section]:
    """Split ``text`` at top-level headings that sit outside fenced code."""
    sections: list[_Section] = [_Section(heading=None)]
    in_code = False
    for line in text.split("\n"):
        if is_fence(line):
            in_code = not in_code
        heading = None if in_code else top_level_heading(line)
        if heading is not None:
            sections.append(_Section(heading=heading))
        sections[-1].body.append(line)

    for section in sections:
        while section.body and _is_trailer_line(section.body[-1]):
            section.trailer.insert(0, section.body.pop())
    return [s for s in sections if s.heading is not None or s.body or s.trailer]


def splice_sections(draft: str, replacements: cabc.Mapping[str, str]) -> str:
    """Replace sections of ``draft`` whose heading text is a key of ``replacements``.

    Replacements whose heading does not occur in the draft are appended in
    mapping order, each preceded by a divider.
    """
    out: list[str] = []
    used: set[str] = set()
    for section in split_sections(draft):
        if section.heading in replacements and section.heading not in used:
            used.add(section.heading)
            out.extend(replacements[section.heading].split("\n"))
        elif section.heading in replacements:
            continue
        else:
            out.extend(section.body)
        out.extend(section.trailer)

    missing = [heading for heading in replacements if heading not in used]
    for heading in missing:
        while out and not out[-1].strip():
            out.pop()
        if out:
            out.extend(["", DIVIDER, ""])
        out.extend(replacements[heading].split("\n"))
    text = "\n".join(out)
    return text if text.endswith("\n") else text + "\n"


class ReportComposer:
    """Build the report text from buckets, optionally through a drafter.

    Parameters
    ----------
    drafter
        Collaborator that rewrites the skeleton into narrative prose.
    settings
        Project name, roster and preview bounds.
    authoritative
        Section markers always taken from the composer's own rendering.

    """

    def __init__(
        self,
        drafter: NarrativeDrafter,
        settings: ComposerSettings | None = None,
        *,
        authoritative: cabc.Sequence[str] = AUTHORITATIVE_SECTIONS,
    ) -> None:
        """Store collaborators and settings."""
        self._drafter = drafter
        self._settings = settings or ComposerSettings()
        self._authoritative = tuple(authoritative)

    @property
    def settings(self) -> ComposerSettings:
        """Settings used to render the skeleton."""
        return self._settings

    async def compose(
        self,
        buckets: ClassificationResult,
        date_label: str,
        issues: cabc.Sequence[Issue],
    ) -> str:
        """Return the report text for one run.

        Parameters
        ----------
        buckets
            Classified issues.
        date_label
            ``YYYY-MM-DD`` date shown in the document heading.
        issues
            All fetched issues, in tracker order, for the issue listing.

        """
        skeleton = render_skeleton(buckets, date_label, issues, self._settings)
        drafted = await self._drafter.draft(
            DraftRequest(
                date_label=date_label,
                project_name=self._settings.project_name,
                skeleton=skeleton,
                issue_count=len(issues),
            )
        )
        rendered = render_authoritative_sections(buckets, issues, self._settings)
        replacements = {marker: rendered[marker] for marker in self._authoritative}
        return splice_sections(drafted, replacements)
