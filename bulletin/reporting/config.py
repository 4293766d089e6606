"""Configuration for composing the daily report.

Usage
-----
Create a configuration with defaults:

>>> config = ReportConfig()
>>> config.tz_offset_hours
9

Or load from an environment mapping:

>>> config = ReportConfig.from_env({"BULLETIN_TZ_OFFSET_HOURS": "0"})
>>> config.tz_offset_hours
0

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from bulletin.common.env import optional_str, parse_csv, parse_int

from .composer import ComposerSettings
from .window import DEFAULT_OFFSET_HOURS

if typ.TYPE_CHECKING:
    from bulletin.common.env import Environ

MIN_OFFSET_HOURS = -12
MAX_OFFSET_HOURS = 14
DEFAULT_PROJECT_NAME = "Team"
DEFAULT_TITLE_PREFIX = "Linear daily report"


@dc.dataclass(frozen=True, slots=True)
class ReportConfig:
    """Settings that shape the report independent of any collaborator.

    Attributes
    ----------
    tz_offset_hours
        Signed UTC offset defining "today" and "yesterday". Default is 9.
    project_name
        Project name shown in the document heading.
    roster
        Assignees given their own group in the "Completed" listing.
    title_prefix
        Text placed before the date in the page title.

    """

    tz_offset_hours: int = DEFAULT_OFFSET_HOURS
    project_name: str = DEFAULT_PROJECT_NAME
    roster: tuple[str, ...] = ()
    title_prefix: str = DEFAULT_TITLE_PREFIX

    @classmethod
    def from_env(cls, environ: Environ) -> ReportConfig:
        """Create configuration from environment variables.

        Reads ``BULLETIN_TZ_OFFSET_HOURS`` (integer, -12 to 14),
        ``BULLETIN_PROJECT_NAME``, ``BULLETIN_ROSTER`` (comma-separated)
        and ``BULLETIN_TITLE_PREFIX``.

        Raises
        ------
        ConfigurationError
            If the offset is not an integer in range.

        """
        return cls(
            tz_offset_hours=parse_int(
                environ,
                "BULLETIN_TZ_OFFSET_HOURS",
                DEFAULT_OFFSET_HOURS,
                minimum=MIN_OFFSET_HOURS,
                maximum=MAX_OFFSET_HOURS,
            ),
            project_name=optional_str(environ, "BULLETIN_PROJECT_NAME")
            or DEFAULT_PROJECT_NAME,
            roster=parse_csv(environ, "BULLETIN_ROSTER"),
            title_prefix=optional_str(environ, "BULLETIN_TITLE_PREFIX")
            or DEFAULT_TITLE_PREFIX,
        )

    @property
    def composer_settings(self) -> ComposerSettings:
        """Settings handed to :class:`~bulletin.reporting.composer.ReportComposer`."""
        return ComposerSettings(project_name=self.project_name, roster=self.roster)

    def page_title(self, date_label: str) -> str:
        """Return the page title for the report dated ``date_label``."""
        return f"{self.title_prefix} {date_label}"
