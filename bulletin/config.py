"""Top-level configuration for a daily report run.

All environment variables are read here, once, and turned into immutable
values that are injected into the adapters and the pipeline service.
Nothing below this module consults ``os.environ``.

Usage
-----
>>> config = BulletinConfig.from_env(require_publishing=False)
>>> config.linear.page_size
100

"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ

from bulletin.common.env import optional_str
from bulletin.drafting.config import DraftingConfig
from bulletin.linear.client import LinearConfig
from bulletin.notion.sink import NotionConfig
from bulletin.reporting.config import ReportConfig

if typ.TYPE_CHECKING:
    from bulletin.common.env import Environ

LOG_LEVEL_ENV_VAR = "BULLETIN_LOG_LEVEL"


def load_log_level(environ: Environ | None = None) -> str | None:
    """Return the raw ``BULLETIN_LOG_LEVEL`` value, if set."""
    source = os.environ if environ is None else environ
    return optional_str(source, LOG_LEVEL_ENV_VAR)


@dc.dataclass(frozen=True, slots=True)
class BulletinConfig:
    """Validated settings for every collaborator of one run.

    Attributes
    ----------
    linear
        Tracker credentials and query settings.
    notion
        Publishing destination; ``None`` for runs that do not publish.
    drafting
        Selected drafting backend.
    report
        Time zone offset, project name, roster and page title prefix.

    """

    linear: LinearConfig
    notion: NotionConfig | None
    drafting: DraftingConfig
    report: ReportConfig

    @classmethod
    def from_env(
        cls,
        environ: Environ | None = None,
        *,
        require_publishing: bool = True,
        force_template: bool = False,
    ) -> BulletinConfig:
        """Build the run configuration from environment variables.

        Parameters
        ----------
        environ
            Mapping to read; defaults to ``os.environ``.
        require_publishing
            Demand the Notion settings. Dry runs pass ``False`` and get
            ``notion=None``.
        force_template
            Select the template drafter regardless of
            ``BULLETIN_DRAFTING_BACKEND``; the OpenAI key is then optional.

        Raises
        ------
        ConfigurationError
            If a required variable is missing or a value is malformed.

        """
        source = os.environ if environ is None else environ
        return cls(
            linear=LinearConfig.from_env(source),
            notion=NotionConfig.from_env(source) if require_publishing else None,
            drafting=DraftingConfig.from_env(source, force_template=force_template),
            report=ReportConfig.from_env(source),
        )
