"""Daily report construction from classified tracker issues.

Public API
----------
TimeWindow
    Reference instant with the shifted ``today`` and ``yesterday`` dates.
classify, ClassificationResult, Bucket
    Partition of issues into the four report buckets.
ReportComposer, ComposerSettings
    Skeleton rendering and splicing of drafted prose.
strip_identifiers_outside_section
    Removes issue identifiers outside the issue listing.
to_blocks, BlockLimits
    Conversion of report text into typed document blocks.
ReportConfig
    Settings that shape the report.
DailyReportService, DailyReportDependencies, DailyReportResult
    The run pipeline and its inputs and outputs.
ReportingEventLogger, ReportingEventType
    Structured lifecycle logging.

Example:
Run the pipeline without publishing:

>>> from bulletin.drafting import TemplateDrafter
>>> deps = DailyReportDependencies(issue_source=source, drafter=TemplateDrafter())
>>> service = DailyReportService(deps, project_id="proj-1")
>>> result = await service.run(publish=False)

"""

from bulletin.reporting.blocks import (
    BlockLimits,
    CodeBlock,
    Divider,
    DocumentBlock,
    Heading,
    Paragraph,
    to_blocks,
)
from bulletin.reporting.classifier import (
    Bucket,
    ClassificationResult,
    classify,
    classify_issue,
)
from bulletin.reporting.composer import (
    ComposerSettings,
    ReportComposer,
    render_skeleton,
    splice_sections,
)
from bulletin.reporting.config import ReportConfig
from bulletin.reporting.observability import ReportingEventLogger, ReportingEventType
from bulletin.reporting.postprocess import strip_identifiers_outside_section
from bulletin.reporting.service import (
    DailyReportDependencies,
    DailyReportResult,
    DailyReportService,
)
from bulletin.reporting.window import TimeWindow

__all__ = [
    "BlockLimits",
    "Bucket",
    "ClassificationResult",
    "CodeBlock",
    "ComposerSettings",
    "DailyReportDependencies",
    "DailyReportResult",
    "DailyReportService",
    "Divider",
    "DocumentBlock",
    "Heading",
    "Paragraph",
    "ReportComposer",
    "ReportConfig",
    "ReportingEventLogger",
    "ReportingEventType",
    "TimeWindow",
    "classify",
    "classify_issue",
    "render_skeleton",
    "splice_sections",
    "strip_identifiers_outside_section",
    "to_blocks",
]
