"""Publishing of the finished report to a Notion database."""

from __future__ import annotations

from .blocks import CODE_LANGUAGE, to_notion_block, to_notion_children
from .errors import NotionAPIError, NotionConfigError
from .sink import NotionConfig, NotionPageSink, PageSink, build_page_payload

__all__ = [
    "CODE_LANGUAGE",
    "NotionAPIError",
    "NotionConfig",
    "NotionConfigError",
    "NotionPageSink",
    "PageSink",
    "build_page_payload",
    "to_notion_block",
    "to_notion_children",
]
