"""Encode document blocks as Notion block objects.

Only the four block kinds produced by :func:`bulletin.reporting.blocks.to_blocks`
are supported. Text is sent as a single plain ``rich_text`` run; the converter
has already enforced the per-block length limit.
"""

from __future__ import annotations

import typing as typ

from bulletin.reporting.blocks import CodeBlock, Divider, Heading, Paragraph

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bulletin.reporting.blocks import DocumentBlock

# Notion's label for unhighlighted code blocks.
CODE_LANGUAGE = "plain text"

_HEADING_TYPES = {1: "heading_1", 2: "heading_2", 3: "heading_3"}


def rich_text(text: str) -> list[dict[str, typ.Any]]:
    """Return a ``rich_text`` array holding ``text``, empty for ``""``."""
    if not text:
        return []
    return [{"type": "text", "text": {"content": text}}]


def _typed(block_type: str, body: dict[str, typ.Any]) -> dict[str, typ.Any]:
    return {"object": "block", "type": block_type, block_type: body}


def to_notion_block(block: DocumentBlock) -> dict[str, typ.Any]:
    """Return the Notion JSON object for one document block.

    Examples
    --------
    >>> to_notion_block(Divider())
    {'object': 'block', 'type': 'divider', 'divider': {}}

    """
    match block:
        case Heading(level=level, text=text):
            return _typed(_HEADING_TYPES[level], {"rich_text": rich_text(text)})
        case Divider():
            return _typed("divider", {})
        case CodeBlock(text=text):
            return _typed(
                "code", {"rich_text": rich_text(text), "language": CODE_LANGUAGE}
            )
        case Paragraph(text=text):
            return _typed("paragraph", {"rich_text": rich_text(text)})
    msg = f"Unsupported block type: {type(block).__name__}"
    raise TypeError(msg)


def to_notion_children(
    blocks: cabc.Iterable[DocumentBlock],
) -> list[dict[str, typ.Any]]:
    """Encode ``blocks`` in order as the ``children`` of a page request."""
    return [to_notion_block(block) for block in blocks]
