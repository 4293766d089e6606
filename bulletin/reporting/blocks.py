"""Convert line-oriented report text into typed document blocks.

The converter knows nothing about the publishing platform beyond the two
limits in :class:`BlockLimits`. The scan is a two-state machine: ``OUTSIDE``
maps each line to a heading, divider or paragraph, while ``IN_CODE`` folds
lines into an explicit code accumulator that becomes one :class:`CodeBlock`
when the fence closes (or the text ends).

Usage
-----
>>> to_blocks("# A\\n---\\npara")
[Heading(level=1, text='A'), Divider(), Paragraph(text='para')]

"""

from __future__ import annotations

import dataclasses as dc
import enum

import msgspec

from .sections import DIVIDER, is_fence

# Platform limits of a Notion page created in one request.
MAX_BLOCKS = 100
MAX_TEXT_LENGTH = 2000

_HEADING_PREFIXES: tuple[tuple[str, int], ...] = (("# ", 1), ("## ", 2), ("### ", 3))


class Heading(msgspec.Struct, frozen=True, tag="heading"):
    """Heading of level 1 to 3."""

    level: int
    text: str


class Divider(msgspec.Struct, frozen=True, tag="divider"):
    """Horizontal rule without a text payload."""


class CodeBlock(msgspec.Struct, frozen=True, tag="code"):
    """Fenced region; lines joined with newlines."""

    text: str


class Paragraph(msgspec.Struct, frozen=True, tag="paragraph"):
    """Any other single line of text."""

    text: str


DocumentBlock = Heading | Divider | CodeBlock | Paragraph


@dc.dataclass(frozen=True, slots=True)
class BlockLimits:
    """Hard limits imposed by the publishing platform.

    Attributes
    ----------
    max_blocks
        Blocks beyond this count are dropped without error.
    max_text_length
        Every text payload is cut to this many characters.

    """

    max_blocks: int = MAX_BLOCKS
    max_text_length: int = MAX_TEXT_LENGTH


class ScanState(enum.Enum):
    """Whether the scan is inside a fenced code region."""

    OUTSIDE = "outside"
    IN_CODE = "in_code"


@dc.dataclass(frozen=True, slots=True)
class _CodeAccumulator:
    """Lines collected for the currently open code region."""

    lines: tuple[str, ...] = ()

    def append(self, line: str) -> _CodeAccumulator:
        return _CodeAccumulator((*self.lines, line))

    def to_block(self, limits: BlockLimits) -> CodeBlock:
        return CodeBlock(text=_clip("\n".join(self.lines), limits))


def _clip(text: str, limits: BlockLimits) -> str:
    return text[: limits.max_text_length]


def _line_to_block(line: str, limits: BlockLimits) -> DocumentBlock:
    """Map a single line outside a code region to its block."""
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=_clip(line[len(prefix) :], limits))
    if line.strip() == DIVIDER:
        return Divider()
    return Paragraph(text=_clip(line, limits))


def to_blocks(text: str, limits: BlockLimits | None = None) -> list[DocumentBlock]:
    """Parse ``text`` into blocks in document order.

    Parameters
    ----------
    text
        Report text, one block per line outside fenced regions.
    limits
        Block count and text length limits; defaults to the Notion limits.

    Returns
    -------
    list[DocumentBlock]
        At most ``limits.max_blocks`` blocks.

    """
    effective = limits or BlockLimits()
    blocks: list[DocumentBlock] = []
    state = ScanState.OUTSIDE
    code = _CodeAccumulator()

    for raw in text.split("\n"):
        line = raw.removesuffix("\r")
        if is_fence(line):
            if state is ScanState.OUTSIDE:
                state, code = ScanState.IN_CODE, _CodeAccumulator()
            else:
                blocks.append(code.to_block(effective))
                state = ScanState.OUTSIDE
            continue

        if state is ScanState.IN_CODE:
            code = code.append(line)
        else:
            blocks.append(_line_to_block(line, effective))

    if state is ScanState.IN_CODE:
        blocks.append(code.to_block(effective))
    return blocks[: effective.max_blocks]
