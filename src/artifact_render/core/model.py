"""Block and Span value types for rendered assistant messages.

Closed variants: every consumer dispatches over the full set of Block and
Span classes below. All types are frozen dataclasses holding only values
derived from the source text (no offsets back into it), so two parses of
the same text compare equal.

// [LAW:one-source-of-truth] The Block/Span vocabulary is defined here only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


# ─── Spans ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PlainSpan:
    text: str


@dataclass(frozen=True)
class BoldSpan:
    text: str


@dataclass(frozen=True)
class ItalicSpan:
    text: str


@dataclass(frozen=True)
class CodeSpan:
    text: str


Span = Union[PlainSpan, BoldSpan, ItalicSpan, CodeSpan]


# ─── Blocks ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HeaderBlock:
    level: int  # 1..3
    text: str


@dataclass(frozen=True)
class ParagraphBlock:
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class BulletItemBlock:
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class NumberedItemBlock:
    index: int  # source numeral, never renumbered
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class TableBlock:
    """Pipe table. Every row has exactly len(headers) cells."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class BlankBlock:
    pass


Block = Union[
    HeaderBlock,
    ParagraphBlock,
    BulletItemBlock,
    NumberedItemBlock,
    TableBlock,
    BlankBlock,
]

SPAN_TYPES: tuple[type, ...] = (PlainSpan, BoldSpan, ItalicSpan, CodeSpan)
BLOCK_TYPES: tuple[type, ...] = (
    HeaderBlock,
    ParagraphBlock,
    BulletItemBlock,
    NumberedItemBlock,
    TableBlock,
    BlankBlock,
)


def visible_text(spans: tuple[Span, ...]) -> str:
    """Concatenate span texts: the visible characters of a line."""
    return "".join(span.text for span in spans)


# ─── Serialization ───────────────────────────────────────────────────────────

_SPAN_TAGS: dict[type, str] = {
    PlainSpan: "plain",
    BoldSpan: "bold",
    ItalicSpan: "italic",
    CodeSpan: "code",
}


def span_to_dict(span: Span) -> dict:
    return {"type": _SPAN_TAGS[type(span)], "text": span.text}


def _spans_to_list(spans: tuple[Span, ...]) -> list[dict]:
    return [span_to_dict(s) for s in spans]


# [LAW:dataflow-not-control-flow] Block serialization dispatch via dict.
_BLOCK_SERIALIZERS = {
    HeaderBlock: lambda b: {"type": "header", "level": b.level, "text": b.text},
    ParagraphBlock: lambda b: {"type": "paragraph", "spans": _spans_to_list(b.spans)},
    BulletItemBlock: lambda b: {"type": "bullet", "spans": _spans_to_list(b.spans)},
    NumberedItemBlock: lambda b: {
        "type": "numbered",
        "index": b.index,
        "spans": _spans_to_list(b.spans),
    },
    TableBlock: lambda b: {
        "type": "table",
        "headers": list(b.headers),
        "rows": [list(row) for row in b.rows],
    },
    BlankBlock: lambda b: {"type": "blank"},
}


def block_to_dict(block: Block) -> dict:
    """Return a JSON-compatible dict with a "type" tag for one block."""
    return _BLOCK_SERIALIZERS[type(block)](block)
