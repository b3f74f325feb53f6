"""Segment message text into typed Blocks, one line at a time.

Single forward pass over ``text.split("\\n")`` with one line of lookahead.
Per-line rules, first match wins:

1. ``#``..``###`` + whitespace: HeaderBlock (text kept verbatim)
2. line belongs to a table run: handed to the TableAccumulator
3. ``-`` + whitespace: BulletItemBlock
4. digits + ``.`` + whitespace: NumberedItemBlock
5. whitespace only: BlankBlock
6. anything else: ParagraphBlock

Table runs are tracked by an explicit IDLE/COLLECTING state machine. A
pipe line followed by a separator line opens a run; each following pipe
line is a data row; the first other line (or end of input) closes the run,
emits one TableBlock, and is then classified normally.

// [LAW:dataflow-not-control-flow] segment() is a pure function: text in, Blocks out.
// [LAW:one-source-of-truth] All line classification lives here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from artifact_render.core.model import (
    BlankBlock,
    Block,
    BulletItemBlock,
    HeaderBlock,
    NumberedItemBlock,
    ParagraphBlock,
    TableBlock,
)
from artifact_render.core.spans import parse_spans


# ─── Regex patterns ──────────────────────────────────────────────────────────

HEADER_RE = re.compile(r"^(#{1,3})\s+")
BULLET_RE = re.compile(r"^-\s+")
# int() refuses numerals past 4300 digits; longer ones stay paragraphs
NUMBERED_RE = re.compile(r"^(\d{1,4300})\.\s+")
SEPARATOR_RE = re.compile(r"^[\s|:\-]+$")


# ─── Line predicates ─────────────────────────────────────────────────────────


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping a trailing carriage return per line."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def is_separator_line(line: str) -> bool:
    """Non-blank, and made only of '|', '-', ':' and whitespace."""
    return bool(SEPARATOR_RE.match(line.strip()))


def is_table_row_candidate(line: str) -> bool:
    stripped = line.strip()
    if "|" not in stripped:
        return False
    if HEADER_RE.match(line):
        return False
    return not is_separator_line(stripped)


def split_cells(line: str) -> list[str]:
    """Split a pipe row into trimmed cells.

    Only the empty cells produced by a leading or trailing pipe are dropped;
    empty cells between pipes are kept.
    """
    stripped = line.strip()
    cells = [cell.strip() for cell in stripped.split("|")]
    if stripped.startswith("|"):
        cells = cells[1:]
    if stripped.endswith("|") and cells:
        cells = cells[:-1]
    return cells


def normalize_row(cells: list[str], width: int) -> tuple[str, ...]:
    """Right-pad with empty strings or truncate to exactly width cells."""
    if len(cells) >= width:
        return tuple(cells[:width])
    return tuple(cells) + ("",) * (width - len(cells))


# ─── Table state machine ─────────────────────────────────────────────────────


class TableState(Enum):
    IDLE = "idle"
    COLLECTING = "collecting"


class TableAccumulator:
    """IDLE/COLLECTING accumulator for one table run at a time.

    Transitions:
      IDLE --open(header)--> COLLECTING
      COLLECTING --add_row(line)--> COLLECTING
      COLLECTING --close()--> IDLE, returns the TableBlock
    """

    def __init__(self) -> None:
        self.state = TableState.IDLE
        self._headers: tuple[str, ...] = ()
        self._rows: list[tuple[str, ...]] = []
        self.start_line = -1

    @property
    def collecting(self) -> bool:
        return self.state is TableState.COLLECTING

    def open(self, header_line: str, line_no: int) -> None:
        self.state = TableState.COLLECTING
        self._headers = tuple(split_cells(header_line))
        self._rows = []
        self.start_line = line_no

    def add_row(self, line: str) -> None:
        self._rows.append(normalize_row(split_cells(line), len(self._headers)))

    def close(self) -> TableBlock:
        block = TableBlock(headers=self._headers, rows=tuple(self._rows))
        self.state = TableState.IDLE
        self._headers = ()
        self._rows = []
        self.start_line = -1
        return block


# ─── Segmentation ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Segment:
    """A block plus the last source line its classification consulted.

    ``depends_through`` covers the block's own lines, the lookahead line of
    a pipe line, and the line (or end of input) that closed a table.
    """

    block: Block
    depends_through: int


def _classify_line(line: str) -> Block:
    """Classify a line that is not part of a table run."""
    m = HEADER_RE.match(line)
    if m:
        return HeaderBlock(level=len(m.group(1)), text=line[m.end():])
    m = BULLET_RE.match(line)
    if m:
        return BulletItemBlock(spans=parse_spans(line[m.end():]))
    m = NUMBERED_RE.match(line)
    if m:
        return NumberedItemBlock(index=int(m.group(1)), spans=parse_spans(line[m.end():]))
    if not line.strip():
        return BlankBlock()
    return ParagraphBlock(spans=parse_spans(line))


def scan(text: str) -> list[Segment]:
    """Run the segmentation pass, keeping per-block line dependencies."""
    if not text:
        return []
    lines = split_lines(text)
    last = len(lines) - 1
    table = TableAccumulator()
    out: list[Segment] = []

    i = 0
    while i <= last:
        line = lines[i]

        if table.collecting:
            if is_table_row_candidate(line):
                table.add_row(line)
                i += 1
                continue
            # this line closes the run, then is reclassified below
            out.append(Segment(table.close(), depends_through=i))

        if is_table_row_candidate(line):
            if i < last and is_separator_line(lines[i + 1]):
                table.open(line, i)
                i += 2
                continue
            out.append(Segment(_classify_line(line), depends_through=min(i + 1, last)))
            i += 1
            continue

        out.append(Segment(_classify_line(line), depends_through=i))
        i += 1

    if table.collecting:
        out.append(Segment(table.close(), depends_through=last))
    return out


def segment(text: str) -> tuple[Block, ...]:
    """Segment text into Blocks in source order. Never raises."""
    return tuple(seg.block for seg in scan(text))
