"""Which blocks of a parse can still change as the text grows.

Appending to a message can only affect its last line. A block is settled
when every line its classification consulted lies before that last line:
its own lines, the lookahead line of a pipe line, and the line that closed
a table run. Settled blocks are identical in every later parse of the same
streaming turn, so a consumer can render them once.

// [LAW:one-source-of-truth] Dependency extents come from segmentation.scan().
"""

from __future__ import annotations

from artifact_render.core.document import Document
from artifact_render.core.segmentation import scan, split_lines


def settled_block_count(text: str) -> int:
    """Number of leading blocks no append to ``text`` can change."""
    if not text:
        return 0
    last_line = len(split_lines(text)) - 1
    count = 0
    for seg in scan(text):
        if seg.depends_through >= last_line:
            break
        count += 1
    return count


def first_divergence(before: Document, after: Document) -> int:
    """Index of the first block that differs between two documents.

    When one document is a prefix of the other, returns the shorter length;
    identical documents return their common length.
    """
    limit = min(len(before), len(after))
    for i in range(limit):
        if before[i].block != after[i].block:
            return i
    return limit
