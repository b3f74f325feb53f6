"""Streaming-turn owner for one assistant message.

StreamingMessage holds the text accumulated so far and reruns the whole
pipeline on every delta. The core keeps no memory between calls; this
class only remembers the previous Document so callers know the first
block index they need to redraw.

// [LAW:one-source-of-truth] The accumulated text lives here; Documents are derived.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from artifact_render.core.classifier import RenderMode, classify
from artifact_render.core.document import EMPTY_DOCUMENT, Document, parse_document
from artifact_render.core.stability import first_divergence, settled_block_count
from artifact_render.io.perf_logging import monitor_slow_path

logger = logging.getLogger(__name__)


class StreamClosedError(RuntimeError):
    """Raised when text arrives after the streaming turn was finished."""


@dataclass(frozen=True)
class StreamUpdate:
    document: Document
    mode: RenderMode
    settled_count: int  # leading blocks that can no longer change
    first_changed: int  # first block index that differs from the previous update
    revision: int


class StreamingMessage:
    """Accumulates one streaming turn and re-derives its Document."""

    def __init__(self) -> None:
        self._text = ""
        self._document = EMPTY_DOCUMENT
        self._revision = 0
        self._finished = False
        self._last_update: StreamUpdate | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def last_update(self) -> StreamUpdate | None:
        return self._last_update

    def append(self, delta: str) -> StreamUpdate:
        """Add a token delta and reparse."""
        return self.update(self._text + delta)

    def update(self, full_text: str) -> StreamUpdate:
        """Reparse from the full text accumulated so far.

        Text that does not extend the current text starts a new turn.
        """
        if self._finished:
            raise StreamClosedError("streaming turn already finished")
        if not full_text.startswith(self._text):
            logger.warning(
                "non-append update; restarting turn prev_len=%d new_len=%d",
                len(self._text),
                len(full_text),
            )
            self._document = EMPTY_DOCUMENT

        with monitor_slow_path(
            "stream.reparse",
            logger=logger,
            context=lambda: {"chars": len(full_text), "revision": self._revision},
        ):
            document = parse_document(full_text)
            settled = settled_block_count(full_text)
            mode = classify(full_text)

        first_changed = first_divergence(self._document, document)
        self._text = full_text
        self._document = document
        self._revision += 1
        logger.debug(
            "reparse revision=%d blocks=%d settled=%d first_changed=%d mode=%s",
            self._revision,
            len(document),
            settled,
            first_changed,
            mode.value,
        )
        self._last_update = StreamUpdate(
            document=document,
            mode=mode,
            settled_count=settled,
            first_changed=first_changed,
            revision=self._revision,
        )
        return self._last_update

    def finish(self) -> StreamUpdate:
        """Close the turn; every block is now final."""
        update = self._last_update or self.update(self._text)
        self._finished = True
        self._last_update = StreamUpdate(
            document=update.document,
            mode=update.mode,
            settled_count=len(update.document),
            first_changed=len(update.document),
            revision=update.revision,
        )
        return self._last_update


def iter_chunks(text: str, chunk_size: int) -> Iterator[str]:
    """Split text into token-sized deltas for replaying a stream."""
    size = max(1, int(chunk_size))
    for start in range(0, len(text), size):
        yield text[start : start + size]
