"""Artifact-vs-prose classification for a whole message.

A substring/line-prefix predicate, not a parse. It only picks the container
a message is shown in; the block structure always comes from segment().
"""

from __future__ import annotations

from enum import Enum


HEADER_MARKER = "##"
TABLE_PIPE = "|"
TABLE_RULE = "---"
BULLET_PREFIX = "- "


class RenderMode(Enum):
    ARTIFACT = "artifact"
    PROSE = "prose"


def _has_bullet_line(text: str) -> bool:
    return any(line.lstrip().startswith(BULLET_PREFIX) for line in text.split("\n"))


def is_artifact(full_text: str) -> bool:
    """True for messages with a ``##`` header, a pipe table, or a bullet line."""
    if HEADER_MARKER in full_text:
        return True
    if TABLE_PIPE in full_text and TABLE_RULE in full_text:
        return True
    return _has_bullet_line(full_text)


def classify(full_text: str) -> RenderMode:
    return RenderMode.ARTIFACT if is_artifact(full_text) else RenderMode.PROSE
