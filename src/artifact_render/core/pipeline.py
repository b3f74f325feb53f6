"""Message-level entry point: choose the presentation path for a text.

Artifact messages come back as a Document; prose comes back as the raw
string for the caller to show as-is.
"""

from __future__ import annotations

from artifact_render.core.classifier import is_artifact
from artifact_render.core.document import Document, parse_document


def present(text: str) -> Document | str:
    """Document for artifact messages, the unchanged text otherwise."""
    if is_artifact(text):
        return parse_document(text)
    return text
