"""Document assembly: ordered, keyed Blocks for one parse.

A Document is rebuilt from scratch on every parse. Keys are positions, so
a consumer diffing two Documents compares content at equal keys; what keeps
the display stable across reparses is that the content at those keys does
not change (see core.stability).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from artifact_render.core.model import Block, block_to_dict
from artifact_render.core.segmentation import segment


@dataclass(frozen=True)
class DocumentEntry:
    key: int
    block: Block


@dataclass(frozen=True)
class Document:
    entries: tuple[DocumentEntry, ...] = ()

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(entry.block for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DocumentEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> DocumentEntry:
        return self.entries[index]


EMPTY_DOCUMENT = Document()


def assemble(blocks) -> Document:
    """Key each block by its 0-based position in final block order."""
    return Document(tuple(DocumentEntry(key=i, block=b) for i, b in enumerate(blocks)))


def parse_document(text: str) -> Document:
    return assemble(segment(text))


def document_to_dict(document: Document) -> dict:
    return {
        "blocks": [
            {"key": entry.key, **block_to_dict(entry.block)} for entry in document.entries
        ]
    }
