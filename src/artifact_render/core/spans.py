"""Inline span parsing: one line of text to Plain/Bold/Italic/Code spans.

Delimiters, in priority order: `code`, **bold**, *italic*. Spans never nest:
once a span opens, only its own closer is searched for. An opener with no
closer before end of line turns the opener and the rest of the line into
plain text, so nothing visible is ever dropped.

// [LAW:dataflow-not-control-flow] parse_spans() is a pure function: line in, spans out.
"""

from __future__ import annotations

from artifact_render.core.model import (
    BoldSpan,
    CodeSpan,
    ItalicSpan,
    PlainSpan,
    Span,
)


_DELIMITER_CHARS = "`*"


def _find_italic_close(line: str, start: int) -> int:
    """Return index of the next lone '*' at or after start, or -1.

    A '*' adjacent to another '*' belongs to a bold delimiter and is skipped.
    """
    pos = line.find("*", start)
    while pos != -1:
        run_end = pos
        while run_end < len(line) and line[run_end] == "*":
            run_end += 1
        if run_end - pos == 1:
            return pos
        pos = line.find("*", run_end)
    return -1


def _next_delimiter(line: str, start: int) -> int:
    """Index of the next delimiter character at or after start, or len(line)."""
    for pos in range(start, len(line)):
        if line[pos] in _DELIMITER_CHARS:
            return pos
    return len(line)


def parse_spans(line: str) -> tuple[Span, ...]:
    """Split a line into inline spans.

    Concatenating the returned span texts reproduces ``line`` minus the
    delimiters of recognized spans. Adjacent plain runs are merged.
    """
    spans: list[Span] = []
    plain: list[str] = []

    def flush_plain() -> None:
        if plain:
            spans.append(PlainSpan("".join(plain)))
            plain.clear()

    pos = 0
    length = len(line)
    while pos < length:
        nxt = _next_delimiter(line, pos)
        if nxt > pos:
            plain.append(line[pos:nxt])
            pos = nxt
            continue

        if line[pos] == "`":
            close = line.find("`", pos + 1)
            if close == -1:
                break
            if close == pos + 1:
                # empty pair stays literal
                plain.append("``")
                pos = close + 1
                continue
            flush_plain()
            spans.append(CodeSpan(line[pos + 1 : close]))
            pos = close + 1
            continue

        if line.startswith("**", pos):
            close = line.find("**", pos + 2)
            if close == -1:
                break
            if close == pos + 2:
                plain.append("****")
                pos = close + 2
                continue
            flush_plain()
            spans.append(BoldSpan(line[pos + 2 : close]))
            pos = close + 2
            continue

        close = _find_italic_close(line, pos + 1)
        if close == -1:
            break
        flush_plain()
        spans.append(ItalicSpan(line[pos + 1 : close]))
        pos = close + 1

    if pos < length:
        # unmatched opener: delimiter and remainder degrade to plain
        plain.append(line[pos:])
    flush_plain()
    return tuple(spans)
