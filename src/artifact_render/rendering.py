"""Rich rendering for Documents: one renderable per Block.

Artifact messages are wrapped in a titled panel; prose messages render as a
bare group. Spans become styled rich Text; no markup strings are built from
message content, so message text is never interpreted as rich markup.

// [LAW:dataflow-not-control-flow] Block dispatch via BLOCK_RENDERERS dict.
// [LAW:one-type-per-behavior] Every Block type has exactly one renderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich import box
from rich.console import ConsoleRenderable, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from artifact_render.core.classifier import RenderMode
from artifact_render.core.document import Document, parse_document
from artifact_render.core.model import (
    BlankBlock,
    Block,
    BoldSpan,
    BulletItemBlock,
    CodeSpan,
    HeaderBlock,
    ItalicSpan,
    NumberedItemBlock,
    ParagraphBlock,
    PlainSpan,
    Span,
    TableBlock,
)
from artifact_render.core.pipeline import present
from artifact_render.core.spans import parse_spans
from artifact_render.io.perf_logging import monitor_slow_path
from artifact_render.streaming import StreamUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThemeColors:
    foreground: str = "default"
    accent: str = "blue"
    muted: str = "grey50"
    code: str = "bold magenta"
    border: str = "grey66"


THEMES: dict[str, ThemeColors] = {
    "dark": ThemeColors(),
    "light": ThemeColors(
        accent="dark_blue",
        muted="grey37",
        code="bold dark_magenta",
        border="grey50",
    ),
}
DEFAULT_THEME = "dark"

_theme_name = DEFAULT_THEME

DEFAULT_PANEL_TITLE = "Data Analysis"


def get_theme_colors() -> ThemeColors:
    return THEMES[_theme_name]


def get_theme_name() -> str:
    return _theme_name


def set_theme(name: str) -> str:
    """Switch the active theme by name and return the name now in effect.

    Unknown names, such as a stale settings value, fall back to the
    default theme.
    // [LAW:single-enforcer] Sole entry point for theme changes.
    """
    global _theme_name
    if not isinstance(name, str) or name not in THEMES:
        logger.warning("unknown theme name=%r; using %s", name, DEFAULT_THEME)
        name = DEFAULT_THEME
    _theme_name = name
    return name


# ─── Spans ───────────────────────────────────────────────────────────────────


def _span_style(span: Span, tc: ThemeColors) -> str:
    # [LAW:dataflow-not-control-flow] Span style lookup via dict
    styles = {
        PlainSpan: "",
        BoldSpan: "bold",
        ItalicSpan: "italic",
        CodeSpan: tc.code,
    }
    return styles[type(span)]


def render_spans(spans: tuple[Span, ...]) -> Text:
    tc = get_theme_colors()
    t = Text()
    for span in spans:
        t.append(span.text, style=_span_style(span, tc))
    return t


# ─── Blocks ──────────────────────────────────────────────────────────────────


def _render_header(block: HeaderBlock) -> ConsoleRenderable:
    tc = get_theme_colors()
    styles = {
        1: f"bold underline {tc.foreground}",
        2: f"bold {tc.foreground}",
        3: f"bold {tc.muted}",
    }
    return Text(block.text, style=styles.get(block.level, "bold"))


def _render_paragraph(block: ParagraphBlock) -> ConsoleRenderable:
    return render_spans(block.spans)


def _render_bullet(block: BulletItemBlock) -> ConsoleRenderable:
    tc = get_theme_colors()
    t = Text("  • ", style=tc.accent)
    t.append_text(render_spans(block.spans))
    return t


def _render_numbered(block: NumberedItemBlock) -> ConsoleRenderable:
    tc = get_theme_colors()
    t = Text(f"  {block.index}. ", style=tc.muted)
    t.append_text(render_spans(block.spans))
    return t


def _render_cell(cell: str) -> Text:
    return render_spans(parse_spans(cell))


def _render_table(block: TableBlock) -> ConsoleRenderable:
    tc = get_theme_colors()
    table = Table(box=box.SIMPLE_HEAD, border_style=tc.border, show_edge=False)
    for header in block.headers:
        table.add_column(_render_cell(header), header_style="bold")
    for row in block.rows:
        table.add_row(*(_render_cell(cell) for cell in row))
    return table


def _render_blank(block: BlankBlock) -> ConsoleRenderable:
    return Text("")


BLOCK_RENDERERS = {
    HeaderBlock: _render_header,
    ParagraphBlock: _render_paragraph,
    BulletItemBlock: _render_bullet,
    NumberedItemBlock: _render_numbered,
    TableBlock: _render_table,
    BlankBlock: _render_blank,
}


def render_block(block: Block) -> ConsoleRenderable:
    return BLOCK_RENDERERS[type(block)](block)


def render_document(document: Document) -> Group:
    return Group(*(render_block(entry.block) for entry in document))


# ─── Messages ────────────────────────────────────────────────────────────────


def _artifact_panel(body: ConsoleRenderable, title: str) -> Panel:
    tc = get_theme_colors()
    return Panel(
        body,
        title=Text(title.upper(), style=f"bold {tc.muted}"),
        title_align="left",
        border_style=tc.border,
        box=box.ROUNDED,
    )


def render_message(text: str, *, title: str = DEFAULT_PANEL_TITLE) -> ConsoleRenderable:
    """Render a complete or partial message in its presentation container."""
    with monitor_slow_path(
        "render.message",
        logger=logger,
        context=lambda: {"chars": len(text)},
    ):
        result = present(text)
        if isinstance(result, Document):
            return _artifact_panel(render_document(result), title)
        # prose still gets inline emphasis and list numbering
        return render_document(parse_document(result))


def render_update(update: StreamUpdate, *, title: str = DEFAULT_PANEL_TITLE) -> ConsoleRenderable:
    """Render the Document carried by a streaming update."""
    body = render_document(update.document)
    if update.mode is RenderMode.ARTIFACT:
        return _artifact_panel(body, title)
    return body
