"""Textual app that replays a message as a token stream.

Each timer tick appends one chunk to a StreamingMessage and redraws the
MessageView from the resulting update, the same way a chat transcript
redraws while a completion streams in.
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Static

import artifact_render.settings
from artifact_render.rendering import (
    DEFAULT_PANEL_TITLE,
    THEMES,
    get_theme_name,
    render_update,
    set_theme,
)
from artifact_render.streaming import StreamingMessage, StreamUpdate, iter_chunks

logger = logging.getLogger(__name__)


class MessageView(Static):
    """One assistant message, redrawn from StreamUpdates."""

    DEFAULT_CSS = """
    MessageView {
        height: auto;
        padding: 0 1;
    }
    """

    def __init__(self, *, title: str = DEFAULT_PANEL_TITLE, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._panel_title = title
        self.last_update: StreamUpdate | None = None

    def show_update(self, update: StreamUpdate) -> None:
        self.last_update = update
        self.update(render_update(update, title=self._panel_title))

    def redraw(self) -> None:
        if self.last_update is not None:
            self.show_update(self.last_update)


class ReplayApp(App):
    """Stream ``text`` into a MessageView, ``chunk_size`` chars per tick."""

    BINDINGS = [
        Binding("space", "toggle_pause", "Pause/Resume"),
        Binding("r", "restart", "Restart"),
        Binding("t", "cycle_theme", "Theme"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        text: str,
        *,
        chunk_size: int = 4,
        interval: float = 0.015,
        title: str = DEFAULT_PANEL_TITLE,
    ) -> None:
        super().__init__()
        self._source_text = text
        self._chunk_size = chunk_size
        self._tick_interval = interval
        self._panel_title = title
        self._turn = StreamingMessage()
        self._pending_chunks = iter_chunks(text, chunk_size)
        self.replay_paused = False

    @property
    def turn(self) -> StreamingMessage:
        return self._turn

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield MessageView(title=self._panel_title, id="message")
        yield Footer()

    def on_mount(self) -> None:
        self.set_interval(self._tick_interval, self._tick)

    def _view(self) -> MessageView:
        return self.query_one("#message", MessageView)

    def _tick(self) -> None:
        if self.replay_paused or self._turn.finished:
            return
        chunk = next(self._pending_chunks, None)
        if chunk is None:
            update = self._turn.finish()
            logger.info("replay finished blocks=%d", len(update.document))
        else:
            update = self._turn.append(chunk)
        self._view().show_update(update)

    def action_toggle_pause(self) -> None:
        self.replay_paused = not self.replay_paused

    def action_restart(self) -> None:
        self._turn = StreamingMessage()
        self._pending_chunks = iter_chunks(self._source_text, self._chunk_size)
        self.replay_paused = False

    def action_cycle_theme(self) -> None:
        """Switch to the next color theme and remember it in settings."""
        names = sorted(THEMES)
        current = names.index(get_theme_name())
        name = set_theme(names[(current + 1) % len(names)])
        artifact_render.settings.set_setting("theme", name)
        self._view().redraw()
        self.notify(f"Theme: {name}")
