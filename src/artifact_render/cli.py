"""CLI entry point for artifact-render."""

import argparse
import json
import logging
import sys
import time

from rich.console import Console
from rich.live import Live

import artifact_render.io.logging_setup
import artifact_render.settings
from artifact_render.core.classifier import classify
from artifact_render.core.document import document_to_dict, parse_document
from artifact_render.core.stability import settled_block_count
from artifact_render.rendering import THEMES, render_message, render_update, set_theme
from artifact_render.streaming import StreamingMessage, iter_chunks
from artifact_render.tui.app import ReplayApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render assistant chat output as structured blocks"
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Message text file (default: '-' for stdin)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--json", action="store_true", help="Print the parsed document as JSON and exit"
    )
    mode.add_argument(
        "--stream", action="store_true", help="Replay the message as a token stream"
    )
    mode.add_argument(
        "--tui", action="store_true", help="Replay the message in the Textual viewer"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=artifact_render.settings.get_number_setting("chunk_size", int),
        help="Characters per streamed delta (default from settings: %(default)s)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=artifact_render.settings.get_number_setting("delay_ms", float),
        help="Milliseconds between streamed deltas (default from settings: %(default)s)",
    )
    parser.add_argument(
        "--theme",
        choices=sorted(THEMES),
        default=None,
        help="Color theme (default from settings)",
    )
    parser.add_argument("--width", type=int, default=None, help="Console width override")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store --chunk-size, --delay and --theme in the settings file",
    )
    return parser


def read_message(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def _dump_json(text: str) -> None:
    payload = {
        "mode": classify(text).value,
        "settled": settled_block_count(text),
        **document_to_dict(parse_document(text)),
    }
    print(json.dumps(payload, indent=2))


def _replay(text: str, console: Console, *, chunk_size: int, delay_ms: float, title: str) -> None:
    message = StreamingMessage()
    with Live(console=console, auto_refresh=False) as live:
        for chunk in iter_chunks(text, chunk_size):
            update = message.append(chunk)
            live.update(render_update(update, title=title), refresh=True)
            time.sleep(max(delay_ms, 0.0) / 1000.0)
        update = message.finish()
        live.update(render_update(update, title=title), refresh=True)


def _save_defaults(args: argparse.Namespace, theme: str) -> None:
    data = artifact_render.settings.load_settings()
    data.update(chunk_size=args.chunk_size, delay_ms=args.delay, theme=theme)
    artifact_render.settings.save_settings(data)
    logger.info("saved defaults path=%s", artifact_render.settings.get_config_path())


def main(argv=None) -> int:
    log_runtime = artifact_render.io.logging_setup.configure()
    logger.debug(
        "logging configured level=%s file=%s",
        log_runtime.level_name,
        log_runtime.file_path,
    )

    args = build_parser().parse_args(argv)
    theme = set_theme(args.theme or artifact_render.settings.get_setting("theme"))
    if args.save_defaults:
        _save_defaults(args, theme)

    try:
        text = read_message(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.info("failed to read message path=%s error=%s", args.path, exc)
        print(f"artifact-render: cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    console = Console(width=args.width)
    title = str(artifact_render.settings.get_setting("panel_title"))

    if args.json:
        _dump_json(text)
    elif args.stream:
        _replay(text, console, chunk_size=args.chunk_size, delay_ms=args.delay, title=title)
    elif args.tui:
        ReplayApp(
            text,
            chunk_size=args.chunk_size,
            interval=max(args.delay, 1.0) / 1000.0,
            title=title,
        ).run()
    else:
        console.print(render_message(text, title=title))
    return 0


if __name__ == "__main__":
    sys.exit(main())
