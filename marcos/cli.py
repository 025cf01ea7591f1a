"""Command-line front door for marcos.

Parses CLI options, configures logging, resolves the start directory, and
runs one interactive session over the terminal.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import config
from .errors import DirectoryLoadFailed, InvalidStartPath
from .fs import DirectoryReader
from .highlight import DEFAULT_STYLE
from .input import read_key
from .logger import LOG_LEVELS, init_logging
from .render import draw_payload
from .runtime import Session, TerminalController
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def resolve_start_path(raw: str | None, cwd: Path | None = None) -> Path:
    """Turn the user-supplied start path into an absolute directory.

    ``.``/``./`` mean the working directory and ``..``/``../`` its parent;
    anything else is expanded and resolved against ``cwd``. Raises
    ``InvalidStartPath`` unless the result is a readable, searchable
    directory.
    """
    if cwd is None:
        cwd = Path.cwd()
    if raw is None or raw in {".", "./"}:
        path = cwd
    elif raw in {"..", "../"}:
        path = cwd.parent
    else:
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = cwd / path
    try:
        path = path.resolve()
    except (OSError, RuntimeError) as exc:
        raise InvalidStartPath(raw or str(cwd)) from exc
    if not path.is_dir() or not os.access(path, os.R_OK | os.X_OK):
        raise InvalidStartPath(raw or str(cwd), path)
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marcos",
        description="Browse the filesystem in Miller-column panes with tabs.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument("--log-file", default=None, help="Write log records to this file.")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=tuple(LOG_LEVELS),
        type=str.lower,
        help="Minimum level written to --log-file.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--style", default=None, help="Pygments style for file previews; remembered for later runs.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("-a", "--all", action="store_true", help="Show hidden files.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run a session, and restore the terminal on exit."""
    args = build_parser().parse_args(argv)
    try:
        init_logging(args.log_file, args.log_level)
    except OSError as exc:
        raise SystemExit(f"cannot open log file {args.log_file}: {exc.strerror or exc}") from None

    try:
        start_path = resolve_start_path(args.path)
    except InvalidStartPath as exc:
        logger.error("%s", exc)
        raise SystemExit(f"{exc}. Please check PATH.") from None
    logger.info("initializing with path %s", start_path)

    config.ensure_config_dir()
    if args.theme is not None:
        config.save_theme_name(args.theme)
    if args.style is not None:
        config.save_syntax_style(args.style)
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    style = args.style or config.load_syntax_style() or DEFAULT_STYLE
    reader = DirectoryReader(show_hidden=args.all or config.load_show_hidden())

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SystemExit("marcos needs an interactive terminal.")

    try:
        session = Session.create(
            start_path,
            reader,
            key_source=lambda: read_key(stdin_fd),
            draw=lambda payload: draw_payload(payload, theme),
            terminal=TerminalController(stdin_fd, stdout_fd),
            syntax_style=style,
            no_color=args.no_color,
            on_toggle_hidden=config.save_show_hidden,
        )
    except DirectoryLoadFailed as exc:
        logger.error("cannot open %s: %s", start_path, exc)
        raise SystemExit(str(exc)) from None

    session.start()
    try:
        session.run()
    finally:
        session.shutdown()


if __name__ == "__main__":
    main()
