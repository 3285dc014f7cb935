"""CLI/bootstrap helpers for the Booktop application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from booktop.bookcase import Bookcase, example_bookcase
from booktop.config import get_config_dir, load_config
from booktop.errors import BookcaseFileError, CommandError, EmptyBookcaseError
from booktop.models import DEFAULT_BOOKCASE_FILENAME, Book, UserConfig
from booktop.storage import load_bookcase, save_bookcase

logger = logging.getLogger(__name__)

LIST_RULE = "=" * 40

# Subcommands that change one book's reading state, by Book method name
READ_STATE_COMMANDS: dict[str, Callable[[Book], None]] = {
    "start": Book.start,
    "finish": Book.finish,
    "stop": Book.stop,
    "reset": Book.reset,
}


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = get_config_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def format_bookcase_listing(bookcase: Bookcase) -> str:
    """``Bookcase: <name>``, a rule, then one ``id: book`` line per book."""
    lines = [f"Bookcase: {bookcase.name}", LIST_RULE]
    lines.extend(f"{book_id}: {book}" for book_id, book in bookcase.get_books())
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="booktop", description="A basic tracker for books")
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help=f"File containing an existing bookcase (default: ./{DEFAULT_BOOKCASE_FILENAME})",
    )
    parser.add_argument(
        "--no-file",
        action="store_true",
        help="Do not attempt to open a (default) file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run commands without updating the file",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Follow the command with a listing of the bookcase",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/booktop/debug.log)",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    add = commands.add_parser("add", help="Add a book")
    add.add_argument("title")
    add.add_argument("author")

    commands.add_parser("list", help="List all books")

    init = commands.add_parser("init", help="Initialise a bookcase file")
    init.add_argument("path", type=Path)

    remove = commands.add_parser("remove", help="Remove a book")
    remove.add_argument("id", type=int)

    commands.add_parser("pick", help="Pick a book at random")

    for name, help_text in (
        ("start", "Start reading a book"),
        ("finish", "Finish reading a book"),
        ("stop", "Pause reading a book"),
        ("reset", "Return a book to unread"),
    ):
        state_parser = commands.add_parser(name, help=help_text)
        state_parser.add_argument("id", type=int)

    util = commands.add_parser("util", help="Use a utility function")
    util.add_argument(
        "-w",
        "--write",
        action="store_true",
        help="Write the result back to the bookcase file",
    )
    util_commands = util.add_subparsers(dest="util_command", metavar="UTILITY", required=True)
    util_commands.add_parser(
        "example-bookcase", help="Replace the books with a small example bookcase"
    )
    util_commands.add_parser(
        "renumber", help="Re-index the bookcase, reassigning ids from 1"
    )

    tui = commands.add_parser("tui", help="Start the terminal UI (default)")
    tui.add_argument("tui_file", metavar="FILE", nargs="?", type=Path, default=None)
    return parser


def _resolve_bookcase_path(
    args: argparse.Namespace, config: UserConfig, base_dir: Path
) -> Path | None:
    """``tui FILE``, --file, ./bookcase.booktop.yaml if present, then the config default.

    A file named on the ``tui`` subcommand is always opened, even with --no-file.
    """
    if getattr(args, "tui_file", None) is not None:
        return args.tui_file
    if args.no_file:
        return None
    if args.file is not None:
        return args.file
    default_path = base_dir / DEFAULT_BOOKCASE_FILENAME
    if default_path.is_file():
        return default_path
    if config.default_bookcase:
        return Path(config.default_bookcase).expanduser()
    return None


def _load(path: Path) -> Bookcase:
    try:
        return load_bookcase(path)
    except BookcaseFileError as exc:
        raise CommandError(
            f"open bookcase {path}",
            why=str(exc),
            next_step=f"fix the file or create one with booktop init {path}",
        ) from exc


def _save(bookcase: Bookcase, path: Path) -> None:
    try:
        save_bookcase(bookcase, path)
    except BookcaseFileError as exc:
        raise CommandError(
            f"save bookcase {path}",
            why=str(exc),
            next_step="check the file permissions or rerun with --dry-run",
        ) from exc
    logger.debug("Saved bookcase to %s", path)


def _require_book(bookcase: Bookcase, book_id: int, action: str) -> Book:
    book = bookcase.get_book(book_id)
    if book is None:
        raise CommandError(
            f"{action} book {book_id}",
            why=f"no book with id {book_id} is in the bookcase",
            next_step="run booktop list to see the available ids",
        )
    return book


def _init_bookcase(path: Path, write: bool) -> None:
    """Create an empty bookcase file, refusing to overwrite an existing one."""
    if path.exists():
        raise CommandError(
            f"initialise {path}",
            why="the file already exists",
            next_step=f"open it with booktop -f {path} list",
        )
    if write:
        _save(Bookcase(), path)


def _run_tui(
    bookcase: Bookcase,
    path: Path | None,
    config: UserConfig,
    write: bool,
    validate_interactive_tty_fn: Callable[[], bool],
    app_factory: Callable[..., Any] | None,
) -> int:
    if not validate_interactive_tty_fn():
        print(
            "Error: booktop requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run booktop directly in a terminal session", file=sys.stderr)
        print("  - Use booktop list for non-interactive output", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from booktop.app import BooktopApp as _BooktopApp

        app_factory = _BooktopApp

    app = app_factory(bookcase, config=config, bookcase_path=path, save_on_exit=write)
    try:
        app.run()
    except Exception as exc:
        logger.exception("Terminal UI exited with an error")
        raise CommandError(
            "run the terminal UI",
            why="the terminal reported an error",
            next_step="rerun with --debug and check debug.log",
        ) from exc
    save_error = getattr(app, "save_error", None)
    if save_error:
        raise CommandError(
            "save the bookcase",
            why=save_error,
            next_step="check the file permissions or rerun with --dry-run",
        )
    return 0


def _run_command(
    args: argparse.Namespace,
    command: str,
    load_config_fn: Callable[[], UserConfig],
    validate_interactive_tty_fn: Callable[[], bool],
    app_factory: Callable[..., Any] | None,
) -> int:
    write = not args.dry_run
    if command == "init":
        _init_bookcase(args.path, write)
        return 0

    config = load_config_fn()
    path = _resolve_bookcase_path(args, config, Path.cwd())
    bookcase = _load(path) if path is not None else Bookcase()

    if command == "tui":
        status = _run_tui(
            bookcase, path, config, write, validate_interactive_tty_fn, app_factory
        )
        if status == 0 and args.list:
            print(format_bookcase_listing(bookcase))
        return status

    if command == "add":
        book_id = bookcase.add_book(args.title, args.author)
        logger.debug("Added book %d: %s", book_id, args.title)
    elif command == "list":
        print(format_bookcase_listing(bookcase))
    elif command == "remove":
        _require_book(bookcase, args.id, "remove")
        bookcase.remove_book(args.id)
    elif command == "pick":
        try:
            book_id = bookcase.pick_random_id()
        except EmptyBookcaseError as exc:
            raise CommandError(
                "pick a book",
                why="the bookcase is empty",
                next_step='add one with booktop add "Title" "Author"',
            ) from exc
        print(f"{book_id} | {bookcase.get_book(book_id)}")
    elif command in READ_STATE_COMMANDS:
        READ_STATE_COMMANDS[command](_require_book(bookcase, args.id, command))
    elif command == "util":
        write = args.write and not args.dry_run
        if args.util_command == "example-bookcase":
            bookcase = example_bookcase()
        else:
            bookcase.renumber()
            print(format_bookcase_listing(bookcase))

    if args.list:
        print(format_bookcase_listing(bookcase))
    if write and path is not None:
        _save(bookcase, path)
    return 0


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    command = args.command or "tui"

    configure_logging_fn(args.debug)
    logger.debug("booktop starting, command=%s, cwd=%s", command, Path.cwd())

    try:
        return _run_command(
            args, command, load_config_fn, validate_interactive_tty_fn, app_factory
        )
    except CommandError as exc:
        logger.debug("Command %s failed: %s", command, exc.action)
        print(exc, file=sys.stderr)
        return 1


__all__ = [
    "_configure_logging",
    "_resolve_bookcase_path",
    "_validate_interactive_tty",
    "format_bookcase_listing",
    "main",
]
