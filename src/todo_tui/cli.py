"""Command-line entry point for todo-tui."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from . import __version__
from .app import App
from .config import ConfigModel, load_config
from .storage import Storage, StorageError
from .store import TodoList
from .terminal import Terminal, TerminalUnavailableError
from .theme import PALETTES, get_themed_console, palette_index

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: ConfigModel, verbose: bool = False) -> None:
    """Send log records to a file; the terminal belongs to the UI."""
    level = logging.DEBUG if verbose else getattr(logging, str(config.log_level).upper(), logging.WARNING)
    log_path = config.get_log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(filename=str(log_path), level=level, format=LOG_FORMAT)
    except OSError:
        logging.basicConfig(level=logging.CRITICAL, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              envvar="TODO_TUI_CONFIG", help="Path to config file")
@click.option("--file", "data_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Todo list file (overrides the configured one)")
@click.option("--no-save", is_flag=True, help="Keep the list in memory only")
@click.option("--wrap/--no-wrap", default=None, help="Wrap the cursor at the ends of the list")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging to the log file")
@click.version_option(__version__, prog_name="todo-tui")
def main(config_path: Optional[Path], data_file: Optional[Path], no_save: bool,
         wrap: Optional[bool], verbose: bool):
    """A terminal todo list.

    Keys: (a) add, (space) toggle, (x) delete, (r) edit, (i) info, (q) quit.
    """
    console = get_themed_console(PALETTES[0], stderr=True)

    config = load_config(config_path)
    setup_logging(config, verbose)
    if wrap is not None:
        config.wrap_cursor = wrap

    storage = None
    if config.persist and not no_save:
        storage = Storage(config, data_file)

    try:
        store = storage.load() if storage else TodoList()
    except StorageError as e:
        logger.error(str(e))
        console.print(f"[error]{escape(str(e))}[/error]")
        sys.exit(1)

    app = App(store, config, storage)
    terminal = Terminal(get_themed_console(PALETTES[palette_index(config.palette)]))
    try:
        app.run(terminal)
    except TerminalUnavailableError as e:
        logger.error(f"Terminal unavailable: {e}")
        console.print(f"[error]todo-tui needs an interactive terminal: {escape(str(e))}[/error]")
        sys.exit(1)


if __name__ == "__main__":
    main()
