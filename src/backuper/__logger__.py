# pyright: standard

"""backuper: backuper/__logger__.py
A common logger printing through rich, with an optional plain log file.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "[%(asctime)s %(levelname)-5s %(name)s] %(message)s"
FILE_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

# Initialize basic console and handler
cons = Console()
rich_handler = RichHandler(console=cons, show_path=False)


def create_logger(level="INFO", log_file=None) -> None:
    """Setup root logging: rich on the console, plain text in ``log_file``."""
    # pylint: disable=global-statement
    global cons, rich_handler

    cons = Console(stderr=True)
    rich_handler = RichHandler(console=cons, show_path=False)

    handlers: list[logging.Handler] = [rich_handler]
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, FILE_DATEFMT))
        handlers.append(file_handler)

    logging.basicConfig(
        format="%(message)s",
        datefmt="%H:%M:%S",
        level=level,
        handlers=handlers,
        force=True,
    )
