"""
Logging utilities for genolik.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves; the CLI calls :func:`setup_logging` once to
route records to a Rich console handler (and optionally a log file).
"""

import logging
import time
from contextlib import contextmanager

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "setup_logging",
    "timed",
]

# Logs go to stderr so command output on stdout stays parseable
_console = Console(stderr=True)


def setup_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """
    Configure logging for genolik.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        log_file: Optional path to write logs to file.
    """
    log_level = logging.DEBUG if verbose else logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=_console,
            rich_tracebacks=True,
            markup=False,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None):
    """
    Context manager logging the duration of an operation at DEBUG level.

    Example:
        with timed("Enumerating genotypes", logger):
            combinations = index.enumerate_combinations(4, 6)
    """
    log = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    log.debug("Starting: %s", operation)
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        log.debug("Completed: %s (%.3fs)", operation, elapsed)
