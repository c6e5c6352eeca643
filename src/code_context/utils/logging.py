"""
Logging setup for code_context.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed by applications (the CLI) through ``configure_logging``.
"""
import logging
import os
import sys
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


ROOT_LOGGER = "code_context"
LOG_LEVEL_ENV = "CODE_CONTEXT_LOG_LEVEL"
SIMPLE_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.WARNING)


def configure_logging(
    level: Optional[Union[int, str]] = None,
    use_rich: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the ``code_context`` logger.

    Args:
        level: Log level name or number (default: $CODE_CONTEXT_LOG_LEVEL or WARNING)
        use_rich: Render records with rich's handler instead of a plain stream handler
        console: Console used by the rich handler (default: stderr console)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    resolved = _resolve_level(level)
    logger.setLevel(resolved)

    # Replace handlers from a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    handler.setLevel(resolved)
    logger.addHandler(handler)
    return logger
