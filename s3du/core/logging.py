import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "s3du"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Send s3du's log records to stderr through rich. Safe to call more than once."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
