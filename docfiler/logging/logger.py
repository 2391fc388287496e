import logging
import sys
from typing import TextIO

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Log:
    """Process-wide logger for the filing worker."""

    _logger: logging.Logger = logging.getLogger("docfiler")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO = sys.stdout) -> None:
        """Set the level and attach a single stream handler.

        Safe to call more than once; the handler is only added the first time.
        """
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream)
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str) -> None:
        cls._logger.info(message)

    @classmethod
    def warning(cls, message: str) -> None:
        cls._logger.warning(message)

    @classmethod
    def error(cls, message: str) -> None:
        cls._logger.error(message)

    @classmethod
    def exception(cls, message: str) -> None:
        """Log at error level with the active exception's traceback."""
        cls._logger.exception(message)

    @classmethod
    def debug(cls, message: str) -> None:
        cls._logger.debug(message)
