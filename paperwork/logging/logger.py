import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_NO_DOCUMENT = "-"
_current_document: ContextVar[str] = ContextVar("current_document", default=_NO_DOCUMENT)


class _DocumentContextFilter(logging.Filter):
    """Stamps each record with the document the running task works on."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.document_id = _current_document.get()
        return True


class Log:
    """Centralized logging for the worker.

    Processing and categorization runs interleave on one event loop, so every
    line carries the id of the document bound in the current task (or "-").
    """

    FORMAT = "%(asctime)s [%(levelname)s] [%(document_id)s] %(message)s"

    _logger: logging.Logger = logging.getLogger("paperwork")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(_DocumentContextFilter())
            handler.setFormatter(logging.Formatter(cls.FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def bind_document(cls, document_id: str) -> Iterator[None]:
        """Tag log lines emitted inside the block with *document_id*."""
        token = _current_document.set(document_id)
        try:
            yield
        finally:
            _current_document.reset(token)

    @classmethod
    def current_document(cls) -> str:
        return _current_document.get()

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)
