import logging
import sys
from typing import Any, Optional, Union

import structlog

_HANDLER_NAME = "omzetter_fallback_handler"


def _configure_structlog(level: Union[int, str] = logging.INFO) -> None:
    """Configures structlog to produce JSON-formatted logs via stdlib."""
    if structlog.is_configured():
        return

    # This is a fallback configuration. Applications embedding omzetter
    # should configure logging themselves.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.set_name(_HANDLER_NAME)

    root_logger = logging.getLogger()
    if not _owns_root_logger():
        root_logger.addHandler(handler)
        root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class StructlogLogger:
    """A thin wrapper around a structlog logger with a fixed event API."""

    def __init__(self, name: str):
        self.name = name
        self._logger = structlog.get_logger(name)

    def info(self, event: str, **data: Any) -> None:
        self._logger.info(event, **data)

    def warning(self, event: str, **data: Any) -> None:
        self._logger.warning(event, **data)

    def error(self, event: str, **data: Any) -> None:
        self._logger.error(event, **data)

    def debug(self, event: str, **data: Any) -> None:
        self._logger.debug(event, **data)

    def bind(self, **new_values: Any):
        return self._logger.bind(**new_values)


_structlog_configured = False


def _owns_root_logger() -> bool:
    return _HANDLER_NAME in [h.get_name() for h in logging.getLogger().handlers]


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Applies the fallback structlog configuration once, and sets the level.

    `level` is a stdlib level name or number. An explicit level is applied
    on every call, including after the first, but only to a root logger
    that carries the fallback handler; a root logger set up by the
    application is left alone.
    """
    global _structlog_configured
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if not _structlog_configured:
        _configure_structlog(level if level is not None else logging.INFO)
        _structlog_configured = True
    elif level is not None and _owns_root_logger():
        logging.getLogger().setLevel(level)


def get_logger(name: str) -> StructlogLogger:
    """Returns a structlog logger for the given name, configuring structlog on first use."""
    configure_logging()
    return StructlogLogger(name)
