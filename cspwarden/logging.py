"""Logging helpers built on femtologging.

All cspwarden modules obtain loggers through :func:`get_logger` and emit
pre-formatted messages through the level helpers below, so the handler
never hands raw format arguments to the femtologging worker thread.

Example:
>>> from cspwarden.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Accepted report for %s", "https://example.com/")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger

_DEFAULT_LEVEL = "INFO"


class LogLevel(enum.StrEnum):
    """Log levels understood by femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class _SupportsLog(typ.Protocol):
    """Structural type for femtologging loggers and test doubles."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Return the canonical level name and whether the input was rejected.

    Parameters
    ----------
    level : str | None
        Raw level name, typically read from ``CSPWARDEN_LOG_LEVEL``.

    Returns
    -------
    tuple[str, bool]
        Canonical level name, and ``True`` when *level* was missing or
        unknown and ``INFO`` was substituted.

    """
    candidate = (level or "").strip().upper()
    if candidate in LogLevel.__members__:
        return (candidate, False)
    return (_DEFAULT_LEVEL, True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Install the femtologging root configuration.

    Parameters
    ----------
    level : str | None
        Raw level name to normalize before configuring.
    force : bool, optional
        Replace existing handlers when ``True``.

    Returns
    -------
    tuple[str, bool]
        The same pair :func:`normalize_log_level` returns.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def _emit(
    logger: _SupportsLog,
    level: str,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an INFO record, interpolating *args* percent-style."""
    _emit(logger, LogLevel.INFO, template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit a WARNING record, interpolating *args* percent-style."""
    _emit(logger, LogLevel.WARNING, template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an ERROR record, interpolating *args* percent-style."""
    _emit(logger, LogLevel.ERROR, template, args, exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Emit an ERROR record carrying *exc* as ``exc_info``.

    Parameters
    ----------
    logger : _SupportsLog
        Logger receiving the record.
    message : str
        Already formatted description of the failure.
    exc : BaseException
        Exception attached to the record for traceback rendering.

    """
    logger.log(LogLevel.ERROR, message, exc_info=exc, stack_info=False)


__all__ = [
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
