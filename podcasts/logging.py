"""Logging helpers for femtologging integration.

The catalog logs through femtologging. This module keeps level parsing and
percent-style message formatting in one place so services only deal with
``get_logger`` and the ``log_*`` helpers.

Examples
--------
Configure logging and emit a message:

>>> level, used_default = configure_logging("debug")
>>> log_info(get_logger(__name__), "Created podcast %s.", 7)
"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels accepted by ``configure_logging``."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_LEVEL_ALIASES: dict[str, LogLevel] = {
    "WARN": LogLevel.WARNING,
    "FATAL": LogLevel.CRITICAL,
}


def normalise_level(level: str | None) -> tuple[LogLevel, bool]:
    """Resolve a raw level name into a ``LogLevel``.

    Parameters
    ----------
    level : str | None
        Requested level name. Case and surrounding whitespace are ignored.

    Returns
    -------
    tuple[LogLevel, bool]
        The resolved level and whether the INFO default was used because the
        input was missing or unknown.
    """
    requested = level.strip().upper() if level else ""
    if requested in LogLevel.__members__:
        return (LogLevel(requested), False)
    if requested in _LEVEL_ALIASES:
        return (_LEVEL_ALIASES[requested], False)
    return (LogLevel.INFO, True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging and return the effective level.

    Parameters
    ----------
    level : str | None
        Requested log level, or None to use the default.
    force : bool, optional
        Whether to replace handlers installed by an earlier configuration.

    Returns
    -------
    tuple[str, bool]
        ``(effective_level, used_default)``.
    """
    normalised, used_default = normalise_level(level)
    basicConfig(level=normalised, force=force)
    return (normalised, used_default)


class _SupportsLog(typ.Protocol):
    """Structural type for femtologging loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> None: ...


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit a DEBUG message."""
    _emit(logger, LogLevel.DEBUG, template, args, exc_info)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit an INFO message.

    Raises
    ------
    TypeError
        If the template and arguments do not align for percent formatting.
    """
    _emit(logger, LogLevel.INFO, template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit a WARNING message."""
    _emit(logger, LogLevel.WARNING, template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit an ERROR message.

    Pass the caught exception as ``exc_info`` so the traceback is kept in the
    log record.
    """
    _emit(logger, LogLevel.ERROR, template, args, exc_info)


__all__ = (
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "normalise_level",
)
