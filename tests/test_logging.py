"""Tests for the femtologging helpers."""

from __future__ import annotations

import typing as typ

import pytest

from podcasts import logging as catalog_logging
from podcasts.logging import LogLevel, log_error, log_info, normalise_level


class _RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, object | None]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> None:
        self.records.append((level, message, exc_info))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("info", (LogLevel.INFO, False)),
        ("WARN", (LogLevel.WARNING, False)),
        ("fatal", (LogLevel.CRITICAL, False)),
        (None, (LogLevel.INFO, True)),
        ("chatty", (LogLevel.INFO, True)),
    ],
)
def test_normalise_level(raw: str | None, expected: tuple[LogLevel, bool]) -> None:
    """Level names are normalised with an INFO fallback."""
    assert normalise_level(raw) == expected


def test_configure_logging_passes_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """``configure_logging`` hands the normalised level to femtologging."""
    calls: list[dict[str, typ.Any]] = []
    monkeypatch.setattr(
        catalog_logging,
        "basicConfig",
        lambda **kwargs: calls.append(kwargs),
    )

    assert catalog_logging.configure_logging("debug", force=True) == ("DEBUG", False)
    assert calls == [{"level": LogLevel.DEBUG, "force": True}]


def test_helpers_format_and_forward_exc_info() -> None:
    """Templates are percent-formatted and ``exc_info`` is forwarded."""
    logger = _RecordingLogger()
    error = RuntimeError("boom")

    log_info(logger, "Created podcast %s.", 3)
    log_error(logger, "Failed: %s", "update_podcast", exc_info=error)
    log_info(logger, "100% literal")

    assert logger.records == [
        (LogLevel.INFO, "Created podcast 3.", None),
        (LogLevel.ERROR, "Failed: update_podcast", error),
        (LogLevel.INFO, "100% literal", None),
    ]
