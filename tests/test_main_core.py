from __future__ import annotations

import logging
from typing import Any

import pytest

from attitude_indicator import __main__ as entry


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, logging.WARNING), ("debug", logging.DEBUG), (" INFO ", logging.INFO), ("chatty", logging.WARNING)],
)
def test_log_level_comes_from_environment(monkeypatch: pytest.MonkeyPatch, raw: str | None, expected: int) -> None:
    seen: dict[str, Any] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    if raw is None:
        monkeypatch.delenv(entry.LOG_LEVEL_ENV, raising=False)
    else:
        monkeypatch.setenv(entry.LOG_LEVEL_ENV, raw)

    entry._configure_logging()

    assert seen["level"] == expected


def test_main_configures_logging_then_runs(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(entry, "_configure_logging", lambda: calls.append("logging"))
    monkeypatch.setattr(entry, "run", lambda: calls.append("run") or 0)

    assert entry.main() == 0
    assert calls == ["logging", "run"]
