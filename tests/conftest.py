import typing as t

import pytest

from safelog.logging.sinks import BaseSink


class RecordingSink(BaseSink):
    """Captures emitted event dicts in memory."""

    def __init__(self) -> None:
        self.events: list[dict[str, t.Any]] = []
        self.closed = False

    def emit(self, event_dict: dict[str, t.Any]) -> None:
        self.events.append(dict(event_dict))

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> dict[str, t.Any]:
        return self.events[-1]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Keep ambient LOG_LEVEL / SAFELOG_* variables out of the tests."""
    import os

    for name in list(os.environ):
        if name == "LOG_LEVEL" or name.startswith("SAFELOG_"):
            monkeypatch.delenv(name, raising=False)
    yield
