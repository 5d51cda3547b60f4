# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tasklist.core.errors import StorageError


class TickingClock:
    """
    Deterministic clock: every call returns a time one second after the previous one.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + timedelta(seconds=1)
        self.calls += 1
        return value


class FrozenClock:
    """Always the same instant (simulates many creations within one clock tick)."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


class SequentialIds:
    """Predictable ids: t0001, t0002, ..."""

    def __init__(self, prefix: str = "t") -> None:
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}{self.n:04d}"


class ScriptedIds:
    """Returns the given ids in order (used to force collisions)."""

    def __init__(self, *ids: str) -> None:
        self._ids = list(ids)

    def __call__(self) -> str:
        return self._ids.pop(0)


class FakeSlot:
    """
    In-memory KeyValueSlot that records writes and can be told to fail.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_writes = False
        self.fail_reads = False

    def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("slot unreadable")
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        self.data[key] = value
        self.writes.append((key, value))
