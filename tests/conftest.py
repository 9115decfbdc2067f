"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from easyg.db import get_session
from easyg.main import app


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession; records every statement executed."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, error: Exception | None = None):
        self._rows = rows or []
        self._error = error
        self.executed: list[tuple[Any, Any]] = []
        self.commits = 0
        self.rollbacks = 0

    async def execute(self, stmt, params=None):
        self.executed.append((stmt, params))
        if self._error is not None:
            raise self._error
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchone(self):
        if not self._rows:
            return None
        return tuple(self._rows[0][k] for k in self._keys)

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fake pattern oracle
# ---------------------------------------------------------------------------

class FakeOracle:
    """Deterministic oracle. Each value is a constant or a callable of the call args."""

    def __init__(
        self,
        vibration_pattern: int | Callable[..., Any] = 1,
        vibration_intensity: int | Callable[..., Any] = 5,
        suction_pattern: int | Callable[..., Any] = 1,
        suction_intensity: int | Callable[..., Any] = 5,
    ):
        self._values = {
            "vibration_pattern": vibration_pattern,
            "vibration_intensity": vibration_intensity,
            "suction_pattern": suction_pattern,
            "suction_intensity": suction_intensity,
        }
        self.calls: list[tuple[str, tuple]] = []

    def _call(self, name: str, args: tuple) -> Any:
        self.calls.append((name, args))
        value = self._values[name]
        return value(*args) if callable(value) else [value]

    def vibration_pattern(self, *args):
        return self._call("vibration_pattern", args)

    def vibration_intensity(self, *args):
        return self._call("vibration_intensity", args)

    def suction_pattern(self, *args):
        return self._call("suction_pattern", args)

    def suction_intensity(self, *args):
        return self._call("suction_intensity", args)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    return FakeSession()


@pytest.fixture()
def fake_oracle():
    return FakeOracle()


@pytest.fixture()
def override_deps(fake_session, fake_oracle):
    """Override the DB dependency and the oracle lookup so neither needs real config."""
    async def _session():
        yield fake_session

    app.dependency_overrides[get_session] = _session
    with patch("easyg.program.router.get_oracle", return_value=fake_oracle):
        yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_deps):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_answers(
    channels: tuple[int, int] = (1, 1),
    order: str | None = None,
    heat: int = 0,
    intensity: tuple[int, int, int] = (0, 0, 0),
    closeness: tuple[int, int, int] = (0, 0, 0),
    variety: int = 0,
    lube: int = 0,
    labels: tuple[str, str, str] = ("Foreplay", "Midway", "End"),
) -> list[dict[str, Any]]:
    """Helper to build a questionnaire answer list in the v1 shape."""
    answers: list[dict[str, Any]] = [
        {"question": "1", "answer_id": 0, "answers": [
            {"possible_answers": label, "answer_id": v} for label, v in zip(labels, intensity)
        ]},
        {"question": "2", "answer_id": 0, "answers": [
            {"possible_answers": label, "answer_id": v} for label, v in zip(labels, closeness)
        ]},
        {"question": "3", "answer_id": variety},
        {"question": "4", "answer_id": heat},
        {"question": "5", "answer_id": lube},
        {"question": "6", "answer_id": list(channels)},
    ]
    if order is not None:
        answers.append({"question": "7", "answer_id": 0, "answers": order})
    return answers
