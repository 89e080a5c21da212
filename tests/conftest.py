"""Shared test fixtures."""

import uuid
from datetime import datetime

import pytest

from sentinel.config import GeneralSettings, Settings, reset_settings
from sentinel.storage.models import Project, Session, Task
from sentinel.storage.paths import DataPaths
from sentinel.timeutil import to_ms


def ms(*args) -> int:
    """Epoch milliseconds for a local datetime, e.g. ``ms(2024, 1, 1, 9, 30)``."""
    return to_ms(datetime(*args))


def make_task(**overrides) -> Task:
    """Create a Task record for testing."""
    defaults = {
        "id": str(uuid.uuid4()),
        "description": "Test Task",
        "is_done": False,
        "created": ms(2024, 1, 1, 9, 0),
        "project_name": None,
        "completed": None,
    }
    defaults.update(overrides)
    return Task(**defaults)


def make_session(**overrides) -> Session:
    """Create a Session record for testing."""
    defaults = {
        "id": str(uuid.uuid4()),
        "project_name": "alpha",
        "focus": "Write tests",
        "session_start": ms(2024, 1, 1, 9, 0),
        "session_end": ms(2024, 1, 1, 10, 0),
    }
    defaults.update(overrides)
    return Session(**defaults)


def make_project(**overrides) -> Project:
    defaults = {
        "name": "alpha",
        "working_dir": "/tmp",
        "on_start": None,
        "github": None,
    }
    defaults.update(overrides)
    return Project(**defaults)


@pytest.fixture
def data_dir(tmp_path):
    """Point the global settings at a temporary data directory."""
    root = tmp_path / "sentinel"
    reset_settings(Settings(general=GeneralSettings(data_path=root)))
    yield DataPaths(root)
    reset_settings()


class Clock:
    """Controllable replacement for ``now_ms``."""

    def __init__(self, start: int):
        self.value = start

    def __call__(self) -> int:
        return self.value

    def set(self, *args) -> None:
        self.value = ms(*args)


@pytest.fixture
def clock(monkeypatch):
    c = Clock(ms(2024, 1, 1, 9, 0))
    monkeypatch.setattr("sentinel.repository.now_ms", c)
    return c
