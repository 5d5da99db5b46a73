"""Shared test fixtures for the vlog test suite."""

import io
import os
from datetime import datetime
from unittest.mock import patch

import pytest

from vlog.lib.log_lib import (
    LOG_LEVEL_KEY, PLAIN, LogSettings, MemoryPreferenceStore, MemorySink,
    VLog,
)
from vlog.lib.log_lib import manager as _manager_mod


FIXED_NOW = datetime(2026, 10, 19, 14, 3, 27)


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.vlog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path, monkeypatch):
    """A project directory used as cwd (no .vlog.json yet)."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


# ---------------------------------------------------------------------------
# Facility fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def memory_sink():
    return MemorySink()


@pytest.fixture
def store():
    return MemoryPreferenceStore()


@pytest.fixture
def diagnostics():
    """Buffer receiving the facility's own failure reports."""
    return io.StringIO()


@pytest.fixture
def make_vlog(memory_sink, store, diagnostics):
    """Factory for a VLog writing to memory_sink with a fixed clock.

    level seeds the persisted threshold; PLAIN surface unless given.
    """
    def factory(level=None, suppress_logs=False, runtime_level=True,
                surface=PLAIN, **kwargs):
        if level is not None:
            store.set(LOG_LEVEL_KEY, level.display_name)
        settings = LogSettings(store=store, suppress_logs=suppress_logs,
                               runtime_level=runtime_level)
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        kwargs.setdefault("diagnostics", diagnostics)
        kwargs.setdefault("sink", memory_sink)
        return VLog(settings=settings, surface=surface, **kwargs)
    return factory


@pytest.fixture
def reset_singleton():
    """Run a test with no process-wide VLog, restoring the old one after."""
    old = _manager_mod._vlog
    _manager_mod.reset_vlog()
    yield
    _manager_mod._vlog = old
