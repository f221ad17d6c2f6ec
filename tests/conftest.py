"""Pytest configuration - ensure consistent CWD and provide fixtures.

Settings resolution reads FLOCKSIM_CFG_DIR, so every test runs with it
pointed at a temporary directory to keep the user's config out of results.
"""
from __future__ import annotations

import os
from pathlib import Path
import pytest

from flocksim.boids import Boid, BoidSettings, Vector

ROOT = Path(__file__).resolve().parents[1]

def pytest_sessionstart(session):
    os.chdir(ROOT)


# Fixtures used by multiple test files

@pytest.fixture
def project_root():
    """Return path to project root."""
    return ROOT


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point the app config dir at an empty temp dir."""
    cfg_dir = tmp_path / "cfg"
    cfg_dir.mkdir()
    monkeypatch.setenv("FLOCKSIM_CFG_DIR", str(cfg_dir))
    return cfg_dir


@pytest.fixture(scope="session")
def qapp():
    """Core Qt application so timers have an event dispatcher."""
    from PyQt5.QtCore import QCoreApplication
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def settings():
    """Default settings."""
    return BoidSettings()


@pytest.fixture
def make_boid():
    """Factory: make_boid((x, y), (vx, vy), settings=..., width=100, height=100)."""
    def _make(position, velocity=(0.0, 0.0), settings=None, width=100.0, height=100.0,
              acceleration=(0.0, 0.0)):
        return Boid(
            position=Vector(*position),
            velocity=Vector(*velocity),
            acceleration=Vector(*acceleration),
            settings=settings if settings is not None else BoidSettings(),
            width=width,
            height=height,
        )
    return _make
