"""Shared pytest fixtures for FitQuest tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from fitquest.database.db import configure_engine, init_db
from fitquest.gamification.xp import XPEngine


@pytest.fixture(scope="session")
def qapp():
    """A single Qt application instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def fitquest_home(tmp_path, monkeypatch):
    """Keep settings files out of the real home directory."""
    monkeypatch.setenv("FITQUEST_HOME", str(tmp_path / "home"))
    yield tmp_path / "home"


@pytest.fixture
def xp_engine(qapp):
    """Fresh XPEngine against the test database."""
    return XPEngine(parent=None)


@pytest.fixture
def character(xp_engine):
    """A level-1 character for user ``client-1``."""
    return xp_engine.initialize_character("client-1")
