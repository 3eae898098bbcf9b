"""Shared test fixtures for the task board tests."""

import sys
from pathlib import Path

import pytest

# Ensure the repo root is importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskboard.app import TaskBoard
from taskboard.config import BoardConfig
from taskboard.server import create_app
from taskboard.state import TaskStore


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def board():
    return TaskBoard(BoardConfig())


@pytest.fixture
def client(board, monkeypatch):
    monkeypatch.delenv("TASKBOARD_API_SECRET", raising=False)
    app = create_app(board=board)
    app.config["TESTING"] = True
    return app.test_client()
