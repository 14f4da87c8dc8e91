import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import datetime, timedelta, timezone

from kanban.services.task_store import TaskStore
from kanban.services.storage import MemoryStorage


class FakeClock:
    """Horloge contrôlable pour des dates déterministes"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 8, 10, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    """Store vide, libéré après le test"""
    s = TaskStore(clock=clock)
    yield s
    s.dispose()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def task_input():
    """Données de création valides (noms JSON)"""
    return {
        "title": "Write release notes",
        "description": "Summarize the changes of the sprint",
        "status": "todo",
        "priority": "medium",
        "dueDate": None,
        "aiGenerated": False,
        "originalPrompt": None,
    }


@pytest.fixture
def client(store):
    """Client de test FastAPI branché sur le store du test"""
    from fastapi.testclient import TestClient
    from kanban.main import app
    from kanban.core.board import get_store

    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
