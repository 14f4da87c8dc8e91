"""
Tests du câblage du tableau (store + persistance) et du cycle de vie de l'app
"""

import os
import subprocess
import sys
from pathlib import Path

from fastapi.testclient import TestClient

from kanban.core import board
from kanban.core.config import settings
from kanban.data.sample_tasks import SAMPLE_TASKS
from kanban.services.storage import MemoryStorage


def test_open_board_empty_storage(monkeypatch):
    monkeypatch.setattr(settings, "SEED_SAMPLE", False)
    monkeypatch.setattr(settings, "AUTO_SAVE", True)
    store, persistence = board.open_board()
    assert store.tasks == ()
    assert isinstance(persistence.storage, MemoryStorage)
    assert persistence.key == settings.STORAGE_KEY
    assert persistence.auto_save_enabled
    board.close_board(store, persistence)
    assert store.disposed
    assert not persistence.auto_save_enabled


def test_open_board_seeds_sample_tasks(monkeypatch):
    monkeypatch.setattr(settings, "SEED_SAMPLE", True)
    monkeypatch.setattr(settings, "AUTO_SAVE", False)
    store, persistence = board.open_board()
    assert len(store) == len(SAMPLE_TASKS)
    assert not persistence.auto_save_enabled
    board.close_board(store, persistence)


def test_close_board_saves_state(monkeypatch, task_input):
    monkeypatch.setattr(settings, "SEED_SAMPLE", False)
    monkeypatch.setattr(settings, "AUTO_SAVE", False)
    store, persistence = board.open_board()
    store.add_task(task_input)
    board.close_board(store, persistence)
    assert task_input["title"] in persistence.storage.get_item(settings.STORAGE_KEY)


def test_app_lifespan_provides_store(monkeypatch, task_input):
    monkeypatch.setattr(settings, "SEED_SAMPLE", False)
    from kanban.main import app

    with TestClient(app) as client:
        response = client.post("/tasks", json=task_input)
        assert response.status_code == 201
        store = app.state.store
        assert len(store) == 1
    assert store.disposed


def test_memory_backend_does_not_create_engine():
    """Mode mémoire: aucun moteur SQL créé à l'import, même avec un DATABASE_URL inutilisable"""
    code = (
        "import sys\n"
        "import kanban.main\n"
        "assert 'kanban.core.database' not in sys.modules\n"
    )
    env = {**os.environ, "KANBAN_STORAGE": "memory", "DATABASE_URL": "postgresql+nosuchdriver://localhost/kanban"}
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=Path(__file__).parent.parent,
        env=env,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
