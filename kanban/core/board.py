"""Câblage du tableau: store + stockage + persistance, pour l'application."""

import logging
from typing import Tuple

from fastapi import Request

from kanban.core.config import settings
from kanban.data.sample_tasks import load_sample_tasks
from kanban.services.persistence import TaskPersistence
from kanban.services.storage import KeyValueStorage, MemoryStorage, SQLStorage
from kanban.services.task_store import TaskStore

logger = logging.getLogger(__name__)


def build_storage() -> KeyValueStorage:
    if settings.STORAGE_BACKEND == "sql":
        from kanban.core.database import SessionLocal, init_db
        init_db()
        return SQLStorage(SessionLocal)
    return MemoryStorage()


def open_board() -> Tuple[TaskStore, TaskPersistence]:
    """Crée le store, le réhydrate depuis le stockage et active la sauvegarde auto."""
    store = TaskStore()
    persistence = TaskPersistence(store, build_storage(), key=settings.STORAGE_KEY)
    persistence.load()
    if settings.SEED_SAMPLE and not store.tasks:
        load_sample_tasks(store)
        logger.info(f"Seeded {len(store.tasks)} sample task(s)")
    if settings.AUTO_SAVE:
        persistence.enable_auto_save()
    return store, persistence


def close_board(store: TaskStore, persistence: TaskPersistence) -> None:
    persistence.disable_auto_save()
    persistence.save()
    store.dispose()


def get_store(request: Request) -> TaskStore:
    """Dépendance FastAPI: le store du tableau"""
    return request.app.state.store
