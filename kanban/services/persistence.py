"""
Persistance du tableau - miroir du store dans un stockage clé-valeur

La persistance est "best effort": un échec d'écriture est loggé et ignoré,
un échec de lecture remet le store à vide. Aucune erreur ne remonte à l'appelant.
"""

import json
import logging
from typing import Callable, Iterable, List, Optional, Tuple

from kanban.schemas.task import Task
from kanban.schemas.validation import validate_task
from kanban.services.storage import KeyValueStorage, PersistenceError
from kanban.services.task_store import BoardState, TaskStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "kanban_tasks"


def serialize_tasks(tasks: Iterable[Task]) -> str:
    """Tableau JSON, noms camelCase, dates en ISO-8601"""
    return json.dumps([task.model_dump(mode="json", by_alias=True) for task in tasks])


def deserialize_tasks(blob: str) -> List[Task]:
    records = json.loads(blob)
    if not isinstance(records, list):
        raise PersistenceError(f"Stored tasks must be a JSON array, got {type(records).__name__}")
    tasks = [validate_task(record) for record in records]
    ids = [task.id for task in tasks]
    if len(set(ids)) != len(ids):
        raise PersistenceError("Stored tasks contain duplicate ids")
    return tasks


class TaskPersistence:
    def __init__(self, store: TaskStore, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.store = store
        self.storage = storage
        self.key = key
        self._unsubscribe: Optional[Callable[[], None]] = None

    def save(self) -> bool:
        """Écrit l'état courant. Retourne False si l'écriture a échoué."""
        return self._write(self.store.tasks)

    def load(self) -> Tuple[Task, ...]:
        """Remplace l'état du store par le contenu du stockage (vide si absent ou illisible)."""
        try:
            blob = self.storage.get_item(self.key)
        except Exception as e:
            logger.warning(f"Failed to read tasks from storage: {e}")
            blob = None
        else:
            if blob is None:
                logger.info(f"No stored tasks under '{self.key}', starting with an empty board")

        if blob is None:
            self.store.set_tasks(())
            return self.store.tasks

        try:
            tasks = deserialize_tasks(blob)
        except Exception as e:
            logger.warning(f"Failed to load tasks from storage: {e}")
            self.store.set_tasks(())
            return self.store.tasks

        self.store.set_tasks(tasks)
        logger.info(f"Loaded {len(tasks)} task(s) from storage")
        return self.store.tasks

    # ============ SAUVEGARDE AUTO ============

    @property
    def auto_save_enabled(self) -> bool:
        return self._unsubscribe is not None

    def enable_auto_save(self) -> None:
        """Chaque nouvel état publié par le store est écrit (l'état courant aussi)."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.store.subscribe(self._on_state)

    def disable_auto_save(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_state(self, state: BoardState) -> None:
        self._write(state.tasks)

    def _write(self, tasks: Iterable[Task]) -> bool:
        try:
            self.storage.set_item(self.key, serialize_tasks(tasks))
        except Exception as e:
            logger.warning(f"Failed to save tasks to storage: {e}")
            return False
        return True
