"""
Store des tâches - collection en mémoire, projections par statut, abonnements

Le store est le seul propriétaire de la collection. Toute mutation passe par
la validation (add/update) et publie un nouvel instantané `BoardState` aux
abonnés une fois entièrement appliquée.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from kanban.schemas.task import TASK_STATUSES, Task, as_utc
from kanban.schemas.validation import validate_create, validate_query, validate_update

logger = logging.getLogger(__name__)

# Champs jamais repris d'un patch: l'id vient de l'argument, les dates sont gérées par le store
_PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BoardState:
    """Instantané du tableau. Les colonnes sont recalculées à chaque accès."""

    tasks: Tuple[Task, ...] = ()

    def by_status(self, status: str) -> Tuple[Task, ...]:
        return tuple(task for task in self.tasks if task.status == status)

    @property
    def todo(self) -> Tuple[Task, ...]:
        return self.by_status("todo")

    @property
    def in_progress(self) -> Tuple[Task, ...]:
        return self.by_status("in-progress")

    @property
    def done(self) -> Tuple[Task, ...]:
        return self.by_status("done")

    def columns(self) -> Dict[str, Tuple[Task, ...]]:
        return {status: self.by_status(status) for status in TASK_STATUSES}


Subscriber = Callable[[BoardState], None]


class TaskStore:
    """Collection autoritaire des tâches."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._clock = clock or utcnow
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._subscribers: Dict[object, Subscriber] = {}
        self._disposed = False
        self._publishing = False
        self._stale = False
        self._tasks: Tuple[Task, ...] = self._checked(tasks)

    # ============ CYCLE DE VIE ============

    def init(self, tasks: Iterable[Task] = ()) -> "TaskStore":
        """(Ré)active le store avec une collection initiale et la publie."""
        self._disposed = False
        self._tasks = self._checked(tasks)
        self._publish()
        return self

    def dispose(self) -> None:
        self._subscribers.clear()
        self._disposed = True
        logger.debug("Task store disposed")

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __enter__(self) -> "TaskStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    # ============ LECTURE ============

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self._tasks

    @property
    def state(self) -> BoardState:
        return BoardState(tasks=self._tasks)

    @property
    def todo_tasks(self) -> Tuple[Task, ...]:
        return self.state.todo

    @property
    def in_progress_tasks(self) -> Tuple[Task, ...]:
        return self.state.in_progress

    @property
    def done_tasks(self) -> Tuple[Task, ...]:
        return self.state.done

    def __len__(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def query_tasks(self, **filters: Any) -> List[Task]:
        """Filtre par statut/priorité puis applique offset/limit (ordre d'insertion)."""
        query = validate_query(filters)
        result = [
            task for task in self._tasks
            if (query.status is None or task.status == query.status)
            and (query.priority is None or task.priority == query.priority)
        ]
        start = query.offset or 0
        if query.limit is None:
            return result[start:]
        return result[start:start + query.limit]

    # ============ ABONNEMENTS ============

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Enregistre `callback`; il reçoit l'état courant tout de suite puis chaque nouvel état.

        Retourne la fonction de désabonnement (idempotente).
        """
        self._ensure_active()
        token = object()
        self._subscribers[token] = callback
        self._notify(callback, self.state)

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def _publish(self) -> None:
        # Mutation depuis un abonné: la diffusion en cours reprend avec le nouvel état
        if self._publishing:
            self._stale = True
            return
        self._publishing = True
        try:
            self._stale = True
            while self._stale:
                self._stale = False
                state = self.state
                for callback in list(self._subscribers.values()):
                    self._notify(callback, state)
                    if self._stale:
                        break
        finally:
            self._publishing = False
            self._stale = False

    def _notify(self, callback: Subscriber, state: BoardState) -> None:
        # La mutation est déjà appliquée: un abonné en échec ne bloque pas les autres
        try:
            callback(state)
        except Exception:
            logger.exception(f"Task store subscriber {callback!r} failed")

    # ============ MUTATIONS ============

    def add_task(self, data: Mapping[str, Any]) -> Task:
        """Valide `data`, génère id et dates, ajoute la tâche en fin de collection."""
        self._ensure_active()
        payload = validate_create(data)
        now = self._clock()
        task = Task(id=self._new_id(), created_at=now, updated_at=now, **payload.model_dump())
        self._tasks = self._tasks + (task,)
        logger.debug(f"Task {task.id} added ({task.status})")
        self._publish()
        return task

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> Optional[Task]:
        """Fusionne `patch` dans la tâche `task_id`.

        Lève ValidationError si le patch est invalide (collection inchangée).
        Id inconnu: aucun effet, retourne None.
        """
        self._ensure_active()
        data = {**patch, "id": task_id} if isinstance(patch, Mapping) else patch
        update = validate_update(data)

        index = self._index_of(update.id)
        if index is None:
            logger.debug(f"Update ignored, task {task_id} not found")
            return None

        current = self._tasks[index]
        changes = {
            field: value
            for field, value in update.model_dump(exclude_unset=True).items()
            if field not in _PROTECTED_FIELDS
        }
        changes["updated_at"] = max(as_utc(self._clock()), current.created_at)
        updated = current.model_copy(update=changes)

        self._tasks = self._tasks[:index] + (updated,) + self._tasks[index + 1:]
        self._publish()
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Supprime la tâche si présente. Publie dans tous les cas."""
        self._ensure_active()
        remaining = tuple(task for task in self._tasks if task.id != task_id)
        removed = len(remaining) != len(self._tasks)
        self._tasks = remaining
        if removed:
            logger.debug(f"Task {task_id} deleted")
        self._publish()
        return removed

    def set_tasks(self, tasks: Iterable[Task]) -> None:
        """Remplace toute la collection (réhydratation depuis le stockage)."""
        self._ensure_active()
        self._tasks = self._checked(tasks)
        self._publish()

    # ============ INTERNE ============

    def _ensure_active(self) -> None:
        if self._disposed:
            raise RuntimeError("Task store has been disposed")

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _new_id(self) -> str:
        existing = {task.id for task in self._tasks}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id

    @staticmethod
    def _checked(tasks: Iterable[Task]) -> Tuple[Task, ...]:
        checked = tuple(tasks)
        seen = set()
        for task in checked:
            if not isinstance(task, Task):
                raise ValueError(f"Expected Task, got {type(task).__name__}")
            if task.id in seen:
                raise ValueError(f"Duplicate task id {task.id}")
            seen.add(task.id)
        return checked
