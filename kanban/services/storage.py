"""
Stockage clé-valeur externe (équivalent du localStorage d'un navigateur)

Deux implémentations: en mémoire (tests, mode par défaut) et SQLAlchemy.
"""

from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker



class PersistenceError(Exception):
    """Échec de lecture/écriture dans le stockage"""


class StorageQuotaExceeded(PersistenceError):
    pass


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Stockage en mémoire; `quota` limite le nombre total de caractères stockés."""

    def __init__(self, quota: Optional[int] = None):
        self.quota = quota
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota is not None:
            size = len(value) + sum(len(v) for k, v in self._items.items() if k != key)
            if size > self.quota:
                raise StorageQuotaExceeded(f"Storage quota of {self.quota} characters exceeded")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class SQLStorage:
    """Stockage dans la table `storage_entries` (une ligne par clé)."""

    def __init__(self, session_factory: sessionmaker):
        # Import tardif: le moteur SQL n'est créé que si ce stockage est utilisé
        from kanban.models.storage_entry import StorageEntry

        self.session_factory = session_factory
        self.entry_model = StorageEntry

    def get_item(self, key: str) -> Optional[str]:
        try:
            with self.session_factory() as db:
                entry = db.get(self.entry_model, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as db:
                entry = db.get(self.entry_model, key)
                if entry is None:
                    db.add(self.entry_model(key=key, value=value))
                else:
                    entry.value = value
                db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not write '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self.session_factory() as db:
                db.query(self.entry_model).filter(self.entry_model.key == key).delete()
                db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not remove '{key}': {e}") from e
