"""Validation des tâches.

Toutes les fonctions lèvent `ValidationError` (jamais l'exception pydantic):
une liste d'erreurs `{path, message}` adressables par champ, que l'appelant
doit traiter explicitement (affichage inline, réponse 422, etc.).
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from kanban.schemas.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskCreate,
    TaskQuery,
    TaskUpdate,
)

PathItem = Union[str, int]

# nom JSON -> nom d'attribut
_ATTRIBUTE_NAMES = {to_camel(name): name for name in Task.model_fields}


def _attribute_name(name: PathItem) -> PathItem:
    if isinstance(name, str):
        return _ATTRIBUTE_NAMES.get(name, name)
    return name


@dataclass(frozen=True)
class FieldError:
    path: Tuple[PathItem, ...]
    message: str

    @property
    def field(self) -> Optional[PathItem]:
        return self.path[0] if self.path else None

    def to_dict(self) -> Dict[str, Any]:
        """Forme JSON, avec les noms de champ camelCase."""
        path = [to_camel(p) if isinstance(p, str) else p for p in self.path]
        return {"path": path, "message": self.message}


class ValidationError(Exception):
    """Échec de validation, une entrée par règle violée."""

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: List[FieldError] = list(errors)
        super().__init__(
            "; ".join(
                f"{'.'.join(str(p) for p in e.path) or '<root>'}: {e.message}"
                for e in self.errors
            )
        )

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        errors = []
        for err in exc.errors():
            path = tuple(_attribute_name(p) for p in err["loc"])
            errors.append(FieldError(path=path, message=err["msg"]))
        return cls(errors)

    def field_error(self, field: str) -> Optional[str]:
        """Premier message attaché au champ (nom JSON ou nom d'attribut), sinon None."""
        wanted = _attribute_name(field)
        for error in self.errors:
            if error.field == wanted:
                return error.message
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.errors]


def _validate(schema: Type[BaseModel], data: Any):
    if not isinstance(data, Mapping):
        raise ValidationError(
            [FieldError(path=(), message=f"Expected an object, received {type(data).__name__}")]
        )
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from None


def validate_task(data: Any) -> Task:
    """Validation complète (id compris). Utilisée pour réhydrater les données stockées."""
    return _validate(Task, data)


def validate_create(data: Any) -> TaskCreate:
    return _validate(TaskCreate, data)


def validate_update(data: Any) -> TaskUpdate:
    return _validate(TaskUpdate, data)


def validate_query(data: Any) -> TaskQuery:
    return _validate(TaskQuery, data)


def get_field_error(schema: Type[BaseModel], data: Any, field: str) -> Optional[str]:
    """Valide `data` avec `schema` et retourne la première erreur du champ, ou None."""
    try:
        _validate(schema, data)
    except ValidationError as exc:
        return exc.field_error(field)
    return None


# ============ HELPERS FORMULAIRE ============

def is_valid_title(title: Any) -> bool:
    return isinstance(title, str) and 1 <= len(title) <= TITLE_MAX_LENGTH


def is_valid_description(description: Any) -> bool:
    return isinstance(description, str) and len(description) <= DESCRIPTION_MAX_LENGTH
