"""Pydantic schemas pour la validation des tâches du tableau kanban."""

import re
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional, get_args

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


TaskStatus = Literal["todo", "in-progress", "done"]
Priority = Literal["high", "medium", "low"]

TASK_STATUSES = get_args(TaskStatus)
PRIORITIES = get_args(Priority)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


# ============ RÈGLES DE CHAMP ============

def _check_task_id(value: str) -> str:
    if not _UUID_RE.match(value):
        raise PydanticCustomError("task_id_format", "Invalid task ID format")
    return value


def _check_title(value: str) -> str:
    if len(value) < 1:
        raise PydanticCustomError("title_required", "Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError("title_too_long", "Title must be less than 100 characters")
    return value


def _check_description(value: str) -> str:
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise PydanticCustomError(
            "description_too_long", "Description must be less than 500 characters"
        )
    return value


def _reject_number(value: Any) -> Any:
    # Pas d'epoch Unix: une date ou une chaîne ISO-8601 uniquement
    if isinstance(value, (int, float)):
        raise PydanticCustomError("date_type", "Expected date, received number")
    return value


def as_utc(value: datetime) -> datetime:
    # Date sans fuseau = UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


TaskId = Annotated[str, AfterValidator(_check_task_id)]
TaskTitle = Annotated[str, AfterValidator(_check_title)]
TaskDescription = Annotated[str, AfterValidator(_check_description)]
Timestamp = Annotated[datetime, BeforeValidator(_reject_number), AfterValidator(as_utc)]


def is_task_status(value: Any) -> bool:
    return isinstance(value, str) and value in TASK_STATUSES


def is_priority(value: Any) -> bool:
    return isinstance(value, str) and value in PRIORITIES


# ============ SCHEMAS ============

class _TaskSchema(BaseModel):
    """Base commune: noms camelCase côté JSON, snake_case côté Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Task(_TaskSchema):
    """Tâche complète, telle que stockée dans le store."""

    id: TaskId
    title: TaskTitle
    description: TaskDescription
    status: TaskStatus
    priority: Priority
    due_date: Optional[Timestamp]
    created_at: Timestamp
    updated_at: Timestamp
    ai_generated: StrictBool
    original_prompt: Optional[str]

    @field_validator("updated_at")
    @classmethod
    def not_before_creation(cls, value: datetime, info: ValidationInfo) -> datetime:
        created_at = info.data.get("created_at")
        if created_at is not None and value < created_at:
            raise PydanticCustomError(
                "updated_before_created", "Updated date must not be earlier than created date"
            )
        return value


class TaskCreate(_TaskSchema):
    """Données fournies par l'appelant pour créer une tâche (sans id ni dates générées)."""

    title: TaskTitle
    description: TaskDescription
    status: TaskStatus
    priority: Priority
    due_date: Optional[Timestamp]
    ai_generated: StrictBool
    original_prompt: Optional[str]


class TaskUpdate(_TaskSchema):
    """Patch partiel: seul l'id est obligatoire.

    Un champ absent reste non défini; un null explicite est refusé pour les
    champs non nullables.
    """

    id: TaskId
    title: TaskTitle = None
    description: TaskDescription = None
    status: TaskStatus = None
    priority: Priority = None
    due_date: Optional[Timestamp] = None
    created_at: Timestamp = None
    updated_at: Timestamp = None
    ai_generated: StrictBool = None
    original_prompt: Optional[str] = None


class TaskQuery(_TaskSchema):
    """Filtres de consultation de la liste des tâches."""

    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    limit: Optional[int] = Field(None, ge=1, le=100)
    offset: Optional[int] = Field(None, ge=0)
