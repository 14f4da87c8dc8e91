from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from typing import Any, Dict, Optional

from kanban.core.board import get_store
from kanban.schemas.common import ApiResponse
from kanban.schemas.task import Task
from kanban.services.task_store import TaskStore

router = APIRouter(prefix="/tasks")

# Les handlers sont async: toutes les opérations du store s'exécutent
# séquentiellement sur la boucle d'événements


def _serialize(task: Task) -> Dict[str, Any]:
    return task.model_dump(mode="json", by_alias=True)


def _envelope(data: Any) -> Dict[str, Any]:
    return ApiResponse(data=data).model_dump()


@router.get("")
async def list_tasks(
    store: TaskStore = Depends(get_store),
    status_filter: Optional[str] = Query(None, alias="status"),
    priority_filter: Optional[str] = Query(None, alias="priority"),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
):
    filters = {
        "status": status_filter,
        "priority": priority_filter,
        "limit": limit,
        "offset": offset,
    }
    tasks = store.query_tasks(**{k: v for k, v in filters.items() if v is not None})
    return _envelope([_serialize(task) for task in tasks])


@router.get("/board")
async def board(store: TaskStore = Depends(get_store)):
    # Colonnes du tableau, recalculées depuis la collection
    columns = store.state.columns()
    return _envelope({s: [_serialize(task) for task in tasks] for s, tasks in columns.items()})


@router.get("/{task_id}")
async def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    task = store.get_task(task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return _envelope(_serialize(task))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: Dict[str, Any] = Body(...),
    store: TaskStore = Depends(get_store),
):
    task = store.add_task(task_data)
    return _envelope(_serialize(task))


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    task_data: Dict[str, Any] = Body(...),
    store: TaskStore = Depends(get_store),
):
    task = store.update_task(task_id, task_data)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return _envelope(_serialize(task))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    # Idempotent: 204 même si la tâche n'existe plus
    store.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
