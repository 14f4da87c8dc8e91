"""Tâches de démonstration, créées via le store (donc validées)."""

from datetime import datetime, timezone
from typing import List

from kanban.schemas.task import Task
from kanban.services.task_store import TaskStore

SAMPLE_TASKS = [
    {
        "title": "Implement user authentication system",
        "description": "Design and develop login, registration, password reset and token management.",
        "status": "todo",
        "priority": "high",
        "due_date": datetime(2025, 8, 20, tzinfo=timezone.utc),
        "ai_generated": False,
        "original_prompt": None,
    },
    {
        "title": "Set up CI/CD pipeline",
        "description": "Automated testing, building and deployment with coverage reporting.",
        "status": "todo",
        "priority": "medium",
        "due_date": datetime(2025, 8, 25, tzinfo=timezone.utc),
        "ai_generated": True,
        "original_prompt": "Create a task for setting up continuous integration and deployment",
    },
    {
        "title": "Update project documentation",
        "description": "Review README, API docs and deployment guides.",
        "status": "todo",
        "priority": "low",
        "due_date": None,
        "ai_generated": False,
        "original_prompt": None,
    },
    {
        "title": "Design task board layout",
        "description": "Three responsive columns with drag and drop between them.",
        "status": "in-progress",
        "priority": "high",
        "due_date": datetime(2025, 8, 15, tzinfo=timezone.utc),
        "ai_generated": False,
        "original_prompt": None,
    },
    {
        "title": "Write unit tests for task validation",
        "description": "Cover title and description bounds, enums and date handling.",
        "status": "in-progress",
        "priority": "medium",
        "due_date": None,
        "ai_generated": True,
        "original_prompt": "Generate a task for testing the validation layer",
    },
    {
        "title": "Initialize project repository",
        "description": "Tooling, formatting and base dependencies.",
        "status": "done",
        "priority": "medium",
        "due_date": None,
        "ai_generated": False,
        "original_prompt": None,
    },
]


def load_sample_tasks(store: TaskStore) -> List[Task]:
    return [store.add_task(data) for data in SAMPLE_TASKS]
