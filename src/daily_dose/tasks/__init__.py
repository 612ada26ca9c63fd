# src/daily_dose/tasks/__init__.py

from .task_models import Task, TaskStatus
from .task_store import TaskStore

__all__ = ["Task", "TaskStatus", "TaskStore"]
