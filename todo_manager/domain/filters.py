from __future__ import annotations

from dataclasses import dataclass

from .enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskFilters:
    status: TaskStatus | str | None = None
    priority: TaskPriority | str | None = None
    project_key: str | None = None
    search: str | None = None
