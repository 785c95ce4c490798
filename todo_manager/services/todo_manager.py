from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from todo_manager.config import SETTINGS
from todo_manager.domain.entities import TaskEntity, utcnow
from todo_manager.domain.enums import TaskPriority, TaskStatus
from todo_manager.domain.errors import InvalidInputError, NotFoundError
from todo_manager.domain.filters import TaskFilters
from todo_manager.domain.project_keys import validate_project_key, validate_task_code

from .sequence import SequenceAllocator

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "priority")
CREATE_FIELDS = (*UPDATABLE_FIELDS, "project_key")


class TodoManager:
    """In-memory task store with per-project sequential codes.

    Tasks are kept in insertion order. Ids start at 1 and are never reused,
    even after a task is removed; the same holds for code numbers within a
    project key. Every public method either succeeds completely or raises
    ``InvalidInputError`` / ``NotFoundError`` without touching state.
    """

    def __init__(self, default_project_key: str | None = None) -> None:
        if default_project_key is None:
            default_project_key = SETTINGS.default_project_key
        self._default_project_key = validate_project_key(default_project_key)
        self._tasks: dict[int, TaskEntity] = {}
        self._next_id = 1
        self._sequences = SequenceAllocator()

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return _is_task_id(task_id) and task_id in self._tasks

    @property
    def default_project_key(self) -> str:
        return self._default_project_key

    def create_task(self, data: Mapping[str, Any]) -> TaskEntity:
        if not isinstance(data, Mapping):
            raise InvalidInputError("Task payload must be a mapping")
        unsupported = [key for key in data if key not in CREATE_FIELDS]
        if unsupported:
            raise InvalidInputError(
                f"Unknown task field(s) {', '.join(map(repr, unsupported))}; "
                f"allowed fields: {', '.join(CREATE_FIELDS)}"
            )
        title = _parse_title(data.get("title"))
        description = _parse_description(data.get("description"))
        priority = data.get("priority")
        priority = TaskPriority.MEDIUM if priority is None else _parse_priority(priority)
        project_key = data.get("project_key")
        project_key = validate_project_key(
            self._default_project_key if project_key is None else project_key
        )

        now = utcnow()
        task = TaskEntity(
            id=self._next_id,
            code=self._sequences.next_code(project_key),
            title=title,
            description=description,
            status=TaskStatus.TODO,
            priority=priority,
            created_at=now,
            updated_at=now,
            completed_at=None,
        )
        self._next_id += 1
        self._tasks[task.id] = task
        logger.info("Created task %s (id=%s)", task.code, task.id)
        return task

    def list_tasks(self, filters: TaskFilters | None = None) -> list[TaskEntity]:
        tasks = list(self._tasks.values())
        if filters is None:
            return tasks
        return _apply_filters(tasks, filters)

    def get_task(self, task_id: int) -> TaskEntity:
        _check_task_id(task_id)
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def find_by_code(self, code: str) -> TaskEntity:
        normalized = validate_task_code(code)
        for task in self._tasks.values():
            if task.code == normalized:
                return task
        raise NotFoundError(normalized)

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> TaskEntity:
        task = self.get_task(task_id)
        if not isinstance(changes, Mapping):
            raise InvalidInputError("Changes must be a mapping")
        unsupported = [key for key in changes if key not in UPDATABLE_FIELDS]
        if unsupported:
            raise InvalidInputError(
                f"Cannot update {', '.join(map(repr, unsupported))}; "
                f"allowed fields: {', '.join(UPDATABLE_FIELDS)}. Use change_status for status"
            )

        normalized: dict[str, Any] = {}
        if changes.get("title") is not None:
            normalized["title"] = _parse_title(changes["title"])
        if changes.get("description") is not None:
            normalized["description"] = _parse_description(changes["description"])
        if changes.get("priority") is not None:
            normalized["priority"] = _parse_priority(changes["priority"])

        updated = replace(task, **normalized, updated_at=utcnow())
        self._tasks[task.id] = updated
        logger.debug("Updated task %s fields=%s", updated.code, sorted(normalized))
        return updated

    def change_status(self, task_id: int, new_status: TaskStatus | str) -> TaskEntity:
        task = self.get_task(task_id)
        status = _parse_status(new_status)
        now = utcnow()
        updated = replace(
            task,
            status=status,
            completed_at=now if status == TaskStatus.DONE else None,
            updated_at=now,
        )
        self._tasks[task.id] = updated
        logger.info("Task %s status %s -> %s", task.code, task.status.value, status.value)
        return updated

    def remove_task(self, task_id: int) -> None:
        _check_task_id(task_id)
        task = self._tasks.pop(task_id, None)
        if task is None:
            raise NotFoundError(task_id)
        logger.info("Removed task %s (id=%s)", task.code, task.id)

    def filter_by_status(self, status: TaskStatus | str) -> list[TaskEntity]:
        return self.list_tasks(TaskFilters(status=_parse_status(status)))

    def filter_by_priority(self, priority: TaskPriority | str) -> list[TaskEntity]:
        return self.list_tasks(TaskFilters(priority=_parse_priority(priority)))

    def filter_by_project(self, project_key: str) -> list[TaskEntity]:
        return self.list_tasks(TaskFilters(project_key=validate_project_key(project_key)))

    def search_by_title(self, query: str) -> list[TaskEntity]:
        return self.list_tasks(TaskFilters(search=_parse_query(query)))

    def count_by_status(self) -> dict[str, int]:
        counts = {status.value: 0 for status in TaskStatus}
        for task in self._tasks.values():
            counts[task.status.value] += 1
        return counts

    def peek_sequence(self, project_key: str) -> int:
        return self._sequences.peek(project_key)

    def project_keys(self) -> list[str]:
        return self._sequences.keys()


def _apply_filters(tasks: list[TaskEntity], filters: TaskFilters) -> list[TaskEntity]:
    if filters.status is not None:
        status = _parse_status(filters.status)
        tasks = [task for task in tasks if task.status == status]
    if filters.priority is not None:
        priority = _parse_priority(filters.priority)
        tasks = [task for task in tasks if task.priority == priority]
    if filters.project_key is not None:
        project_key = validate_project_key(filters.project_key)
        tasks = [task for task in tasks if task.project_key == project_key]
    if filters.search is not None:
        query = _parse_query(filters.search).casefold()
        tasks = [task for task in tasks if query in task.title.casefold()]
    return tasks


def _is_task_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_task_id(value: object) -> None:
    if not _is_task_id(value):
        raise InvalidInputError(f"Task id must be an integer, got {value!r}")


def _parse_title(value: object) -> str:
    title = value.strip() if isinstance(value, str) else ""
    if not title:
        raise InvalidInputError("title is required and must be a non-empty string")
    return title


def _parse_description(value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInputError("description must be a string")
    return value


def _parse_query(value: object) -> str:
    query = value.strip() if isinstance(value, str) else ""
    if not query:
        raise InvalidInputError("Search query must be a non-empty string")
    return query


def _parse_status(value: object) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid status {value!r}. Use: {' | '.join(TaskStatus)}"
        ) from None


def _parse_priority(value: object) -> TaskPriority:
    try:
        return TaskPriority(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid priority {value!r}. Use: {' | '.join(TaskPriority)}"
        ) from None
