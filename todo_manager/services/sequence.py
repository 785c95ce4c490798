from __future__ import annotations

from todo_manager.domain.project_keys import validate_project_key


class SequenceAllocator:
    """Issues ``<KEY>-<N>`` codes from an independent counter per project key.

    Counters only move forward: removing a task never gives its number back.
    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    def next_code(self, project_key: str) -> str:
        key = validate_project_key(project_key)
        value = self._counters.get(key, 0) + 1
        self._counters[key] = value
        return f"{key}-{value}"

    def peek(self, project_key: str) -> int:
        key = validate_project_key(project_key)
        return self._counters.get(key, 0)

    def keys(self) -> list[str]:
        return list(self._counters)
