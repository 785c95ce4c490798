"""Error taxonomy for the task store.

Every failure raised by the store is a :class:`TaskError` tagged with an
:class:`ErrorKind`, so an outer layer can map ``exc.kind`` to its own codes
(400 for invalid input, 404 for a missing task) without inspecting messages.
"""
from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"


class TaskError(Exception):
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(TaskError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class NotFoundError(TaskError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, key: int | str) -> None:
        field = "code" if isinstance(key, str) else "id"
        super().__init__(f"Task {field}={key} not found")
        self.key = key
