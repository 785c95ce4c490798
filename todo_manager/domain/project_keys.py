"""Normalization and validation of project keys and task codes.

A project key is 2-10 characters, uppercase letters and digits, starting with
a letter (``PROJ``, ``TASK``, ``FEAT2``). A task code is a key followed by a
dash and a sequence number (``PROJ-12``). Both are trimmed and upper-cased
before matching, so ``" proj "`` is accepted as ``PROJ``.
"""
from __future__ import annotations

import re

from .errors import InvalidInputError

PROJECT_KEY_RE = re.compile(r"[A-Z][A-Z0-9]{1,9}")
TASK_CODE_RE = re.compile(r"[A-Z][A-Z0-9]{1,9}-[0-9]+")


def validate_project_key(key: object) -> str:
    if not isinstance(key, str):
        raise InvalidInputError("project_key must be a string")
    normalized = key.strip().upper()
    if not PROJECT_KEY_RE.fullmatch(normalized):
        raise InvalidInputError(
            f"Invalid project_key {key!r}. Use 2-10 chars [A-Z0-9] starting with a letter, "
            "e.g. PROJ, TASK, FEAT"
        )
    return normalized


def validate_task_code(code: object) -> str:
    if not isinstance(code, str):
        raise InvalidInputError("code must be a string")
    normalized = code.strip().upper()
    if not TASK_CODE_RE.fullmatch(normalized):
        raise InvalidInputError(f"Invalid code {code!r}. Expected <PROJECTKEY>-<N>, e.g. PROJ-1")
    return normalized
