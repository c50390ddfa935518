# src/assignly/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """Task lifecycle status as reported by the backend."""

    IN_PROCESS = "in_process"
    DONE = "done"

    @classmethod
    def from_api(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.IN_PROCESS
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.IN_PROCESS


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    status: TaskStatus
    created_at: float

    description: str = ""
    assignee_tag: str | None = None
