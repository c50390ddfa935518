# src/assignly/presentation/task_list/state.py

from __future__ import annotations

"""
Task list screen states.

Pure labels: the loader decides which one to publish, the renderer draws it.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Union

from ...tasks.task_models import Task, TaskStatus


class TaskFilter(StrEnum):
    ALL = "all"
    IN_PROCESS = "in_process"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    pass


@dataclass(frozen=True, slots=True)
class All:
    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class InProcess:
    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class Done:
    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class Error:
    message: str


TaskListState = Union[Idle, Loading, All, InProcess, Done, Error]


def populated(task_filter: TaskFilter, tasks: Iterable[Task]) -> All | InProcess | Done:
    """
    Build the populated state for a filter tab.

    Tasks are filtered by status for the in-process / done tabs; input order is kept.
    """
    items = tuple(tasks)
    if task_filter == TaskFilter.IN_PROCESS:
        return InProcess(tuple(t for t in items if t.status == TaskStatus.IN_PROCESS))
    if task_filter == TaskFilter.DONE:
        return Done(tuple(t for t in items if t.status == TaskStatus.DONE))
    return All(items)
