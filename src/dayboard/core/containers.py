"""Containers - partitions of the board by (date, category, state), plus the graveyard."""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from .tasks import CATEGORIES, STATES, Task, sort_by_order, task_category, task_state

logger = logging.getLogger(__name__)

GRAVEYARD_ID = "graveyard"


@dataclass(frozen=True)
class ContainerId:
    """Identity of a dated container."""

    date: str
    category: str
    state: str

    def __str__(self) -> str:
        return f"{self.date}_{self.category}_{self.state}"


class Graveyard:
    """The single dateless container for archived tasks."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __str__(self) -> str:
        return GRAVEYARD_ID

    def __repr__(self) -> str:
        return "GRAVEYARD"


GRAVEYARD = Graveyard()

Container = ContainerId | Graveyard


def parse_container_id(value: str) -> ContainerId | None:
    """
    Parse a boundary container id like "2024-12-16_life_active".

    Returns None for anything that is not a dated container id (task ids,
    the graveyard id, garbage).
    """
    parts = value.split("_")
    if len(parts) < 3 or "-" not in parts[0]:
        return None
    date_str, category, state = parts[0], parts[1], parts[2]
    if category not in CATEGORIES or state not in STATES:
        return None
    return ContainerId(date_str, category, state)


def container_of(task: Task) -> Container:
    """Derive the container a task currently lives in."""
    if task.date is None:
        return GRAVEYARD
    return ContainerId(task.date, task_category(task), task_state(task))


class Located(NamedTuple):
    task: Task
    container: Container


@dataclass
class Board:
    """
    Snapshot of all tasks: dated tasks keyed by date, plus the graveyard.

    The graveyard list is kept most-recent-first and is not sorted by key.
    """

    tasks_by_date: dict[str, list[Task]] = field(default_factory=dict)
    graveyard: list[Task] = field(default_factory=list)

    @classmethod
    def from_api(cls, tasks_by_date: dict, graveyard: list | None = None) -> "Board":
        """Build a board from REST payloads (`{date: [task, ...]}` and `[task, ...]`)."""
        return cls(
            tasks_by_date={
                day: [Task.from_api(t) for t in tasks] for day, tasks in tasks_by_date.items()
            },
            graveyard=[Task.from_api(t) for t in graveyard or []],
        )

    def tasks_in(self, date: str, category: str, state: str) -> list[Task]:
        """Tasks of one dated container, in display order."""
        return sort_by_order(
            [
                t
                for t in self.tasks_by_date.get(date, [])
                if task_category(t) == category and task_state(t) == state
            ]
        )

    def tasks_for(self, container: Container) -> list[Task]:
        if isinstance(container, Graveyard):
            return list(self.graveyard)
        return self.tasks_in(container.date, container.category, container.state)

    def containers_on(self, date: str) -> dict[ContainerId, list[Task]]:
        """All non-empty containers for a date, keyed by identity."""
        result: dict[ContainerId, list[Task]] = {}
        for category in CATEGORIES:
            for state in STATES:
                tasks = self.tasks_in(date, category, state)
                if tasks:
                    result[ContainerId(date, category, state)] = tasks
        return result

    def locate(self, task_id: str) -> Located | None:
        """Find a task by id, checking the graveyard before the dated lists."""
        for task in self.graveyard:
            if task.id == task_id:
                return Located(task, GRAVEYARD)
        for tasks in self.tasks_by_date.values():
            for task in tasks:
                if task.id == task_id:
                    return Located(task, container_of(task))
        return None

    def index_of(self, task_id: str, container: Container) -> int:
        """Position of a task within a container's display order, or -1."""
        for i, task in enumerate(self.tasks_for(container)):
            if task.id == task_id:
                return i
        return -1

    # Mutations used by the optimistic update coordinator

    def remove(self, task_id: str, date: str | None) -> Task | None:
        """Remove a task from a date list (or the graveyard when date is None)."""
        tasks = self.graveyard if date is None else self.tasks_by_date.get(date, [])
        for i, task in enumerate(tasks):
            if task.id == task_id:
                return tasks.pop(i)
        logger.warning(f"Task {task_id} not found under {date or GRAVEYARD_ID}")
        return None

    def append(self, task: Task) -> None:
        """Add a task to the end of its date list."""
        self.tasks_by_date.setdefault(task.date, []).append(task)

    def bury(self, task: Task) -> None:
        """Add a task to the front of the graveyard."""
        self.graveyard.insert(0, task)
