"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, replace

CATEGORIES = ("life", "work")
STATES = ("active", "completed", "failed")


@dataclass
class Task:
    """A dashboard task, living either on a date or in the graveyard."""

    id: str
    text: str
    date: str | None
    category: str = "life"
    state: str | None = None
    order: str | None = None
    completed: bool = False
    created_at: str = ""

    @property
    def in_graveyard(self) -> bool:
        return self.date is None

    def moved_to(
        self,
        date: str | None,
        category: str | None = None,
        state: str | None = None,
        order: str | None = None,
    ) -> "Task":
        """Copy of this task with new location fields; `completed` follows `state`."""
        new_state = state or task_state(self)
        return replace(
            self,
            date=date,
            category=category or task_category(self),
            state=new_state,
            order=order if order is not None else self.order,
            completed=new_state == "completed",
        )

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a REST API task payload."""
        return cls(
            id=str(data["id"]),
            text=data.get("text", ""),
            date=data.get("date") or None,
            category=data.get("category") or "life",
            state=data.get("state") or None,
            order=data.get("order") or None,
            completed=bool(data.get("completed", False)),
            created_at=data.get("createdAt", "") or "",
        )

    def to_api(self) -> dict:
        """Serialize to the REST API's camelCase shape."""
        return {
            "id": self.id,
            "text": self.text,
            "date": self.date,
            "category": self.category,
            "state": self.state,
            "order": self.order,
            "completed": self.completed,
            "createdAt": self.created_at,
        }


def task_category(task: Task) -> str:
    """Category with anything unrecognised read as "life"."""
    return "work" if task.category == "work" else "life"


def task_state(task: Task) -> str:
    """
    Effective state of a task.

    An explicit "completed"/"failed" state wins; otherwise legacy rows fall
    back to the `completed` flag, then to "active".
    """
    if task.state in ("completed", "failed"):
        return task.state
    return "completed" if task.completed else "active"


def sort_key(task: Task) -> tuple[bool, str, str, str]:
    """
    Display sort key within one container.

    Keyed tasks first by order key; equal keys fall back to creation time and
    id. Legacy tasks without a key sort last.
    """
    return (task.order is None, task.order or "", task.created_at, task.id)


def sort_by_order(tasks: list[Task]) -> list[Task]:
    """Sort tasks into on-screen order. Pure function - no I/O."""
    return sorted(tasks, key=sort_key)
