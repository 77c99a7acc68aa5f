"""Task store interface."""

from typing import Protocol

from dayboard.core.reorder import FieldChanges


class PersistenceError(Exception):
    """Raised when a write to the task store fails."""

    pass


class TaskStore(Protocol):
    """Interface for persisting task moves to any backend.

    Every method raises PersistenceError on failure.
    """

    async def reorder(self, task_id: str, order: str, changes: FieldChanges) -> None:
        """Store a new order key plus any changed location fields."""
        ...

    async def send_to_graveyard(self, task_id: str, origin_date: str) -> None:
        """Move a task off its date into the graveyard."""
        ...

    async def resurrect(self, task_id: str, target_date: str) -> None:
        """Bring a graveyard task back onto a date."""
        ...

    async def delete(self, task_id: str) -> None:
        """Permanently delete a task."""
        ...

    async def batch_reorder(self, moves: list[dict]) -> None:
        """Apply several reorders at once (`{"id", "order", ...changes}` each)."""
        ...
