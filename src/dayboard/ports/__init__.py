"""Ports - interfaces/protocols for external dependencies."""

from .task_store import PersistenceError, TaskStore

__all__ = [
    "PersistenceError",
    "TaskStore",
]
