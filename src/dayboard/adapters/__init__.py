"""Adapters - I/O implementations of ports."""

from .http_task_store import HttpTaskStore

__all__ = [
    "HttpTaskStore",
]
