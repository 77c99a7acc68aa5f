"""Functional core - pure business logic with no I/O."""

from .tasks import Task, sort_by_order, sort_key, task_category, task_state
from .order_keys import INITIAL_KEY, key_after, key_before, key_between, key_for_index, keys_between
from .containers import (
    GRAVEYARD,
    GRAVEYARD_ID,
    Board,
    Container,
    ContainerId,
    Graveyard,
    Located,
    container_of,
    parse_container_id,
)
from .drag import DragController, DragPhase, DragSource, Drop, DropTarget
from .reorder import FieldChanges, GraveyardTransfer, Reorder, Resurrection, resolve_drop

__all__ = [
    # Tasks
    "Task",
    "sort_by_order",
    "sort_key",
    "task_category",
    "task_state",
    # Order keys
    "INITIAL_KEY",
    "key_after",
    "key_before",
    "key_between",
    "key_for_index",
    "keys_between",
    # Containers
    "GRAVEYARD",
    "GRAVEYARD_ID",
    "Board",
    "Container",
    "ContainerId",
    "Graveyard",
    "Located",
    "container_of",
    "parse_container_id",
    # Drag
    "DragController",
    "DragPhase",
    "DragSource",
    "Drop",
    "DropTarget",
    # Reorder
    "FieldChanges",
    "GraveyardTransfer",
    "Reorder",
    "Resurrection",
    "resolve_drop",
]
