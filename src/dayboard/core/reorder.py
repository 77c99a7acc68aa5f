"""Reorder resolver - turns a drop into a concrete move."""

import logging
from dataclasses import dataclass, field

from .containers import GRAVEYARD, Board, ContainerId, parse_container_id
from .drag import Drop
from .order_keys import key_for_index
from .tasks import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldChanges:
    """Location fields that differ between source and target. None = unchanged."""

    date: str | None = None
    category: str | None = None
    state: str | None = None

    def __bool__(self) -> bool:
        return any(v is not None for v in (self.date, self.category, self.state))

    def to_api(self) -> dict:
        return {k: v for k, v in vars(self).items() if v is not None}


@dataclass(frozen=True)
class GraveyardTransfer:
    task_id: str
    origin_date: str


@dataclass(frozen=True)
class Resurrection:
    task_id: str
    target_date: str


@dataclass(frozen=True)
class Reorder:
    task_id: str
    order: str
    source: ContainerId
    target: ContainerId
    changes: FieldChanges = field(default_factory=FieldChanges)


Move = GraveyardTransfer | Resurrection | Reorder


def diff_containers(source: ContainerId, target: ContainerId) -> FieldChanges:
    """Only the fields that actually change are included."""
    return FieldChanges(
        date=target.date if target.date != source.date else None,
        category=target.category if target.category != source.category else None,
        state=target.state if target.state != source.state else None,
    )


def order_for_insert(siblings: list[Task], index: int) -> str:
    """
    New key for inserting before `siblings[index]` (or at the end).

    `siblings` is the target container in display order, without the dragged
    task. Unkeyed legacy tasks sort last, so an index inside that tail
    appends after the last keyed sibling.
    """
    keys = [t.order for t in siblings if t.order is not None]
    if 0 < index < len(keys) and keys[index - 1] >= keys[index]:
        # Duplicate keys from corrupted data: slot in ahead of the whole run.
        below = [k for k in keys[:index] if k < keys[index]]
        keys, index = below + keys[index:], len(below)
    return key_for_index(keys, index)


def _resurrection_date(board: Board, drop: Drop) -> str | None:
    container = parse_container_id(drop.dropped_on)
    if container:
        return container.date
    found = board.locate(drop.dropped_on)
    if found and found.container is not GRAVEYARD:
        return found.task.date
    return drop.target.container.date if drop.target.container else None


def resolve_drop(board: Board, drop: Drop) -> Move | None:
    """
    Decide what a drop means. Returns None for a no-op.

    Cases, in order: onto the graveyard, out of the graveyard, within the
    graveyard, and an ordinary (possibly cross-container) reorder.
    """
    source = drop.source
    task_id = source.task_id

    if not source.from_graveyard and drop.target.over_graveyard:
        return GraveyardTransfer(task_id=task_id, origin_date=source.container.date)

    if source.from_graveyard and not drop.target.over_graveyard:
        target_date = _resurrection_date(board, drop)
        if target_date is None:
            return None
        return Resurrection(task_id=task_id, target_date=target_date)

    if source.from_graveyard:
        return None

    found = board.locate(task_id)
    if not found:
        logger.warning(f"Dragged task {task_id} vanished before drop")
        return None

    target = drop.target.container
    siblings = [t for t in board.tasks_for(target) if t.id != task_id]

    index = len(siblings)
    if parse_container_id(drop.dropped_on) is None:
        # Dropped on a task: insert before it.
        for i, t in enumerate(siblings):
            if t.id == drop.dropped_on:
                index = i
                break
        else:
            logger.warning(f"Could not find drop target: {drop.dropped_on}")
            return None

    changes = diff_containers(source.container, target)
    if not changes and index == source.index:
        return None

    new_order = order_for_insert(siblings, index)
    if not changes and new_order == found.task.order:
        return None

    return Reorder(
        task_id=task_id,
        order=new_order,
        source=source.container,
        target=target,
        changes=changes,
    )
