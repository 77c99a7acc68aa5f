"""
Drag session state machine.

One DragController owns at most one live DragSession. Transitions are
synchronous and never touch persisted data; the controller only decides
*where* a drop landed. Turning that into a mutation is the reorder
resolver's job.

    IDLE -> DRAGGING -> (HOVERING)* -> RESOLVING -> IDLE
    DRAGGING/HOVERING --cancel--> IDLE
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .containers import GRAVEYARD, GRAVEYARD_ID, Board, Container, ContainerId, parse_container_id

logger = logging.getLogger(__name__)


class DragPhase(Enum):
    """Lifecycle phase of the current drag gesture."""

    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"
    RESOLVING = "resolving"


@dataclass(frozen=True)
class DragSource:
    """What was picked up, and where it was at drag start."""

    task_id: str
    container: Container
    index: int

    @property
    def from_graveyard(self) -> bool:
        return self.container is GRAVEYARD


@dataclass(frozen=True)
class DropTarget:
    """Container under the pointer, or the graveyard flag. Both empty means no target."""

    container: ContainerId | None = None
    over_graveyard: bool = False

    @property
    def is_empty(self) -> bool:
        return self.container is None and not self.over_graveyard


NO_TARGET = DropTarget()


@dataclass
class DragSession:
    source: DragSource
    target: DropTarget = field(default=NO_TARGET)
    phase: DragPhase = DragPhase.DRAGGING


@dataclass(frozen=True)
class Drop:
    """A completed drop, handed to the reorder resolver."""

    source: DragSource
    dropped_on: str
    target: DropTarget


def resolve_target(board: Board, target_id: str | None) -> DropTarget:
    """
    Resolve a hovered/dropped id into a DropTarget.

    The id may name the graveyard, a dated container, or a task (whose
    container is used). Unknown ids are treated as no target.
    """
    if target_id is None:
        return NO_TARGET
    if target_id == GRAVEYARD_ID:
        return DropTarget(over_graveyard=True)

    found = board.locate(target_id)
    if found and found.container is GRAVEYARD:
        return DropTarget(over_graveyard=True)

    container = parse_container_id(target_id)
    if container:
        return DropTarget(container=container)
    if found:
        return DropTarget(container=found.container)

    logger.debug(f"Ignoring unknown drop target {target_id!r}")
    return NO_TARGET


class DragController:
    """Owns the single active drag session and its transitions."""

    def __init__(self, board: Board):
        self.board = board
        self.session: DragSession | None = None

    @property
    def phase(self) -> DragPhase:
        return self.session.phase if self.session else DragPhase.IDLE

    @property
    def target(self) -> DropTarget:
        return self.session.target if self.session else NO_TARGET

    def is_drop_target(self, container: ContainerId) -> bool:
        """Whether `container` is currently highlighted as the drop target."""
        return self.target.container == container

    def start(self, task_id: str) -> DragSource | None:
        """Begin dragging a task. Ignored if a drag is already live or the task is unknown."""
        if self.session is not None:
            logger.warning(
                f"Drag start for {task_id} ignored: {self.session.source.task_id} is still being dragged"
            )
            return None

        found = self.board.locate(task_id)
        if not found:
            logger.warning(f"Could not find task for drag start: {task_id}")
            return None

        index = 0
        if found.container is not GRAVEYARD:
            index = self.board.index_of(task_id, found.container)

        source = DragSource(task_id=task_id, container=found.container, index=index)
        self.session = DragSession(source=source)
        return source

    def over(self, target_id: str | None) -> DropTarget:
        """Update the hovered target."""
        if self.session is None:
            return NO_TARGET
        self.session.target = resolve_target(self.board, target_id)
        self.session.phase = DragPhase.HOVERING
        return self.session.target

    def end(self, dropped_on: str | None) -> Drop | None:
        """
        Finish the gesture and report where it landed.

        The session is always cleared. Returns None when the drop is a no-op:
        no live session, nothing under the pointer, or dropped onto itself.
        """
        session = self.session
        if session is None:
            return None

        session.phase = DragPhase.RESOLVING
        target = resolve_target(self.board, dropped_on)
        session.target = target
        self.session = None

        if dropped_on is None or target.is_empty:
            return None
        if dropped_on == session.source.task_id:
            return None
        return Drop(source=session.source, dropped_on=dropped_on, target=target)

    def cancel(self) -> None:
        """Abandon the gesture."""
        self.session = None
