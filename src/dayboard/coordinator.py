"""Optimistic update coordinator - shared layer between input events and the task store.

Every operation mutates the in-memory board synchronously, then schedules the
store write on the running event loop and returns the scheduled asyncio.Task
(True on success, False on failure). Callers may await it; the board never
waits for it.

Failure policy differs by operation: ordinary reorders and rebalances ask the
owner to resync via `on_recover`, while graveyard operations undo their exact
local change.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine

from .core.containers import Board, ContainerId
from .core.drag import DragController, DragSource, DropTarget
from .core.order_keys import keys_between
from .core.reorder import GraveyardTransfer, Reorder, Resurrection, resolve_drop
from .core.tasks import Task
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)


class DragDropCoordinator:
    """Applies task moves optimistically and persists them in the background."""

    def __init__(
        self,
        board: Board,
        store: TaskStore,
        on_recover: Callable[[], None] | None = None,
    ):
        self.board = board
        self.store = store
        self.on_recover = on_recover
        self.drag = DragController(board)
        self._pending: set[asyncio.Task] = set()

    def _schedule(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait for every in-flight store write to settle."""
        while self._pending:
            await asyncio.gather(*self._pending)

    def _recover(self) -> None:
        if self.on_recover:
            self.on_recover()

    # ============== Input events ==============

    def drag_start(self, task_id: str) -> DragSource | None:
        return self.drag.start(task_id)

    def drag_over(self, target_id: str | None) -> DropTarget:
        return self.drag.over(target_id)

    def drag_cancel(self) -> None:
        self.drag.cancel()

    def drag_end(self, dropped_on: str | None) -> asyncio.Task | None:
        """Resolve the drop, apply it locally, and schedule persistence. None means no-op."""
        drop = self.drag.end(dropped_on)
        if drop is None:
            return None

        move = resolve_drop(self.board, drop)
        match move:
            case GraveyardTransfer(task_id=task_id, origin_date=origin_date):
                return self.send_to_graveyard(origin_date, task_id)
            case Resurrection(task_id=task_id, target_date=target_date):
                return self.resurrect(task_id, target_date)
            case Reorder():
                return self.apply_reorder(move)
        return None

    # ============== Ordinary reorder ==============

    def apply_reorder(self, move: Reorder) -> asyncio.Task | None:
        """Move the task between in-memory containers and persist the new key."""
        task = self.board.remove(move.task_id, move.source.date)
        if task is None:
            return None

        target = move.target
        self.board.append(task.moved_to(target.date, target.category, target.state, move.order))
        return self._schedule(self._persist_reorder(move))

    async def _persist_reorder(self, move: Reorder) -> bool:
        try:
            await self.store.reorder(move.task_id, move.order, move.changes)
        except Exception as e:
            # No local inverse: a cross-container move has no single obvious undo.
            logger.error(f"Failed to reorder task {move.task_id}: {e}")
            self._recover()
            return False
        return True

    # ============== Graveyard ==============

    def send_to_graveyard(self, origin_date: str, task_id: str) -> asyncio.Task | None:
        """Move a dated task to the front of the graveyard."""
        original = self.board.remove(task_id, origin_date)
        if original is None:
            return None

        self.board.bury(original.moved_to(None, state="active"))
        return self._schedule(self._persist_burial(original))

    async def _persist_burial(self, original: Task) -> bool:
        try:
            await self.store.send_to_graveyard(original.id, original.date)
        except Exception as e:
            logger.error(f"Failed to graveyard task {original.id}: {e}")
            # Only undo if the task has not moved again since
            if self.board.remove(original.id, None) is not None:
                self.board.append(original)
            return False
        return True

    def resurrect(self, task_id: str, target_date: str) -> asyncio.Task | None:
        """Bring a graveyard task back as an active task at the end of a date."""
        original = self.board.remove(task_id, None)
        if original is None:
            return None

        self.board.append(original.moved_to(target_date, state="active"))
        return self._schedule(self._persist_resurrection(original, target_date))

    async def _persist_resurrection(self, original: Task, target_date: str) -> bool:
        try:
            await self.store.resurrect(original.id, target_date)
        except Exception as e:
            logger.error(f"Failed to resurrect task {original.id}: {e}")
            if self.board.remove(original.id, target_date) is not None:
                self.board.bury(original)
            return False
        return True

    def delete_graveyard_task(self, task_id: str) -> asyncio.Task | None:
        """Permanently delete a graveyard task."""
        original = self.board.remove(task_id, None)
        if original is None:
            return None
        return self._schedule(self._persist_deletion(original))

    async def _persist_deletion(self, original: Task) -> bool:
        try:
            await self.store.delete(original.id)
        except Exception as e:
            logger.error(f"Failed to delete graveyard task {original.id}: {e}")
            if self.board.locate(original.id) is None:
                self.board.bury(original)
            return False
        return True

    # ============== Rebalance ==============

    def rebalance(self, container: ContainerId) -> asyncio.Task | None:
        """
        Give every task in a container a fresh, evenly spread key.

        Display order is preserved (including tiebreaks and unkeyed legacy
        tasks, which get real keys). Useful once keys have grown long from
        repeated subdivision.
        """
        tasks = self.board.tasks_for(container)
        if not tasks:
            return None

        moves = []
        for task, key in zip(tasks, keys_between(None, None, len(tasks))):
            task.order = key
            moves.append({"id": task.id, "order": key})

        logger.info(f"Rebalancing {len(moves)} tasks in {container}")
        return self._schedule(self._persist_rebalance(moves))

    async def _persist_rebalance(self, moves: list[dict]) -> bool:
        try:
            await self.store.batch_reorder(moves)
        except Exception as e:
            logger.error(f"Failed to rebalance {len(moves)} tasks: {e}")
            self._recover()
            return False
        return True
