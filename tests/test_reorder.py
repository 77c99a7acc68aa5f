"""Tests for the reorder resolver."""

import pytest

from dayboard.core.containers import ContainerId
from dayboard.core.drag import DragController
from dayboard.core.reorder import (
    FieldChanges,
    GraveyardTransfer,
    Reorder,
    Resurrection,
    diff_containers,
    order_for_insert,
    resolve_drop,
)

LIFE_ACTIVE = ContainerId("2024-01-01", "life", "active")


def drop(board, task_id, target_id):
    """Run a full gesture and resolve it."""
    controller = DragController(board)
    controller.start(task_id)
    controller.over(target_id)
    result = controller.end(target_id)
    return resolve_drop(board, result) if result else None


class TestOrdinaryReorder:
    def test_drop_before_sibling(self, board):
        move = drop(board, "A", "C")

        assert isinstance(move, Reorder)
        assert "m" < move.order < "t"
        assert move.changes == FieldChanges()
        assert move.source == move.target == LIFE_ACTIVE

    def test_drop_on_first_sibling_goes_to_head(self, board):
        move = drop(board, "C", "A")
        assert move.order < "g"

    def test_drop_on_own_container_appends(self, board):
        move = drop(board, "A", "2024-01-01_life_active")
        assert move.order > "t"

    def test_drop_onto_own_position_is_noop(self, board):
        # B already sits directly before C
        assert drop(board, "B", "C") is None

    def test_drop_last_task_on_own_container_is_noop(self, board):
        assert drop(board, "C", "2024-01-01_life_active") is None

    def test_cross_container_to_empty(self, board):
        move = drop(board, "A", "2024-01-02_work_completed")

        assert move.order == "V"
        assert move.changes == FieldChanges(date="2024-01-02", category="work", state="completed")
        assert move.target == ContainerId("2024-01-02", "work", "completed")

    def test_cross_container_appends_after_last(self, board):
        move = drop(board, "A", "2024-01-01_work_active")

        assert move.order > "m"
        assert move.changes == FieldChanges(category="work")

    def test_only_changed_fields_reported(self, board):
        move = drop(board, "A", "F")

        assert move.changes == FieldChanges(date="2024-01-02")
        assert move.changes.to_api() == {"date": "2024-01-02"}
        assert move.order < "V"

    def test_into_legacy_completed_container(self, board):
        move = drop(board, "B", "E")

        assert move.changes == FieldChanges(state="completed")
        assert move.order < "a"


class TestGraveyardBoundary:
    def test_to_graveyard(self, board):
        assert drop(board, "A", "graveyard") == GraveyardTransfer(task_id="A", origin_date="2024-01-01")

    def test_onto_graveyard_task(self, board):
        assert drop(board, "D", "G") == GraveyardTransfer(task_id="D", origin_date="2024-01-01")

    def test_resurrect_onto_container(self, board):
        assert drop(board, "G", "2024-01-03_work_active") == Resurrection(task_id="G", target_date="2024-01-03")

    def test_resurrect_onto_task(self, board):
        assert drop(board, "H", "F") == Resurrection(task_id="H", target_date="2024-01-02")

    def test_graveyard_to_graveyard_is_noop(self, board):
        assert drop(board, "G", "H") is None
        assert drop(board, "H", "graveyard") is None


class TestOrderForInsert:
    def test_empty(self):
        assert order_for_insert([], 0) == "V"

    def test_scenario_between(self, make_task):
        siblings = [make_task("B", order="m"), make_task("C", order="t")]
        assert order_for_insert(siblings, 1) == "p"

    def test_legacy_unkeyed_tail(self, make_task):
        siblings = [make_task("A", order="g"), make_task("L")]
        # Landing on the unkeyed task appends after the last keyed one
        assert order_for_insert(siblings, 1) == "q"

    def test_all_unkeyed(self, make_task):
        assert order_for_insert([make_task("L1"), make_task("L2")], 1) == "V"

    def test_duplicate_neighbours(self, make_task):
        siblings = [make_task("A", order="m"), make_task("B", order="m")]
        key = order_for_insert(siblings, 1)
        assert key < "m"

    def test_duplicate_neighbours_with_smaller_key(self, make_task):
        siblings = [make_task("Z", order="c"), make_task("A", order="m"), make_task("B", order="m")]
        key = order_for_insert(siblings, 2)
        assert "c" < key < "m"

    def test_duplicate_run_slots_ahead_of_run(self, make_task):
        siblings = [make_task(i, order=k) for i, k in (("Z", "c"), ("A", "m"), ("B", "m"), ("C", "m"))]
        assert order_for_insert(siblings, 3) == "h"
        assert order_for_insert(siblings[1:], 2) == "O"

    def test_head_and_tail(self, make_task):
        siblings = [make_task("A", order="g"), make_task("B", order="t")]
        assert order_for_insert(siblings, 0) == "L"
        assert order_for_insert(siblings, 2) == "w"


def test_diff_containers():
    source = ContainerId("2024-01-01", "life", "active")
    assert not diff_containers(source, source)
    assert diff_containers(source, ContainerId("2024-01-01", "life", "failed")) == FieldChanges(state="failed")


@pytest.mark.parametrize("task_id, target_id", [("A", "C"), ("C", "A"), ("B", "2024-01-01_life_active")])
def test_resolved_order_lands_at_drop_index(board, task_id, target_id):
    move = drop(board, task_id, target_id)
    task = board.locate(task_id).task
    task.order = move.order
    ordered = [t.id for t in board.tasks_in("2024-01-01", "life", "active")]

    if target_id in ordered:
        assert ordered.index(task_id) == ordered.index(target_id) - 1
    else:
        assert ordered[-1] == task_id
