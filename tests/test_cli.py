"""Tests for the CLI commands against a mocked task store."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from dayboard.cli import main
from dayboard.config import Config
from dayboard.core.reorder import FieldChanges
from dayboard.ports.task_store import PersistenceError


@pytest.fixture
def store(board):
    store = MagicMock()
    store.fetch_board.return_value = board
    store.reorder = AsyncMock()
    store.send_to_graveyard = AsyncMock()
    store.resurrect = AsyncMock()
    store.delete = AsyncMock()
    store.batch_reorder = AsyncMock()
    return store


@pytest.fixture
def invoke(store):
    runner = CliRunner()

    def run(*args):
        with patch("dayboard.cli.HttpTaskStore", return_value=store), patch(
            "dayboard.cli.load_config", return_value=Config()
        ):
            return runner.invoke(main, list(args))

    return run


class TestShow:
    def test_lists_containers(self, invoke):
        result = invoke("show", "--date", "2024-01-01")

        assert result.exit_code == 0
        assert "### 2024-01-01" in result.output
        assert "<2024-01-01_life_active>" in result.output
        lines = result.output.splitlines()
        positions = [next(i for i, line in enumerate(lines) if f"({tid})" in line) for tid in "ABC"]
        assert positions == sorted(positions)

    def test_json(self, invoke):
        result = invoke("show", "--json")

        data = json.loads(result.output)
        assert [t["id"] for t in data["2024-01-01_life_active"]] == ["A", "B", "C"]
        assert [t["id"] for t in data["2024-01-02_life_active"]] == ["F"]

    def test_empty_date(self, invoke):
        result = invoke("show", "--date", "2030-01-01")
        assert "No tasks." in result.output

    def test_fetch_failure(self, invoke, store):
        store.fetch_board.side_effect = PersistenceError("GET /tasks failed: refused")
        result = invoke("show")

        assert result.exit_code == 1
        assert "refused" in result.output


class TestGraveyard:
    def test_lists_tasks(self, invoke):
        result = invoke("graveyard")
        assert "Task G (G)" in result.output
        assert "Task H (H)" in result.output

    def test_empty(self, invoke, board):
        board.graveyard.clear()
        assert "Graveyard is empty." in invoke("graveyard").output


class TestMove:
    def test_reorder(self, invoke, store):
        result = invoke("move", "A", "C")

        assert result.exit_code == 0
        assert "Moved A to 2024-01-01_life_active." in result.output
        store.reorder.assert_awaited_once_with("A", "p", FieldChanges())

    def test_to_graveyard(self, invoke, store):
        result = invoke("move", "A", "graveyard")

        assert "Moved A to graveyard." in result.output
        store.send_to_graveyard.assert_awaited_once_with("A", "2024-01-01")

    def test_noop(self, invoke, store):
        result = invoke("move", "B", "C")

        assert result.exit_code == 0
        assert "Nothing to do." in result.output
        store.reorder.assert_not_called()

    def test_unknown_task(self, invoke):
        result = invoke("move", "nope", "C")

        assert result.exit_code == 1
        assert "Task nope not found" in result.output

    def test_persist_failure(self, invoke, store):
        store.reorder.side_effect = PersistenceError("500")
        result = invoke("move", "A", "C")

        assert result.exit_code == 1
        assert "was not saved" in result.output
        store.reorder.assert_awaited_once()


class TestGraveyardCommands:
    def test_bury(self, invoke, store):
        result = invoke("bury", "D")

        assert result.exit_code == 0
        store.send_to_graveyard.assert_awaited_once_with("D", "2024-01-01")

    def test_bury_graveyard_task(self, invoke):
        assert invoke("bury", "G").exit_code == 1

    def test_resurrect(self, invoke, store):
        result = invoke("resurrect", "G", "2024-01-09")

        assert result.exit_code == 0
        assert "Resurrected G on 2024-01-09." in result.output
        store.resurrect.assert_awaited_once_with("G", "2024-01-09")

    def test_resurrect_failure(self, invoke, store):
        store.resurrect.side_effect = PersistenceError("offline")
        assert invoke("resurrect", "G", "2024-01-09").exit_code == 1

    def test_resurrect_dated_task(self, invoke):
        result = invoke("resurrect", "A", "2024-01-09")
        assert "not in the graveyard" in result.output

    def test_delete(self, invoke, store):
        assert invoke("delete", "H").exit_code == 0
        store.delete.assert_awaited_once_with("H")


class TestRebalance:
    def test_rebalance(self, invoke, store):
        result = invoke("rebalance", "2024-01-01", "life", "active")

        assert result.exit_code == 0
        store.batch_reorder.assert_awaited_once_with(
            [{"id": "A", "order": "F"}, {"id": "B", "order": "V"}, {"id": "C", "order": "k"}]
        )

    def test_empty(self, invoke, store):
        result = invoke("rebalance", "2030-01-01", "work", "failed")

        assert "is empty" in result.output
        store.batch_reorder.assert_not_called()

    def test_bad_state(self, invoke):
        assert invoke("rebalance", "2024-01-01", "life", "sleeping").exit_code == 2
