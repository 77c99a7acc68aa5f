"""Shared fixtures: a small board spanning two dates and the graveyard."""

import pytest

from dayboard.core.containers import Board
from dayboard.core.tasks import Task


@pytest.fixture
def make_task():
    def factory(id, order=None, date="2024-01-01", category="life", state="active", **kwargs):
        kwargs.setdefault("text", f"Task {id}")
        kwargs.setdefault("created_at", "2024-01-01T09:00:00Z")
        kwargs.setdefault("completed", state == "completed")
        return Task(id=id, date=date, category=category, state=state, order=order, **kwargs)

    return factory


@pytest.fixture
def board(make_task):
    """
    2024-01-01  life/active:      A(g) B(m) C(t)
                work/active:      D(m)
                life/completed:   E(a)  (legacy: no state, completed flag only)
    2024-01-02  life/active:      F(V)
    graveyard:                    G, H
    """
    legacy = make_task("E", order="a", state=None, completed=True)
    return Board(
        tasks_by_date={
            "2024-01-01": [
                make_task("C", order="t"),
                make_task("A", order="g"),
                make_task("D", order="m", category="work"),
                legacy,
                make_task("B", order="m"),
            ],
            "2024-01-02": [make_task("F", order="V", date="2024-01-02")],
        },
        graveyard=[
            make_task("G", order="k", date=None),
            make_task("H", date=None),
        ],
    )
