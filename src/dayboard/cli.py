"""Dayboard CLI - drive the task board from the terminal."""

import asyncio
import json
import logging
import sys

import click

from .adapters.http_task_store import HttpTaskStore
from .config import load_config
from .coordinator import DragDropCoordinator
from .core.containers import GRAVEYARD, Board, ContainerId
from .core.tasks import CATEGORIES, STATES, Task
from .ports.task_store import PersistenceError


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(ctx: click.Context) -> tuple[HttpTaskStore, Board]:
    """Create the store and fetch the current board, exiting on failure."""
    store = HttpTaskStore(ctx.obj["config"])
    try:
        board = store.fetch_board()
    except PersistenceError as e:
        _fail(str(e))
    return store, board


def _run(operation) -> bool | None:
    """Run a coordinator operation inside an event loop and wait for its write."""

    async def runner():
        pending = operation()
        if pending is None:
            return None
        return await pending

    return asyncio.run(runner())


def _task_line(task: Task) -> str:
    order = task.order or "-"
    return f"  [{order:>6}] {task.text} ({task.id})"


@click.group()
@click.version_option(package_name="dayboard")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Dayboard - task board with drag-and-drop reordering."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING),
    )
    ctx.obj = {"config": config}


@main.command()
@click.option("--date", "-d", "target_date", default=None, help="Only show this date (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx, target_date: str | None, as_json: bool):
    """Show tasks grouped into containers."""
    _, board = _load(ctx)
    dates = [target_date] if target_date else sorted(board.tasks_by_date)

    if as_json:
        click.echo(
            json.dumps(
                {
                    str(container): [t.to_api() for t in tasks]
                    for day in dates
                    for container, tasks in board.containers_on(day).items()
                },
                indent=2,
            )
        )
        return

    shown = False
    for day in dates:
        containers = board.containers_on(day)
        if not containers:
            continue
        if shown:
            click.echo()
        click.echo(f"### {day}")
        for container, tasks in containers.items():
            click.echo(f"{container.category}/{container.state}  <{container}>")
            for task in tasks:
                click.echo(_task_line(task))
        shown = True

    if not shown:
        click.echo("No tasks.")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def graveyard(ctx, as_json: bool):
    """List graveyard tasks."""
    _, board = _load(ctx)
    tasks = board.tasks_for(GRAVEYARD)

    if as_json:
        click.echo(json.dumps([t.to_api() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("Graveyard is empty.")
        return

    for task in tasks:
        click.echo(f"† {task.text} ({task.id})")


@main.command()
@click.argument("task_id")
@click.argument("target_id")
@click.pass_context
def move(ctx, task_id: str, target_id: str):
    """Drag TASK_ID and drop it on TARGET_ID.

    TARGET_ID is another task (insert before it), a container id such as
    2024-12-16_work_active (append), or "graveyard".
    """
    store, board = _load(ctx)
    coordinator = DragDropCoordinator(
        board,
        store,
        on_recover=lambda: click.echo("Server rejected the move; run 'dayboard show' to see its copy.", err=True),
    )

    if coordinator.drag_start(task_id) is None:
        _fail(f"Task {task_id} not found")

    def drop():
        coordinator.drag_over(target_id)
        return coordinator.drag_end(target_id)

    result = _run(drop)
    if result is None:
        click.echo("Nothing to do.")
    elif result:
        found = board.locate(task_id)
        where = found.container if found else "?"
        click.echo(f"Moved {task_id} to {where}.")
    else:
        _fail(f"Move of {task_id} was not saved; the server copy is unchanged")


@main.command()
@click.argument("task_id")
@click.pass_context
def bury(ctx, task_id: str):
    """Send a dated task to the graveyard."""
    store, board = _load(ctx)
    found = board.locate(task_id)
    if not found or found.container is GRAVEYARD:
        _fail(f"Task {task_id} not found on any date")

    coordinator = DragDropCoordinator(board, store)
    if not _run(lambda: coordinator.send_to_graveyard(found.task.date, task_id)):
        _fail(f"Could not move {task_id} to the graveyard")
    click.echo(f"Buried {task_id}.")


@main.command()
@click.argument("task_id")
@click.argument("target_date")
@click.pass_context
def resurrect(ctx, task_id: str, target_date: str):
    """Bring a graveyard task back onto TARGET_DATE."""
    store, board = _load(ctx)
    coordinator = DragDropCoordinator(board, store)
    result = _run(lambda: coordinator.resurrect(task_id, target_date))
    if result is None:
        _fail(f"Task {task_id} is not in the graveyard")
    if not result:
        _fail(f"Could not resurrect {task_id}")
    click.echo(f"Resurrected {task_id} on {target_date}.")


@main.command()
@click.argument("task_id")
@click.pass_context
def delete(ctx, task_id: str):
    """Permanently delete a graveyard task."""
    store, board = _load(ctx)
    coordinator = DragDropCoordinator(board, store)
    result = _run(lambda: coordinator.delete_graveyard_task(task_id))
    if result is None:
        _fail(f"Task {task_id} is not in the graveyard")
    if not result:
        _fail(f"Could not delete {task_id}")
    click.echo(f"Deleted {task_id}.")


@main.command()
@click.argument("target_date")
@click.argument("category", type=click.Choice(CATEGORIES))
@click.argument("state", type=click.Choice(STATES))
@click.pass_context
def rebalance(ctx, target_date: str, category: str, state: str):
    """Regenerate short, evenly spread order keys for one container."""
    store, board = _load(ctx)
    container = ContainerId(target_date, category, state)
    coordinator = DragDropCoordinator(board, store)
    result = _run(lambda: coordinator.rebalance(container))
    if result is None:
        click.echo(f"{container} is empty.")
        return
    if not result:
        _fail(f"Rebalance of {container} was not saved")
    for task in board.tasks_for(container):
        click.echo(_task_line(task))


if __name__ == "__main__":
    main()
