"""REST API adapter - HTTP client for task snapshots and moves."""

import asyncio
import logging

import requests

from dayboard.config import Config, load_config
from dayboard.core.containers import Board
from dayboard.core.reorder import FieldChanges
from dayboard.ports.task_store import PersistenceError

logger = logging.getLogger(__name__)


class HttpTaskStore:
    """
    Task server adapter.

    Implements TaskStore protocol. Blocking requests calls run in a worker
    thread so the event loop never waits on the network. No business logic -
    just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    def _request(self, method: str, endpoint: str, payload: dict | None = None) -> dict | list | None:
        """Make an API request, mapping transport, HTTP and decode errors to PersistenceError."""
        url = f"{self.config.api_base_url}{endpoint}"
        try:
            resp = self._session.request(
                method,
                url,
                json=payload,
                timeout=self.config.request_timeout,
            )
            resp.raise_for_status()
            if not resp.content:
                return None
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            # requests' JSONDecodeError subclasses ValueError
            raise PersistenceError(f"{method} {endpoint} failed: {e}") from e

    # Snapshot reads (synchronous)

    def fetch_tasks(self) -> dict:
        """Dated tasks, keyed by date."""
        return self._request("GET", "/tasks/work" if self.config.work_mode else "/tasks") or {}

    def fetch_graveyard(self) -> list:
        return self._request("GET", "/tasks/graveyard/work" if self.config.work_mode else "/tasks/graveyard") or []

    def fetch_board(self) -> Board:
        """Fetch the authoritative board from the server."""
        return Board.from_api(self.fetch_tasks(), self.fetch_graveyard())

    # Writes (async, TaskStore protocol)

    async def reorder(self, task_id: str, order: str, changes: FieldChanges) -> None:
        payload = {"order": order, **changes.to_api()}
        logger.debug(f"Reordering {task_id}: {payload}")
        await asyncio.to_thread(self._request, "PATCH", f"/tasks/{task_id}/reorder", payload)

    async def send_to_graveyard(self, task_id: str, origin_date: str) -> None:
        logger.debug(f"Sending {task_id} from {origin_date} to graveyard")
        await asyncio.to_thread(self._request, "PATCH", f"/tasks/{task_id}/graveyard")

    async def resurrect(self, task_id: str, target_date: str) -> None:
        logger.debug(f"Resurrecting {task_id} onto {target_date}")
        await asyncio.to_thread(self._request, "PATCH", f"/tasks/{task_id}/resurrect", {"date": target_date})

    async def delete(self, task_id: str) -> None:
        await asyncio.to_thread(self._request, "DELETE", f"/tasks/{task_id}")

    async def batch_reorder(self, moves: list[dict]) -> None:
        if not moves:
            return
        await asyncio.to_thread(self._request, "POST", "/tasks/batch/reorder", {"moves": moves})
