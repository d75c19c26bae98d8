# cli/core/tracker.py
import itertools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .api import ApiClient, api_list_projects, api_update_project, api_update_projects_order
from .config import TRACKER_WORKERS
from .errors import PortfoliumError

logger = logging.getLogger(__name__)

PROJECT_STATUSES = ("ideation", "researching", "planning", "in-progress", "completed", "on-hold")

STATUS_TITLES = {
    "ideation": "Ideation",
    "researching": "Researching",
    "planning": "Planning",
    "in-progress": "In Progress",
    "completed": "Completed",
    "on-hold": "On Hold",
}

Notifier = Callable[[str, str], None]


def _log_notification(level: str, message: str) -> None:
    if level == "error":
        logger.error(message)
    else:
        logger.info(message)


@dataclass
class PendingMove:
    """
    One optimistic write waiting for the server. On success it is discarded,
    on failure its inverse is applied.
    """
    id: int
    project_id: int
    prior_status: str
    new_status: str
    prior_orders: Dict[int, int] = field(default_factory=dict)
    new_orders: Dict[int, int] = field(default_factory=dict)
    column_ids: List[int] = field(default_factory=list)
    prior_owner: Optional[int] = None

    @property
    def is_reorder(self) -> bool:
        return self.prior_status == self.new_status


class ProjectBoard:
    """
    Kanban view of the user's projects, grouped by status.

    Moves are applied to the local board at once and sent to the server on a
    worker thread. Each move is tracked by its own PendingMove, so concurrent
    moves of different projects commit or roll back independently.
    """

    def __init__(self, client: ApiClient, notify: Optional[Notifier] = None, executor: Optional[ThreadPoolExecutor] = None):
        self.client = client
        self.notify = notify or _log_notification
        self._executor = executor or ThreadPoolExecutor(max_workers=TRACKER_WORKERS, thread_name_prefix="tracker")
        self._lock = threading.RLock()
        self._projects: Dict[int, dict] = {}
        self._sequence: Dict[int, int] = {}
        self._pending: Dict[int, PendingMove] = {}
        # project id -> id of the move whose status the board currently shows
        self._owners: Dict[int, int] = {}
        self._futures: List[Future] = []
        self._move_ids = itertools.count(1)

    # ---------- board state ----------

    def load(self, projects: Optional[List[dict]] = None) -> None:
        """
        Replace the board with the given projects, or fetch them from the server.
        """
        if projects is None:
            projects = api_list_projects(self.client)
        with self._lock:
            self._projects = {p["id"]: dict(p) for p in projects}
            # Server order is the tie-breaker between equal "order" values
            self._sequence = {p["id"]: index for index, p in enumerate(projects)}
            self._pending.clear()
            self._owners.clear()

    def project(self, project_id: int) -> dict:
        with self._lock:
            return dict(self._projects[project_id])

    def _column(self, status: str) -> List[dict]:
        cards = [p for p in self._projects.values() if p.get("status") == status and not p.get("archived")]
        return sorted(cards, key=lambda p: (p.get("order", 0), self._sequence.get(p["id"], 0)))

    def columns(self) -> Dict[str, List[dict]]:
        with self._lock:
            return {status: [dict(p) for p in self._column(status)] for status in PROJECT_STATUSES}

    def locate(self, project_id: int) -> tuple:
        """
        (status, index) of a card on the board.
        """
        with self._lock:
            project = self._projects[project_id]
            status = project["status"]
            ids = [p["id"] for p in self._column(status)]
            return status, ids.index(project_id)

    def pending(self) -> List[PendingMove]:
        with self._lock:
            return list(self._pending.values())

    # ---------- moves ----------

    def move_project(self, project_id: int, from_status: str, to_status: str, from_index: int, to_index: int) -> Optional[Future]:
        """
        Move a card. Returns a future resolving to True (committed) or False
        (rolled back), or None when the card was dropped where it started.
        """
        if from_status == to_status and from_index == to_index:
            return None
        for status in (from_status, to_status):
            if status not in PROJECT_STATUSES:
                raise ValueError(f"Unknown project status: {status}")

        with self._lock:
            if project_id not in self._projects:
                raise KeyError(project_id)
            project = self._projects[project_id]
            if project["status"] != from_status:
                raise ValueError(f"Project {project_id} is not in column {from_status}")

            move = PendingMove(
                id=next(self._move_ids),
                project_id=project_id,
                prior_status=from_status,
                new_status=to_status,
            )
            if move.is_reorder:
                column = self._column(from_status)
                ids = [p["id"] for p in column]
                ids.remove(project_id)
                ids.insert(max(0, min(to_index, len(ids))), project_id)
                move.prior_orders = {p["id"]: p.get("order", 0) for p in column}
                move.new_orders = {pid: index for index, pid in enumerate(ids)}
                move.column_ids = ids
                for pid, order in move.new_orders.items():
                    self._projects[pid]["order"] = order
            else:
                move.prior_owner = self._owners.get(project_id)
                self._owners[project_id] = move.id
                project["status"] = to_status

            self._pending[move.id] = move
            logger.debug("Move %s: project %s %s -> %s", move.id, project_id, from_status, to_status)

        future = self._executor.submit(self._commit, move)
        with self._lock:
            self._futures.append(future)
        return future

    def _commit(self, move: PendingMove) -> bool:
        try:
            if move.is_reorder:
                api_update_projects_order(self.client, move.column_ids)
            else:
                api_update_project(self.client, move.project_id, {"status": move.new_status})
        except PortfoliumError as exc:
            logger.warning("Move %s failed: %s", move.id, exc)
            self._rollback(move)
            what = "order" if move.is_reorder else "status"
            self.notify("error", f"Failed to update project {what}: {exc}")
            return False
        except Exception:
            logger.exception("Move %s failed unexpectedly", move.id)
            self._rollback(move)
            what = "order" if move.is_reorder else "status"
            self.notify("error", f"Failed to update project {what}")
            return False

        with self._lock:
            self._pending.pop(move.id, None)
        self.notify("success", "Project order updated successfully" if move.is_reorder else "Project status updated successfully")
        return True

    def _rollback(self, move: PendingMove) -> None:
        with self._lock:
            self._pending.pop(move.id, None)

            if move.is_reorder:
                for pid, prior in move.prior_orders.items():
                    project = self._projects.get(pid)
                    # Leave cards that a later move has already repositioned
                    if project is not None and project.get("order") == move.new_orders.get(pid):
                        project["order"] = prior
                return

            project = self._projects.get(move.project_id)
            if project is None:
                return

            later = [
                m for m in self._pending.values()
                if m.project_id == move.project_id and not m.is_reorder and m.id > move.id
            ]
            if later:
                # A newer move of this card is still in flight; it inherits
                # this move's fallback status.
                successor = min(later, key=lambda m: m.id)
                successor.prior_status = move.prior_status
                successor.prior_owner = move.prior_owner
            elif self._owners.get(move.project_id) == move.id:
                project["status"] = move.prior_status
                if move.prior_owner is None:
                    self._owners.pop(move.project_id, None)
                else:
                    self._owners[move.project_id] = move.prior_owner
            # Otherwise a later, committed move owns the card

    def wait(self, timeout: Optional[float] = None) -> List[bool]:
        """
        Block until every in-flight move has resolved.
        """
        with self._lock:
            futures, self._futures = self._futures, []
        wait(futures, timeout=timeout)
        return [f.result() for f in futures if f.done()]

    def close(self) -> None:
        self.wait()
        self._executor.shutdown(wait=True)
