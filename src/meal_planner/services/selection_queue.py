"""FIFO queue of foods waiting for a manual reference selection."""

import logging
import threading
from collections import deque
from concurrent.futures import Future
from uuid import UUID

from meal_planner.domain.errors import GenerationAbortedError
from meal_planner.domain.nutrition import ReferenceFood
from meal_planner.domain.selection import (
    PendingSelection,
    SelectionDecision,
    SelectionStatus,
)

_logger = logging.getLogger(__name__)


class SelectionQueue:
    """Holds ambiguous selections and shows at most one at a time.

    The queue is either empty or showing a current selection. Each enqueued
    selection gets a future keyed by its token; resolving or skipping the
    current selection completes that future exactly once, from whichever
    thread made the decision. Once cleared the queue is closed: later
    selections get a future that has already failed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._waiting: deque[PendingSelection] = deque()
        self._current: PendingSelection | None = None
        self._decisions: dict[UUID, Future[SelectionDecision]] = {}
        self._closed = False

    @property
    def current(self) -> PendingSelection | None:
        """The selection currently in front of the user."""
        with self._lock:
            return self._current

    @property
    def waiting_count(self) -> int:
        """Number of selections queued behind the current one."""
        with self._lock:
            return len(self._waiting)

    @property
    def status(self) -> SelectionStatus:
        """Summarize the queue state."""
        with self._lock:
            if self._current is not None:
                return SelectionStatus.SELECTING_FOOD
            if self._waiting:
                return SelectionStatus.WAITING_IN_QUEUE
            return SelectionStatus.NO_SELECTIONS_NEEDED

    def enqueue(self, selection: PendingSelection) -> "Future[SelectionDecision]":
        """Add a selection and return the future that receives its decision."""
        decision: Future[SelectionDecision] = Future()
        with self._lock:
            if self._closed:
                decision.set_exception(
                    GenerationAbortedError("Selection queue is closed")
                )
                return decision
            self._decisions[selection.token] = decision
            self._waiting.append(selection)
            if self._current is None:
                self._current = self._waiting.popleft()
        _logger.info(
            "Selection queued: food=%s candidates=%s",
            selection.food.name,
            len(selection.candidates),
        )
        return decision

    def resolve(self, choice: ReferenceFood | None) -> bool:
        """Accept a reference food (or none) for the current selection."""
        return self._complete(choice=choice, skipped=False)

    def skip(self) -> bool:
        """Skip the current selection, keeping the AI estimate."""
        return self._complete(choice=None, skipped=True)

    def clear(self) -> None:
        """Drop every selection, fail pending decisions, and close the queue."""
        with self._lock:
            self._closed = True
            pending = list(self._decisions.values())
            self._decisions.clear()
            self._waiting.clear()
            self._current = None
        for decision in pending:
            if not decision.done():
                decision.set_exception(
                    GenerationAbortedError("Selection queue cleared")
                )

    def _complete(self, *, choice: ReferenceFood | None, skipped: bool) -> bool:
        with self._lock:
            current = self._current
            if current is None:
                return False
            decision = self._decisions.pop(current.token, None)
            self._current = self._waiting.popleft() if self._waiting else None
        _logger.info(
            "Selection %s: food=%s choice=%s",
            "skipped" if skipped else "resolved",
            current.food.name,
            choice.description if choice else None,
        )
        if decision is not None and not decision.done():
            decision.set_result(
                SelectionDecision(token=current.token, choice=choice, skipped=skipped)
            )
        return True
