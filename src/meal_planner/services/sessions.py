"""Per-generation session state shared with the interaction surface."""

import logging
import threading
from dataclasses import dataclass
from uuid import UUID, uuid4

from meal_planner.domain.errors import GenerationAbortedError
from meal_planner.services.selection_queue import SelectionQueue

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time view of generation progress."""

    current: int
    total: int
    failed: int


class GenerationProgress:
    """Meals generated so far out of the total, safe to read from any thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0
        self._total = 0
        self._failed = 0

    def start(self, total: int) -> None:
        """Reset the counters for a new run."""
        with self._lock:
            self._current = 0
            self._total = total
            self._failed = 0

    def advance(self, *, failed: bool = False) -> None:
        """Record one finished meal slot."""
        with self._lock:
            self._current += 1
            if failed:
                self._failed += 1

    def snapshot(self) -> ProgressSnapshot:
        """Return the current counters."""
        with self._lock:
            return ProgressSnapshot(
                current=self._current, total=self._total, failed=self._failed
            )


class PlanGenerationSession:
    """Owns the selection queue, progress, and cancel signal of one run."""

    def __init__(self, session_id: UUID | None = None) -> None:
        self.id = session_id or uuid4()
        self.queue = SelectionQueue()
        self.progress = GenerationProgress()
        self._cancelled = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop further generation and clear pending selections."""
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        self.queue.clear()
        _logger.info("Plan generation cancelled: session=%s", self.id)

    def raise_if_cancelled(self) -> None:
        """Raise GenerationAbortedError once cancel() was called."""
        if self._cancelled.is_set():
            raise GenerationAbortedError(f"Plan generation {self.id} was cancelled")
