"""
Cooking Session
Step-by-step progress through one recipe in cooking mode
"""
import time
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set
from core.observers import Observable
from models.recipe import Step, sort_steps


class SessionStatus(Enum):
    """
    Cooking session lifecycle
    IDLE -> RUNNING <-> PAUSED -> ENDED, restart() from anywhere -> RUNNING
    """
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


class CookingSession(Observable):
    """
    Tracks the current step and completed steps for one cooking attempt

    Pure in-memory state. Invalid operations are no-ops that return False,
    they never raise.
    """

    def __init__(self, steps: Iterable[Step], now: Callable[[], float] = time.time):
        """
        Args:
            steps: Recipe steps, snapshotted and ordered by order_index
            now: Clock returning seconds

        Raises:
            DuplicateStepOrderError: two steps share an order_index
        """
        super().__init__()
        self._steps: List[Step] = sort_steps(steps)
        self._now = now
        self.current_index = 0
        self.completed_indices: Set[int] = set()
        self.status = SessionStatus.IDLE
        self.started_at: Optional[float] = None
        self.ended_at: Optional[float] = None

    # ----- Derived state -----
    @property
    def sorted_steps(self) -> List[Step]:
        return list(self._steps)

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_index < len(self._steps):
            return self._steps[self.current_index]
        return None

    @property
    def current_step_number(self) -> int:
        """1-based position, 0 for an empty recipe"""
        if not self._steps:
            return 0
        return self.current_index + 1

    @property
    def is_active(self) -> bool:
        return self.status in (SessionStatus.RUNNING, SessionStatus.PAUSED)

    @property
    def is_paused(self) -> bool:
        return self.status == SessionStatus.PAUSED

    @property
    def progress(self) -> float:
        if not self._steps:
            return 0.0
        return len(self.completed_indices) / len(self._steps)

    @property
    def is_completed(self) -> bool:
        return len(self.completed_indices) == len(self._steps)

    def step_at(self, index: int) -> Optional[Step]:
        if 0 <= index < len(self._steps):
            return self._steps[index]
        return None

    def is_step_completed(self, index: int) -> bool:
        return index in self.completed_indices

    def elapsed_seconds(self, now: Optional[float] = None) -> float:
        """
        Seconds since start(), frozen once the session ended
        """
        if self.started_at is None:
            return 0.0
        end = self.ended_at
        if end is None:
            end = self._now() if now is None else now
        return max(0.0, end - self.started_at)

    # ----- Lifecycle -----
    def start(self) -> bool:
        """
        IDLE -> RUNNING
        Any other state is left alone; use restart() to begin again
        """
        if self.status != SessionStatus.IDLE:
            return False
        self.started_at = self._now()
        self.ended_at = None
        self.status = SessionStatus.RUNNING
        self._emit("session", "started", {"started_at": self.started_at})
        return True

    def restart(self) -> bool:
        """
        Begin again from the first step with a fresh start timestamp
        """
        self.current_index = 0
        self.completed_indices = set()
        self.started_at = self._now()
        self.ended_at = None
        self.status = SessionStatus.RUNNING
        self._emit("session", "restarted", {"started_at": self.started_at})
        return True

    def pause(self) -> bool:
        if self.status != SessionStatus.RUNNING:
            return False
        self.status = SessionStatus.PAUSED
        self._emit("session", "paused")
        return True

    def resume(self) -> bool:
        if self.status != SessionStatus.PAUSED:
            return False
        self.status = SessionStatus.RUNNING
        self._emit("session", "resumed")
        return True

    def end(self) -> bool:
        if self.status == SessionStatus.ENDED:
            return False
        if self.started_at is not None:
            self.ended_at = self._now()
        self.status = SessionStatus.ENDED
        self._emit("session", "ended")
        return True

    # ----- Navigation -----
    def mark_current_step_complete(self) -> bool:
        """
        Add the current position to completed_indices

        Returns:
            True if the step was not completed before
        """
        if self.current_step is None or self.current_index in self.completed_indices:
            return False
        self.completed_indices.add(self.current_index)
        self._emit("session", "step_completed", {
            "index": self.current_index,
            "progress": self.progress,
        })
        return True

    def move_to_next_step(self) -> bool:
        """
        Complete the current step, then advance

        Returns:
            False when already on the last step (nothing to advance to)
        """
        self.mark_current_step_complete()
        if self.current_index >= len(self._steps) - 1:
            return False
        self.current_index += 1
        self._emit("session", "step_changed", {"index": self.current_index})
        return True

    def move_to_previous_step(self) -> bool:
        # going back never un-completes a step
        if self.current_index <= 0:
            return False
        self.current_index -= 1
        self._emit("session", "step_changed", {"index": self.current_index})
        return True

    def jump_to_step(self, index: int) -> bool:
        if not 0 <= index < len(self._steps):
            return False
        if index == self.current_index:
            return True
        self.current_index = index
        self._emit("session", "step_changed", {"index": self.current_index})
        return True

    def reset_progress(self) -> None:
        if not self.completed_indices:
            return
        self.completed_indices = set()
        self._emit("session", "progress_reset")
