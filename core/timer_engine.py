"""
Timer Engine
Independent per-step countdowns for cooking mode
"""
import time
import threading
from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from core.alerts import AlertSink
from core.observers import Observable
from core.scheduler import Scheduler, Subscription
from models.recipe import Step
from models.timer import TimerState

DEFAULT_INSTRUCTION = "your cooking step"


class _TimerEntry:
    """Registry slot: state plus the tick subscription that drives it"""

    __slots__ = ("state", "subscription", "generation")

    def __init__(self, state: TimerState, generation: int):
        self.state = state
        self.subscription: Optional[Subscription] = None
        self.generation = generation

    def unsubscribe(self):
        if self.subscription is not None:
            self.subscription.cancel()
            self.subscription = None


class TimerEngine(Observable):
    """
    Runs any number of countdowns, at most one per step key

    Remaining time is recomputed from the absolute start time on every tick,
    so a timer that was not ticked for a while (app in background) is
    correct again on the very next tick. Each timer fires its completion
    hook exactly once.

    Every registry mutation happens under one lock. A tick scheduled for an
    older generation of a key (cancelled or restarted since) is dropped.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        now: Callable[[], float] = time.time,
        alert_sink: Optional[AlertSink] = None,
        step_lookup: Optional[Callable[[int], Optional[Step]]] = None,
        tick_interval: float = 1.0,
        debug: bool = False,
    ):
        """
        Args:
            scheduler: Host clock delivering periodic ticks
            now: Clock returning seconds
            alert_sink: Receives (step_key, instruction) once per finished timer
            step_lookup: Resolves a step key to its Step for notification text
            tick_interval: Seconds between ticks
            debug: Print timer lifecycle diagnostics
        """
        super().__init__()
        self.scheduler = scheduler
        self.alert_sink = alert_sink
        self.step_lookup = step_lookup
        self.tick_interval = tick_interval
        self.debug = debug
        self._now = now
        self._timers: Dict[int, _TimerEntry] = {}
        self._lock = threading.RLock()
        self._generation = 0

    # ----- Queries -----
    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._timers)

    def has_timer(self, step_key: int) -> bool:
        with self._lock:
            return step_key in self._timers

    def get_timer(self, step_key: int) -> Optional[TimerState]:
        with self._lock:
            entry = self._timers.get(step_key)
            return entry.state.model_copy() if entry else None

    def list_active_timers(self) -> List[Tuple[int, TimerState]]:
        """
        Registered timers ordered by step key

        Values reflect the last tick and are copies, so callers cannot
        mutate engine state through them.
        """
        with self._lock:
            return [
                (key, self._timers[key].state.model_copy())
                for key in sorted(self._timers)
            ]

    # ----- Start / cancel -----
    def start_timer(self, step_key: int, duration_seconds: int) -> bool:
        """
        Start a countdown for step_key, replacing any existing one

        Returns:
            False when duration_seconds <= 0 (nothing to time)
        """
        if duration_seconds <= 0:
            return False

        with self._lock:
            self._remove_locked(step_key)
            state = TimerState(
                step_key=step_key,
                total_duration_seconds=duration_seconds,
                start_time=self._now(),
                remaining_seconds=duration_seconds,
            )
            self._register_locked(state)

        if self.debug:
            print(f"Timer started for step {step_key + 1} ({duration_seconds}s)")
        self._emit("timer", "started", {"step_key": step_key, "duration": duration_seconds})
        return True

    def start_timer_for_step(self, step_key: int, step: Step) -> bool:
        return self.start_timer(step_key, step.duration_seconds)

    def cancel_timer(self, step_key: int) -> bool:
        """
        Stop and forget the timer for step_key
        No further tick or completion fires for it afterwards
        """
        with self._lock:
            removed = self._remove_locked(step_key)
        if removed is None:
            return False
        self._emit("timer", "cancelled", {"step_key": step_key})
        return True

    def cancel_all_timers(self) -> int:
        """
        Returns:
            Number of timers cancelled
        """
        with self._lock:
            keys = sorted(self._timers)
            for key in keys:
                self._remove_locked(key)
        if keys:
            self._emit("timer", "all_cancelled", {"step_keys": keys})
        return len(keys)

    # ----- Pause / resume -----
    def pause_timer(self, step_key: int) -> bool:
        """
        Freeze remaining time and stop ticking
        A timer that turns out to be already elapsed completes instead
        """
        with self._lock:
            entry = self._timers.get(step_key)
            if entry is None or entry.state.is_paused:
                return False
            now = self._now()
            completed = self._recompute_locked(entry, now)
            if not completed:
                entry.unsubscribe()
                entry.state.is_paused = True
                entry.state.paused_elapsed = max(0.0, now - entry.state.start_time)
                entry.state.paused_remaining = entry.state.remaining_seconds
                remaining = entry.state.remaining_seconds

        if completed:
            self._complete(completed)
            return False
        self._emit("timer", "paused", {"step_key": step_key, "remaining": remaining})
        return True

    def resume_timer(self, step_key: int) -> bool:
        with self._lock:
            entry = self._timers.get(step_key)
            if entry is None or not entry.state.is_paused:
                return False
            state = entry.state
            elapsed = state.paused_elapsed
            if elapsed is None:
                elapsed = state.total_duration_seconds - (state.paused_remaining or 0)
            # re-base on the exact running time, not the rounded remaining
            state.start_time = self._now() - elapsed
            remaining = state.paused_remaining or 0
            state.remaining_seconds = remaining
            state.is_paused = False
            state.paused_remaining = None
            state.paused_elapsed = None
            self._timers.pop(step_key)
            self._register_locked(state)

        self._emit("timer", "resumed", {"step_key": step_key, "remaining": remaining})
        return True

    def pause_all_timers(self) -> int:
        with self._lock:
            keys = sorted(self._timers)
        return sum(1 for key in keys if self.pause_timer(key))

    def resume_all_timers(self) -> int:
        with self._lock:
            keys = sorted(self._timers)
        return sum(1 for key in keys if self.resume_timer(key))

    # ----- Ticking -----
    def tick(self, step_key: int) -> bool:
        """
        Recompute remaining time for step_key

        Returns:
            True if the timer completed on this tick
        """
        with self._lock:
            entry = self._timers.get(step_key)
            if entry is None:
                return False
            completed = self._recompute_locked(entry)
            remaining = entry.state.remaining_seconds
            is_paused = entry.state.is_paused

        if completed:
            self._complete(completed)
            return True
        if not is_paused:
            self._emit("timer", "tick", {"step_key": step_key, "remaining": remaining})
        return False

    def tick_all(self) -> List[int]:
        """
        Tick every timer now, e.g. when the app returns to the foreground

        Returns:
            Step keys that completed
        """
        with self._lock:
            keys = sorted(self._timers)
        return [key for key in keys if self.tick(key)]

    def _on_scheduled_tick(self, step_key: int, generation: int):
        with self._lock:
            entry = self._timers.get(step_key)
            if entry is None or entry.generation != generation:
                return
        self.tick(step_key)

    # ----- Persistence -----
    def snapshot(self) -> List[TimerState]:
        with self._lock:
            return [self._timers[key].state.model_copy() for key in sorted(self._timers)]

    def restore(self, states: Iterable[TimerState]) -> int:
        """
        Re-register timers captured by snapshot()
        Running timers whose deadline already passed complete on their next tick
        """
        count = 0
        with self._lock:
            for state in states:
                if state.total_duration_seconds <= 0:
                    continue
                self._remove_locked(state.step_key)
                self._register_locked(state.model_copy())
                count += 1
        if count:
            self._emit("timer", "restored", {"count": count})
        return count

    # ----- Internals -----
    def _register_locked(self, state: TimerState) -> _TimerEntry:
        self._generation += 1
        entry = _TimerEntry(state, self._generation)
        self._timers[state.step_key] = entry
        if not state.is_paused:
            entry.subscription = self.scheduler.schedule_every(
                self.tick_interval,
                partial(self._on_scheduled_tick, state.step_key, entry.generation),
            )
        return entry

    def _remove_locked(self, step_key: int) -> Optional[_TimerEntry]:
        entry = self._timers.pop(step_key, None)
        if entry is not None:
            entry.unsubscribe()
        return entry

    def _recompute_locked(self, entry: _TimerEntry, now: Optional[float] = None) -> Optional[TimerState]:
        """
        Update remaining_seconds from wall clock

        Returns:
            The final state if the timer just reached zero (already removed
            from the registry), otherwise None
        """
        state = entry.state
        if state.is_paused:
            return None
        if now is None:
            now = self._now()
        elapsed = max(0, int(now - state.start_time))
        state.remaining_seconds = max(0, state.total_duration_seconds - elapsed)
        if state.remaining_seconds > 0:
            return None

        state.is_running = False
        self._remove_locked(state.step_key)
        return state.model_copy()

    def _instruction_for(self, step_key: int) -> str:
        if self.step_lookup is None:
            return DEFAULT_INSTRUCTION
        try:
            step = self.step_lookup(step_key)
        except Exception as e:
            print(f"Step lookup failed for timer {step_key}: {e}")
            return DEFAULT_INSTRUCTION
        if step is None or not step.instruction:
            return DEFAULT_INSTRUCTION
        return step.instruction

    def _complete(self, state: TimerState):
        """Runs once per timer, after it left the registry"""
        instruction = self._instruction_for(state.step_key)
        if self.debug:
            print(f"Timer complete for step {state.step_key + 1}")
        if self.alert_sink is not None:
            try:
                self.alert_sink.timer_completed(state.step_key, instruction)
            except Exception as e:
                print(f"Failed to deliver timer alert for step {state.step_key + 1}: {e}")
        self._emit("timer", "completed", {"step_key": state.step_key, "instruction": instruction})
