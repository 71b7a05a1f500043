"""
Cooking Assistant
Orchestrates cooking mode: session navigation, step timers, history
"""
import time
from datetime import datetime
from typing import Callable, Optional
from core.alerts import AlertSink
from core.cooking_session import CookingSession, SessionStatus
from core.db_handler import CookingHistory
from core.live_status import project_live_status
from core.scheduler import Scheduler
from core.timer_engine import TimerEngine
from models.cooking import Cooking
from models.events import CookingEvent
from models.live_status import LiveStatus
from models.recipe import Recipe


class CookingAssistant:
    """
    Wires one recipe's session to a timer engine

    Collaborators are passed in; nothing here is global. Timers keep running
    while the user navigates between steps.
    """

    def __init__(
        self,
        recipe: Recipe,
        scheduler: Scheduler,
        now: Callable[[], float] = time.time,
        alert_sink: Optional[AlertSink] = None,
        history: Optional[CookingHistory] = None,
        tick_interval: float = 1.0,
        debug: bool = False,
    ):
        self.recipe = recipe
        self.history = history
        self.session = CookingSession(recipe.steps, now=now)
        self.engine = TimerEngine(
            scheduler,
            now=now,
            alert_sink=alert_sink,
            step_lookup=self.session.step_at,
            tick_interval=tick_interval,
            debug=debug,
        )
        self.show_completion = False
        self._now = now
        self.session.subscribe(self._on_session_event)

    def _on_session_event(self, event: CookingEvent):
        if event.event == "step_completed" and self.session.is_completed:
            self.show_completion = True

    # ----- Session -----
    def start_cooking(self) -> bool:
        self.show_completion = False
        if self.session.status == SessionStatus.IDLE:
            return self.session.start()
        # a restart ends the previous attempt, its timers go with it
        self.engine.cancel_all_timers()
        return self.session.restart()

    def end_cooking(self) -> int:
        """
        End the session and cancel every timer

        Returns:
            Number of timers cancelled
        """
        self.session.end()
        return self.engine.cancel_all_timers()

    def pause_cooking(self) -> bool:
        if not self.session.pause():
            return False
        self.engine.pause_all_timers()
        return True

    def resume_cooking(self) -> bool:
        if not self.session.resume():
            return False
        self.engine.resume_all_timers()
        return True

    def next_step(self) -> bool:
        moved = self.session.move_to_next_step()
        if not moved:
            self.show_completion = True
        return moved

    def previous_step(self) -> bool:
        return self.session.move_to_previous_step()

    def jump_to_step(self, index: int) -> bool:
        return self.session.jump_to_step(index)

    # ----- Timers -----
    def start_current_timer(self) -> bool:
        step = self.session.current_step
        if step is None:
            return False
        return self.engine.start_timer_for_step(self.session.current_index, step)

    def cancel_timer(self, step_index: int) -> bool:
        return self.engine.cancel_timer(step_index)

    def live_status(self) -> LiveStatus:
        return project_live_status(self.recipe.name, self.session, self.engine)

    # ----- History -----
    async def finish_cooking(self) -> Optional[int]:
        """
        End the session and record it

        Returns:
            How many times this recipe has been cooked, or None without history
        """
        self.end_cooking()
        if self.history is None:
            return None

        cooking = Cooking(
            recipe_id=self.recipe.id,
            elapsed_seconds=int(self.session.elapsed_seconds()),
            created_at=datetime.now(),
        )
        await self.history.save_cooking(cooking)
        return await self.history.get_cooking_counts(self.recipe.id)
