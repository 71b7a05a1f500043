"""
Live Status Projection
Builds the lock-screen style summary from session and timer state.
Pure: the host decides when to push it.
"""
from datetime import datetime, timezone
from typing import Optional
from core.cooking_session import CookingSession
from core.timer_engine import TimerEngine
from models.live_status import LiveStatus


def project_live_status(
    recipe_name: str,
    session: CookingSession,
    engine: TimerEngine,
    now: Optional[float] = None,
) -> LiveStatus:
    """
    Args:
        recipe_name: Display name of the recipe
        session: Current cooking session
        engine: Timer engine holding the active countdowns
        now: When given, the deadline is computed as now + remaining
            (last-tick value) instead of from the timer's start time

    Returns:
        LiveStatus whose timer fields describe the running timer that ends
        soonest, or None when no timer is running
    """
    soonest = None
    for _, state in engine.list_active_timers():
        if state.is_paused:
            continue
        if soonest is None or state.remaining_seconds < soonest.remaining_seconds:
            soonest = state

    deadline = None
    description = None
    if soonest is not None:
        if now is not None:
            end_ts = now + soonest.remaining_seconds
        else:
            end_ts = soonest.deadline
        deadline = datetime.fromtimestamp(end_ts, tz=timezone.utc)
        step = session.step_at(soonest.step_key)
        description = step.instruction if step is not None else None

    return LiveStatus(
        recipe_name=recipe_name,
        current_step_number=session.current_step_number,
        total_steps=session.total_steps,
        next_timer_deadline=deadline,
        active_step_description=description,
    )
