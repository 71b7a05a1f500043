"""
Timer Models
Per-step countdown state
"""
from typing import Optional
from pydantic import BaseModel


class TimerState(BaseModel):
    """
    Countdown state for one step

    remaining_seconds is always derived from start_time on each tick,
    never decremented. While paused, paused_remaining holds the frozen
    display value and paused_elapsed the exact running time so far.
    """
    step_key: int
    total_duration_seconds: int
    start_time: float
    remaining_seconds: int
    is_running: bool = True
    is_paused: bool = False
    paused_remaining: Optional[int] = None
    paused_elapsed: Optional[float] = None

    @property
    def progress(self) -> float:
        if self.total_duration_seconds == 0:
            return 0.0
        return (self.total_duration_seconds - self.remaining_seconds) / self.total_duration_seconds

    @property
    def formatted_time_remaining(self) -> str:
        minutes = self.remaining_seconds // 60
        seconds = self.remaining_seconds % 60
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def deadline(self) -> Optional[float]:
        """Absolute end time, None while paused"""
        if self.is_paused:
            return None
        return self.start_time + self.total_duration_seconds
