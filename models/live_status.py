"""
Live Status Model
Snapshot shown on an OS status surface (lock screen activity etc.)
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class LiveStatus(BaseModel):
    recipe_name: str
    current_step_number: int
    total_steps: int
    next_timer_deadline: Optional[datetime] = None
    active_step_description: Optional[str] = None
