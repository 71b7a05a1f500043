"""
Event Models
Payloads delivered to cooking-mode observers
"""
from typing import Any
from pydantic import BaseModel


class CookingEvent(BaseModel):
    """
    Notification sent to subscribers after a state change
    type is "session" or "timer"
    """
    type: str
    event: str
    data: Any = None
