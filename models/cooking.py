"""
Cooking Record Model
"""
from pydantic import BaseModel
from datetime import datetime


class Cooking(BaseModel):
    """
    Cooking completion record
    One row per finished cooking attempt
    """
    recipe_id: int
    elapsed_seconds: int
    created_at: datetime
