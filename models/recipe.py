"""
Recipe Models
Read-only recipe data handed to cooking mode
"""
from pydantic import BaseModel, Field
from typing import Iterable, List, Optional


class DuplicateStepOrderError(ValueError):
    """Two steps share the same order_index"""

    def __init__(self, order_index: int, recipe_id: Optional[int] = None):
        self.order_index = order_index
        self.recipe_id = recipe_id
        owner = "Step list" if recipe_id is None else f"Recipe {recipe_id}"
        super().__init__(f"{owner} has more than one step with order_index {order_index}")


class Step(BaseModel):
    """
    Recipe step information
    duration_seconds == 0 means no timer applies to this step
    """
    order_index: int = Field(ge=0)
    instruction: str
    duration_seconds: int = Field(default=0, ge=0)
    image_name: Optional[str] = None

    @property
    def has_timer(self) -> bool:
        return self.duration_seconds > 0


def sort_steps(steps: Iterable[Step], recipe_id: Optional[int] = None) -> List[Step]:
    """
    Order steps by order_index

    Raises:
        DuplicateStepOrderError: order_index is not unique
    """
    steps = list(steps)
    seen = set()
    for step in steps:
        if step.order_index in seen:
            raise DuplicateStepOrderError(step.order_index, recipe_id)
        seen.add(step.order_index)
    return sorted(steps, key=lambda step: step.order_index)


class Recipe(BaseModel):
    """
    Recipe information
    """
    id: int
    name: str
    description: str = ""
    steps: List[Step] = Field(default_factory=list)

    def sorted_steps(self) -> List[Step]:
        return sort_steps(self.steps, self.id)
