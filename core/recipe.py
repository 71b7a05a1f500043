"""
Recipe Source
Loads recipe JSON data for cooking mode
"""
from typing import Dict, List, Optional
from models.recipe import Recipe, Step


class RecipeSource:
    """
    Read-only recipe catalogue built from JSON data
    """

    def __init__(self, json_data: dict):
        """
        Args:
            json_data: {"recipes": [{"id", "name", "description", "steps": [...]}]}

        Raises:
            DuplicateStepOrderError: a recipe has two steps with the same order_index
        """
        self.recipes: Dict[int, Recipe] = {}

        for item in json_data.get("recipes", []):
            steps = []
            for step in item.get("steps", []):
                steps.append(Step(
                    order_index=step["order_index"],
                    instruction=step["instruction"],
                    duration_seconds=step.get("duration_seconds", 0),
                    image_name=step.get("image_name"),
                ))

            recipe = Recipe(
                id=item["id"],
                name=item["name"],
                description=item.get("description", ""),
                steps=steps,
            )
            # fail fast on bad ordering data
            recipe.sorted_steps()
            self.recipes[recipe.id] = recipe

    def get_recipe_by_id(self, id: int) -> Optional[Recipe]:
        return self.recipes.get(id)

    def get_recipes_by_ids(self, ids: List[int]) -> List[Recipe]:
        """
        Recipes for the given ids in request order; unknown ids are skipped
        """
        return [self.recipes[recipe_id] for recipe_id in ids if recipe_id in self.recipes]
