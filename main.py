"""
Cooking Mode Console Host
Walks through one recipe, running step timers on the asyncio loop
"""
import asyncio
import json
import os
import time
from dotenv import load_dotenv
from core.alerts import ConsoleAlertSink
from core.db_handler import CookingHistory
from core.recipe import RecipeSource
from core.scheduler import AsyncioScheduler
from handlers.cooking_assistant import CookingAssistant
from models.events import CookingEvent
from utils.text_utils import format_countdown, is_truthy

# Load environment variables
profile = os.getenv("PROFILE", "")
if profile == "local" or profile == "":
    load_dotenv()


async def run_cooking_mode(recipe_id: int):
    recipes_path = os.getenv("RECIPES_PATH", "./resources/recipes.json")
    db_path = os.getenv("COOKING_DB_PATH", "cooking.db")
    tick_interval = float(os.getenv("TIMER_TICK_INTERVAL", "1.0"))
    debug = is_truthy(os.getenv("COOKING_DEBUG", "false"))

    with open(recipes_path, "r", encoding="utf-8") as f:
        recipe_source = RecipeSource(json.load(f))

    recipe = recipe_source.get_recipe_by_id(recipe_id)
    if recipe is None:
        print(f"Recipe {recipe_id} not found in {recipes_path}")
        return

    history = CookingHistory(db_path)
    await history.init_db()

    assistant = CookingAssistant(
        recipe,
        AsyncioScheduler(),
        now=time.time,
        alert_sink=ConsoleAlertSink(),
        history=history,
        tick_interval=tick_interval,
        debug=debug,
    )

    timer_done = asyncio.Event()

    def on_timer_event(event: CookingEvent):
        if event.event == "tick" and debug:
            print(f"  step {event.data['step_key'] + 1}: {format_countdown(event.data['remaining'])}")
        elif event.event == "completed":
            timer_done.set()

    assistant.engine.subscribe(on_timer_event)

    print(f"Cooking {recipe.name} ({assistant.session.total_steps} steps)")
    assistant.start_cooking()

    try:
        while True:
            step = assistant.session.current_step
            if step is None:
                break
            print(f"[{assistant.session.current_step_number}/{assistant.session.total_steps}] {step.instruction}")

            if step.has_timer:
                timer_done.clear()
                assistant.start_current_timer()
                print(f"  timer: {format_countdown(step.duration_seconds)}")
                await timer_done.wait()

            if not assistant.next_step():
                break

        count = await assistant.finish_cooking()
        print(f"Done! {recipe.name} cooked {count} time(s)")
    finally:
        assistant.end_cooking()
        await history.close()


if __name__ == "__main__":
    asyncio.run(run_cooking_mode(int(os.getenv("RECIPE_ID", "1"))))
