"""
Cooking assistant orchestration tests
"""
import pytest
from core.cooking_session import SessionStatus
from core.db_handler import CookingHistory
from handlers.cooking_assistant import CookingAssistant


@pytest.fixture
def assistant(sample_recipe, scheduler, clock, alert_sink):
    return CookingAssistant(sample_recipe, scheduler, now=clock, alert_sink=alert_sink)


class TestCookingFlow:
    """End to end cooking mode"""

    def test_start_cooking(self, assistant):
        assert assistant.start_cooking() is True
        assert assistant.session.status == SessionStatus.RUNNING

    def test_start_cooking_again_restarts(self, assistant, clock):
        assistant.start_cooking()
        assistant.next_step()
        clock.advance(10)
        assistant.start_cooking()
        assert assistant.session.current_index == 0
        assert assistant.session.started_at == clock.current

    def test_restart_cancels_previous_timers(self, assistant, scheduler, clock, alert_sink):
        assistant.start_cooking()
        assistant.next_step()
        assistant.start_current_timer()

        assistant.start_cooking()
        assert assistant.engine.list_active_timers() == []
        assert assistant.session.current_index == 0

        clock.advance(200)
        scheduler.fire()
        assert alert_sink.calls == []

    def test_restart_after_plain_session_end(self, assistant, scheduler, clock, alert_sink):
        assistant.start_cooking()
        assistant.jump_to_step(1)
        assistant.start_current_timer()
        assistant.session.end()

        assistant.start_cooking()
        clock.advance(200)
        scheduler.fire()
        assert alert_sink.calls == []
        assert assistant.session.status == SessionStatus.RUNNING

    def test_timer_runs_while_navigating(self, assistant, scheduler, clock, alert_sink):
        assistant.start_cooking()
        assistant.next_step()
        assert assistant.start_current_timer() is True
        assistant.next_step()

        clock.advance(60)
        scheduler.fire()
        timers = assistant.engine.list_active_timers()
        assert timers[0][0] == 1
        assert timers[0][1].remaining_seconds == 60

        clock.advance(60)
        scheduler.fire()
        assert alert_sink.calls == [(1, "Simmer the stew")]

    def test_start_timer_on_step_without_duration(self, assistant):
        assistant.start_cooking()
        assert assistant.start_current_timer() is False

    def test_next_step_past_end_shows_completion(self, assistant):
        assistant.start_cooking()
        assert assistant.next_step() is True
        assert assistant.next_step() is True
        assert assistant.show_completion is False
        assert assistant.next_step() is False
        assert assistant.show_completion is True
        assert assistant.session.is_completed is True

    def test_previous_and_jump(self, assistant):
        assistant.start_cooking()
        assert assistant.jump_to_step(2) is True
        assert assistant.previous_step() is True
        assert assistant.session.current_index == 1
        assert assistant.jump_to_step(5) is False

    def test_end_cooking_cancels_timers(self, assistant, scheduler):
        assistant.start_cooking()
        assistant.engine.start_timer(0, 10)
        assistant.engine.start_timer(1, 20)
        assistant.engine.start_timer(2, 30)
        assert assistant.end_cooking() == 3
        assert assistant.engine.list_active_timers() == []
        assert assistant.session.is_active is False
        assert scheduler.live == []

    def test_pause_cooking_pauses_timers(self, assistant, clock):
        assistant.start_cooking()
        assistant.jump_to_step(1)
        assistant.start_current_timer()
        clock.advance(20)
        assert assistant.pause_cooking() is True
        assert assistant.engine.get_timer(1).is_paused is True
        clock.advance(300)
        assert assistant.resume_cooking() is True
        clock.advance(10)
        assistant.engine.tick(1)
        assert assistant.engine.get_timer(1).remaining_seconds == 90

    def test_pause_cooking_when_idle(self, assistant):
        assert assistant.pause_cooking() is False
        assert assistant.resume_cooking() is False

    def test_cancel_timer(self, assistant):
        assistant.jump_to_step(1)
        assistant.start_current_timer()
        assert assistant.cancel_timer(1) is True
        assert assistant.cancel_timer(1) is False

    def test_live_status(self, assistant):
        assistant.start_cooking()
        assistant.next_step()
        assistant.start_current_timer()
        status = assistant.live_status()
        assert status.recipe_name == "Jollof Rice"
        assert status.current_step_number == 2
        assert status.total_steps == 3
        assert status.active_step_description == "Simmer the stew"


class TestFinishCooking:
    """Recording finished sessions"""

    @pytest.mark.asyncio
    async def test_without_history(self, assistant):
        assistant.start_cooking()
        assert await assistant.finish_cooking() is None
        assert assistant.session.status == SessionStatus.ENDED

    @pytest.mark.asyncio
    async def test_records_elapsed_time(self, sample_recipe, scheduler, clock, tmp_path):
        history = CookingHistory(str(tmp_path / "history.db"))
        await history.init_db()
        try:
            assistant = CookingAssistant(sample_recipe, scheduler, now=clock, history=history)
            assistant.start_cooking()
            clock.advance(600)
            assert await assistant.finish_cooking() == 1

            assistant.start_cooking()
            assert await assistant.finish_cooking() == 2

            cursor = await history.connection.execute("SELECT elapsed_seconds FROM cookings ORDER BY id")
            rows = await cursor.fetchall()
            assert rows[0][0] == 600
        finally:
            await history.close()
