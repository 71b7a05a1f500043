"""
Utility function tests
"""
import pytest
from core.alerts import ConsoleAlertSink, completion_message, completion_title
from utils.text_utils import format_countdown, is_truthy, shorten_instruction


class TestTextUtils:
    """Text utility tests"""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"),
        (59, "00:59"),
        (60, "01:00"),
        (1500, "25:00"),
        (-3, "00:00"),
    ])
    def test_format_countdown(self, seconds, expected):
        assert format_countdown(seconds) == expected

    def test_shorten_instruction_short(self):
        assert shorten_instruction("Stir well.") == "Stir well."

    def test_shorten_instruction_long(self):
        text = "x" * 60
        result = shorten_instruction(text)
        assert result == "x" * 50 + "..."

    def test_shorten_instruction_exact_limit(self):
        text = "y" * 50
        assert shorten_instruction(text) == text

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_is_truthy(self, value):
        assert is_truthy(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "", "off"])
    def test_is_falsy(self, value):
        assert is_truthy(value) is False


class TestAlerts:
    """Alert message helpers"""

    def test_completion_message(self):
        assert completion_message(2, "Fry the onions.") == "Step 2: Fry the onions."

    def test_completion_message_truncates(self):
        message = completion_message(1, "a" * 80)
        assert message.endswith("...")
        assert len(message) == len("Step 1: ") + 50 + 3

    def test_completion_title(self):
        assert completion_title(3) == "Timer Complete - Step 3"

    def test_console_sink(self, capsys):
        sink = ConsoleAlertSink()
        sink.timer_completed(0, "Boil the beans.")
        out = capsys.readouterr().out
        assert "Timer Complete - Step 1" in out
        assert "Step 1: Boil the beans." in out
        assert sink.delivered == 1
