"""
Timer Completion Alerts
The host decides how an alert is presented (sound, haptics, notification)
"""
from typing import Protocol
from utils.text_utils import shorten_instruction


class AlertSink(Protocol):
    def timer_completed(self, step_key: int, instruction: str) -> None:
        ...


def completion_title(step_number: int) -> str:
    return f"Timer Complete - Step {step_number}"


def completion_message(step_number: int, instruction: str, limit: int = 50) -> str:
    """
    Notification body for a finished timer

    Args:
        step_number: 1-based step number
        instruction: Step instruction text
        limit: Max instruction characters before "..."

    Returns:
        "Step N: <instruction>"
    """
    return f"Step {step_number}: {shorten_instruction(instruction, limit)}"


class ConsoleAlertSink:
    """Alert sink that prints to stdout"""

    def __init__(self):
        self.delivered = 0

    def timer_completed(self, step_key: int, instruction: str) -> None:
        step_number = step_key + 1
        print(f"⏰ {completion_title(step_number)}")
        print(completion_message(step_number, instruction))
        self.delivered += 1
