"""
Text Utilities
Formatting helpers for countdowns and notifications
"""


def format_countdown(seconds: int) -> str:
    """
    Format seconds as MM:SS

    Args:
        seconds: Remaining seconds (negative values are clamped to 0)

    Returns:
        Zero padded string such as "02:05"
    """
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def shorten_instruction(instruction: str, limit: int = 50) -> str:
    """
    Cut instruction text to limit characters, appending "..." when cut
    """
    if len(instruction) <= limit:
        return instruction
    return instruction[:limit] + "..."


def is_truthy(value: str) -> bool:
    """Environment flag parsing ("1", "true", "yes", "on")"""
    return value.strip().lower() in ("1", "true", "yes", "on")
