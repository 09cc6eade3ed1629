"""
Formatting helpers used in user-facing messages.
"""


class Times:
    """Common durations in milliseconds."""

    SECOND = 1000
    MINUTE = 60 * SECOND
    TEN_MINUTES = 10 * MINUTE
    HOUR = 60 * MINUTE
    DAY = 24 * HOUR


def format_duration(ms: int) -> str:
    """
    Format a duration in milliseconds.

    Examples:
        4200 -> "4s"
        65000 -> "1m 5s"
        3723000 -> "1h 2m 3s"
    """
    seconds = int(ms // 1000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 or not parts:
        parts.append(f"{seconds}s")

    return " ".join(parts)
