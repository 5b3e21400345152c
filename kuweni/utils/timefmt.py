from datetime import datetime


def format_message_time(dt: datetime) -> str:
    """Render a message timestamp as ``hh:mm AM/PM``, e.g. ``03:07 PM``."""
    return dt.strftime("%I:%M %p")
