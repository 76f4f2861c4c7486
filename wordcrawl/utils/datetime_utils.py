from datetime import datetime
from typing import Optional

SCREENSHOT_TIMESTAMP_FORMAT = "%Y-%m-%d_%H%M%S"


def format_timestamp(value: Optional[datetime] = None) -> str:
    """Format a datetime as `YYYY-MM-DD_HHMMSS` for file names.

    Uses the current local time when `value` is None.
    """
    if value is None:
        value = datetime.now()
    return value.strftime(SCREENSHOT_TIMESTAMP_FORMAT)
