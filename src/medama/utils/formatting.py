"""
Display formatting for file sizes and timestamps.
"""

from datetime import datetime
from typing import Optional

KB = 1024
MB = 1024 * KB
GB = 1024 * MB


def format_size(size: int) -> str:
    """Convert a byte count to a human-readable string.

    Args:
        size: Size in bytes

    Returns:
        String such as '500 B', '1.5 KB' or '1.9 MB'
    """
    value = float(size)

    if value < KB:
        return "%.0f B" % value
    if value < MB:
        return "%.1f KB" % (value / KB)
    if value < GB:
        return "%.1f MB" % (value / MB)
    return "%.1f GB" % (value / GB)


def format_timestamp(value: Optional[datetime], sep: str = " ") -> str:
    """Format a timestamp as an ISO-like combined date and time."""
    if value is None:
        return ""
    return value.strftime(f"%Y-%m-%d{sep}%H:%M:%S")
