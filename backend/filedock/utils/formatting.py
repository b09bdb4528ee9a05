"""Human-readable formatting for file sizes, timestamps and names."""

from datetime import datetime

KB = 1024
MB = 1024 * 1024

ELLIPSIS = "..."
DEFAULT_NAME_LENGTH = 60


def format_size(size_bytes: int) -> str:
    """Format a byte count as B, KB or MB.

    Boundary values use the next unit: 1024 -> "1.00 KB",
    1048576 -> "1.00 MB".
    """
    if size_bytes < 0:
        raise ValueError(f"Size must be non-negative: {size_bytes}")
    if size_bytes < KB:
        return f"{size_bytes} B"
    if size_bytes < MB:
        return f"{size_bytes / KB:.2f} KB"
    return f"{size_bytes / MB:.2f} MB"


def format_timestamp(unix_seconds: int) -> str:
    """Format a unix timestamp as local time ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.fromtimestamp(unix_seconds).strftime("%Y-%m-%d %H:%M:%S")


def truncate_name(name: str, max_length: int = DEFAULT_NAME_LENGTH) -> str:
    """Shorten ``name`` to at most ``max_length`` characters, ending in "..."."""
    if max_length <= len(ELLIPSIS):
        raise ValueError(f"max_length too small: {max_length}")
    if len(name) > max_length:
        return name[: max_length - len(ELLIPSIS)] + ELLIPSIS
    return name
