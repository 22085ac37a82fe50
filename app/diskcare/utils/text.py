"""Plain-text helpers shared by the planner, run logs, and CLI output."""

from datetime import UTC, datetime

TRUNCATE_SUFFIX = "…"


def truncate(text: str, max_len: int) -> str:
    """Shorten text to at most max_len characters, marking the cut with an ellipsis.

    Args:
        text: Text to shorten.
        max_len: Maximum length of the result, suffix included.

    Returns:
        The text unchanged if it fits, otherwise a truncated copy.
    """
    if len(text) <= max_len:
        return text
    if max_len <= len(TRUNCATE_SUFFIX):
        return TRUNCATE_SUFFIX
    return text[: max_len - len(TRUNCATE_SUFFIX)] + TRUNCATE_SUFFIX


def to_one_line(text: str) -> str:
    """Collapse line breaks so a message fits on a single output line."""
    return " ".join(text.split())


def error_message(exc: BaseException) -> str:
    """Return a readable message for an exception, falling back to its type name."""
    message = str(exc).strip()
    return message or type(exc).__name__


def format_bytes(size_bytes: int | float | None) -> str:
    """Format byte count as human-readable string.

    Args:
        size_bytes: Number of bytes (None and non-positive values render as "0 B").

    Returns:
        String such as "512 B", "1.5 KB" or "2.0 GB".
    """
    if size_bytes is None or size_bytes <= 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def format_timestamp_ms(ms: int | float | None) -> str:
    """Format epoch milliseconds as a UTC timestamp, or "-" when unknown."""
    if ms is None:
        return "-"
    try:
        dt = datetime.fromtimestamp(ms / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return "-"
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")
