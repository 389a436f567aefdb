from __future__ import annotations

from datetime import datetime, timezone


def format_timestamp(value: datetime | int | float | str | None) -> str:
    """Render a unix time or ISO string as UTC ``YYYY-MM-DDTHH:MM:SSZ``."""
    if value is None:
        return "-"
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # the server may report milliseconds
        seconds = value / 1000 if value > 10**11 else value
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    else:
        text = str(value)
        if text.isdigit():
            return format_timestamp(int(text))
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def shorten(text: str | None, width: int = 60) -> str:
    if text is None:
        return "-"
    value = " ".join(str(text).split())
    if len(value) <= width:
        return value
    return value[: width - 1] + "…"
