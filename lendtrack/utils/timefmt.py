from datetime import datetime

_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def relative_time(moment: datetime | None, now: datetime) -> str:
    """
    Human relative rendering of `moment` seen from `now`:
    "3 hours ago", "1 day ago", "in 2 days", "just now".
    Uses the largest whole unit, like most "x ago" helpers.
    """
    if moment is None:
        return ""

    seconds = int((now - moment).total_seconds())
    if abs(seconds) < 1:
        return "just now"

    past = seconds > 0
    seconds = abs(seconds)
    for unit, size in _UNITS:
        if seconds >= size:
            count = seconds // size
            label = unit if count == 1 else f"{unit}s"
            return f"{count} {label} ago" if past else f"in {count} {label}"


def iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
