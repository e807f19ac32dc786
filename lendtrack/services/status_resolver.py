# lendtrack/services/status_resolver.py
from datetime import datetime

from lendtrack.models.loan import STATUS_RETURNED

DISPLAY_BORROWED = "Borrowed"
DISPLAY_DEADLINE = "Deadline"
DISPLAY_RETURNED = "Returned"

DISPLAY_STATUSES = (DISPLAY_BORROWED, DISPLAY_DEADLINE, DISPLAY_RETURNED)


def compute_display_status(status: str | None, end_time: datetime | None, now: datetime) -> str:
    """
    Display status of a loan at `now` (not the persisted status):
    - persisted "Returned" always wins
    - no end_time: still out, not due -> Borrowed
    - now strictly after end_time -> Deadline
    - otherwise -> Borrowed
    Recompute on every read; the answer moves with `now`.
    """
    if status == STATUS_RETURNED:
        return DISPLAY_RETURNED
    if end_time is None:
        return DISPLAY_BORROWED
    if now > end_time:
        return DISPLAY_DEADLINE
    return DISPLAY_BORROWED


def display_status_for(loan, now: datetime) -> str:
    return compute_display_status(loan.status, loan.end_time, now)
