# lendtrack/services/dashboard_service.py
from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta

from flask import current_app

from lendtrack.config import EQUIPMENT_MODE_REFERENCED
from lendtrack.models.loan import BorrowerKind
from lendtrack.repositories.equipment_repo import EquipmentRepo
from lendtrack.repositories.loan_repo import LoanRepo
from lendtrack.services.status_resolver import (
    display_status_for,
    DISPLAY_BORROWED,
    DISPLAY_DEADLINE,
    DISPLAY_RETURNED,
)
from lendtrack.utils.errors import AggregationError
from lendtrack.utils.serializers import loan_to_dict
from lendtrack.utils.timefmt import relative_time, iso

STUDENT = BorrowerKind.STUDENT.value
OUTSIDER = BorrowerKind.OUTSIDER.value

WEEKLY_DAYS = 7
MONTHLY_DAYS = 30

NO_EQUIPMENT = "No equipment"
NOT_TRACKED = "N/A"
UNKNOWN_EQUIPMENT = "Unknown"

ACTIVE_STATUSES = (DISPLAY_BORROWED, DISPLAY_DEADLINE)


def _usage_series(records, today, days: int, label_format: str) -> dict:
    """
    Trailing `days` calendar days, oldest first, ending with `today`.
    A record counts for a day when its start_time falls on that date.
    """
    per_day = Counter((r.start_time.date(), r.borrower_kind) for r in records if r.start_time)

    labels, students, outsiders = [], [], []
    for i in range(days - 1, -1, -1):
        day = today - timedelta(days=i)
        labels.append(day.strftime(label_format))
        students.append(per_day[(day, STUDENT)])
        outsiders.append(per_day[(day, OUTSIDER)])

    return {"labels": labels, "students": students, "outsiders": outsiders}


def _equipment_ranking(records, equipment) -> list[tuple]:
    """
    [(equipment, student_count, outsider_count)] most used first.
    Order: combined count, then student count, then outsider count (all desc).
    """
    counts = Counter((r.equipment_id, r.borrower_kind) for r in records if r.equipment_id is not None)
    rows = [(e, counts[(e.id, STUDENT)], counts[(e.id, OUTSIDER)]) for e in equipment]
    rows.sort(key=lambda row: (-(row[1] + row[2]), -row[1], -row[2], row[0].id))
    return rows


def _activity_entry(record, display_status: str, now: datetime) -> dict:
    return {
        "id": record.id,
        "name": record.name,
        "equipment": record.equipment_label or UNKNOWN_EQUIPMENT,
        "time": relative_time(record.start_time, now),
        "startTime": iso(record.start_time),
        "status": display_status,
        "type": record.borrower_kind,
    }


def build_dashboard_summary(
    records,
    now: datetime,
    equipment_mode: str = EQUIPMENT_MODE_REFERENCED,
    equipment=(),
    recent_limit: int = 5,
    distribution_limit: int = 4,
) -> dict:
    """
    Dashboard summary over every loan record (both borrower kinds).

    Pure: everything derives from `records`, `equipment` and `now`, so the
    same inputs always give the same summary. "Active" means the resolver
    says Borrowed or Deadline, the same rule the bucketed lists use.
    """
    records = sorted(records, key=lambda r: r.start_time, reverse=True)
    resolved = [(r, display_status_for(r, now)) for r in records]

    active, deadlines, returned = [], [], []
    for record, status in resolved:
        entry = loan_to_dict(record, status)
        if status in ACTIVE_STATUSES:
            active.append(entry)
        if status == DISPLAY_DEADLINE:
            deadlines.append(entry)
        elif status == DISPLAY_RETURNED:
            returned.append(entry)

    total_students = sum(1 for r in records if r.borrower_kind == STUDENT)
    total_outsiders = sum(1 for r in records if r.borrower_kind == OUTSIDER)

    if equipment_mode == EQUIPMENT_MODE_REFERENCED:
        ranking = _equipment_ranking(records, equipment)
        most_used = ranking[0][0].name if ranking else NO_EQUIPMENT
        top = ranking[:distribution_limit]
        distribution = {
            "labels": [e.name for e, _s, _o in top],
            "usage": [s + o for _e, s, o in top],
        }
    else:
        # free-text equipment names: nothing to rank against
        most_used = NOT_TRACKED
        distribution = {"labels": [], "usage": []}

    today = now.date()
    return {
        "summary": {
            "totalStudents": total_students,
            "totalOutsiders": total_outsiders,
            "activeBorrowings": len(active),
            "mostUsedEquipment": most_used,
        },
        "weeklyUsage": _usage_series(records, today, WEEKLY_DAYS, "%a"),
        "monthlyUsage": _usage_series(records, today, MONTHLY_DAYS, "%m/%d"),
        "equipmentDistribution": distribution,
        "recentActivity": [_activity_entry(r, s, now) for r, s in resolved[:recent_limit]],
        "activeBorrowings": active,
        "deadlines": deadlines,
        "returned": returned,
    }


class DashboardService:
    @staticmethod
    def build_summary(now: datetime | None = None) -> dict:
        if now is None:
            now = datetime.utcnow()

        cfg = current_app.config
        mode = cfg.get("EQUIPMENT_TRACKING_MODE", EQUIPMENT_MODE_REFERENCED)

        try:
            records = LoanRepo.list_by_kind(STUDENT) + LoanRepo.list_by_kind(OUTSIDER)
            equipment = EquipmentRepo.list_all() if mode == EQUIPMENT_MODE_REFERENCED else []

            summary = build_dashboard_summary(
                records,
                now,
                equipment_mode=mode,
                equipment=equipment,
                recent_limit=cfg.get("RECENT_ACTIVITY_LIMIT", 5),
                distribution_limit=cfg.get("EQUIPMENT_DISTRIBUTION_LIMIT", 4),
            )
        except Exception as e:
            current_app.logger.exception(f"[dashboard] Dashboard data error: {e}")
            raise AggregationError(str(e)) from e

        current_app.logger.info(
            f"[dashboard] summary built students={summary['summary']['totalStudents']} "
            f"outsiders={summary['summary']['totalOutsiders']} "
            f"active={summary['summary']['activeBorrowings']}"
        )
        return summary
