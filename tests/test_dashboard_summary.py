from datetime import datetime, timedelta

from lendtrack.config import EQUIPMENT_MODE_FREE_TEXT
from lendtrack.models.equipment import Equipment
from lendtrack.models.loan import LoanRecord
from lendtrack.services.dashboard_service import build_dashboard_summary

NOW = datetime(2025, 1, 3, 0, 0)  # a Friday

_ids = iter(range(1, 10_000))


def loan(kind="student", start=None, end=None, status="Borrowed", equipment=None, name="Borrower"):
    return LoanRecord(
        id=next(_ids),
        borrower_kind=kind,
        name=name,
        email="b@example.edu",
        start_time=start or NOW - timedelta(hours=1),
        end_time=end,
        status=status,
        equipment_id=equipment.id if equipment is not None else None,
        equipment=equipment,
    )


def equipment(eid, name):
    return Equipment(id=eid, name=name, serial_number=f"SN-{eid}")


def test_empty_store_gives_zeroed_summary():
    summary = build_dashboard_summary([], NOW)

    assert summary["summary"] == {
        "totalStudents": 0,
        "totalOutsiders": 0,
        "activeBorrowings": 0,
        "mostUsedEquipment": "No equipment",
    }
    assert summary["weeklyUsage"]["students"] == [0] * 7
    assert summary["weeklyUsage"]["outsiders"] == [0] * 7
    assert summary["monthlyUsage"]["students"] == [0] * 30
    assert summary["monthlyUsage"]["outsiders"] == [0] * 30
    assert summary["equipmentDistribution"] == {"labels": [], "usage": []}
    assert summary["recentActivity"] == []
    assert summary["activeBorrowings"] == []
    assert summary["deadlines"] == []
    assert summary["returned"] == []


def test_series_labels_oldest_first_ending_today():
    summary = build_dashboard_summary([], NOW)

    assert summary["weeklyUsage"]["labels"] == ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"]
    monthly = summary["monthlyUsage"]["labels"]
    assert len(monthly) == 30
    assert monthly[0] == "12/05"
    assert monthly[-1] == "01/03"


def test_same_day_different_kinds_both_counted():
    records = [
        loan("student", start=datetime(2025, 1, 2, 8, 0)),
        loan("outsider", start=datetime(2025, 1, 2, 17, 30)),
        loan("student", start=datetime(2024, 12, 20, 10, 0)),
    ]
    summary = build_dashboard_summary(records, NOW)

    # 2025-01-02 is the second to last day in both series
    assert summary["weeklyUsage"]["students"][-2] == 1
    assert summary["weeklyUsage"]["outsiders"][-2] == 1
    assert sum(summary["weeklyUsage"]["students"]) == 1
    assert summary["monthlyUsage"]["students"][-2] == 1
    assert summary["monthlyUsage"]["outsiders"][-2] == 1
    # 2024-12-20 is outside the week but inside the month
    assert sum(summary["monthlyUsage"]["students"]) == 2


def test_counts_and_buckets_follow_display_status():
    records = [
        loan("student", status="Borrowed"),
        loan("student", end=NOW - timedelta(days=1), status="Borrowed"),
        loan("outsider", end=NOW - timedelta(days=2), status="Returned"),
        loan("outsider", end=NOW + timedelta(days=2), status="Borrowed"),
    ]
    summary = build_dashboard_summary(records, NOW)

    assert summary["summary"]["totalStudents"] == 2
    assert summary["summary"]["totalOutsiders"] == 2
    # overdue-but-unreturned loans still count as active
    assert summary["summary"]["activeBorrowings"] == 3
    assert len(summary["activeBorrowings"]) == 3
    assert [d["displayStatus"] for d in summary["deadlines"]] == ["Deadline"]
    assert [r["displayStatus"] for r in summary["returned"]] == ["Returned"]
    assert {e["displayStatus"] for e in summary["activeBorrowings"]} == {"Borrowed", "Deadline"}


def test_recent_activity_is_five_newest_first():
    records = [loan(start=NOW - timedelta(hours=h), name=f"b{h}") for h in (5, 1, 7, 3, 2, 6, 4)]
    recent = build_dashboard_summary(records, NOW)["recentActivity"]

    assert len(recent) == 5
    assert [r["name"] for r in recent] == ["b1", "b2", "b3", "b4", "b5"]
    assert recent[0]["time"] == "1 hour ago"
    assert recent[0]["equipment"] == "Unknown"
    assert recent[0]["type"] == "student"
    starts = [r["startTime"] for r in recent]
    assert starts == sorted(starts, reverse=True)


def test_recent_activity_merges_kinds():
    records = [
        loan("student", start=NOW - timedelta(hours=2)),
        loan("outsider", start=NOW - timedelta(hours=1), end=NOW - timedelta(minutes=30)),
    ]
    recent = build_dashboard_summary(records, NOW)["recentActivity"]
    assert [(r["type"], r["status"]) for r in recent] == [("outsider", "Deadline"), ("student", "Borrowed")]


def test_most_used_equipment_by_combined_count():
    cam, mic, tripod = equipment(1, "Camera"), equipment(2, "Microphone"), equipment(3, "Tripod")
    records = [
        loan("student", equipment=cam),
        loan("student", equipment=cam),
        loan("outsider", equipment=mic),
        loan("outsider", equipment=mic),
        loan("outsider", equipment=mic),
        loan("student", equipment=tripod),
    ]
    summary = build_dashboard_summary(records, NOW, equipment=[cam, mic, tripod])

    assert summary["summary"]["mostUsedEquipment"] == "Microphone"
    assert summary["equipmentDistribution"] == {
        "labels": ["Microphone", "Camera", "Tripod"],
        "usage": [3, 2, 1],
    }


def test_most_used_tie_breaks_on_student_count():
    cam, mic = equipment(1, "Camera"), equipment(2, "Microphone")
    records = [
        loan("outsider", equipment=cam),
        loan("outsider", equipment=cam),
        loan("student", equipment=mic),
        loan("outsider", equipment=mic),
    ]
    summary = build_dashboard_summary(records, NOW, equipment=[cam, mic])
    assert summary["summary"]["mostUsedEquipment"] == "Microphone"


def test_distribution_limited_to_four():
    items = [equipment(i, f"Item {i}") for i in range(1, 7)]
    records = [loan(equipment=e) for e in items for _ in range(e.id)]
    summary = build_dashboard_summary(records, NOW, equipment=items)

    assert summary["equipmentDistribution"]["labels"] == ["Item 6", "Item 5", "Item 4", "Item 3"]
    assert summary["equipmentDistribution"]["usage"] == [6, 5, 4, 3]


def test_free_text_mode_skips_equipment_metrics():
    records = [
        LoanRecord(id=900, borrower_kind="student", name="A", email="a@example.edu",
                   start_time=NOW - timedelta(hours=1), status="Borrowed", equipment_name="Laptop"),
    ]
    summary = build_dashboard_summary(records, NOW, equipment_mode=EQUIPMENT_MODE_FREE_TEXT)

    assert summary["summary"]["mostUsedEquipment"] == "N/A"
    assert summary["equipmentDistribution"] == {"labels": [], "usage": []}
    assert summary["recentActivity"][0]["equipment"] == "Laptop"
