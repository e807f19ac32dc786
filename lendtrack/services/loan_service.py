from datetime import datetime

from flask import current_app

from lendtrack.config import EQUIPMENT_MODE_FREE_TEXT
from lendtrack.models.loan import LoanRecord, BorrowerKind, STATUS_BORROWED, STATUS_RETURNED
from lendtrack.repositories.equipment_repo import EquipmentRepo
from lendtrack.repositories.loan_repo import LoanRepo
from lendtrack.services.status_resolver import display_status_for, DISPLAY_STATUSES
from lendtrack.utils.errors import ValidationError, NotFoundError
from lendtrack.utils.validation import FormValidator, as_object

STATUS_MAX_LENGTH = 50


def _student_fields(v: FormValidator):
    v.string("student_id", required=True)
    v.string("department")
    v.string("course")
    v.string("year")


def _outsider_fields(v: FormValidator):
    v.string("address")
    v.string("affiliation_or_office")


# kind-specific columns, keyed by borrower kind
KIND_FIELDS = {
    BorrowerKind.STUDENT: (_student_fields, ("student_id", "department", "course", "year")),
    BorrowerKind.OUTSIDER: (_outsider_fields, ("address", "affiliation_or_office")),
}

COMMON_FIELDS = ("name", "email", "phone", "start_time", "end_time", "status", "equipment_id", "equipment_name")


class LoanService:
    @staticmethod
    def parse_kind(value, field="type") -> BorrowerKind:
        kind = BorrowerKind.parse(value)
        if kind is None:
            raise ValidationError(f"{field} must be student or outsider", {field: "invalid borrower type"})
        return kind

    @staticmethod
    def _equipment_mode():
        return current_app.config.get("EQUIPMENT_TRACKING_MODE")

    @staticmethod
    def _validate(data: dict, kind: BorrowerKind) -> dict:
        v = FormValidator(data)
        v.string("name", required=True)
        v.email("email")
        v.string("phone", max_length=20)

        validate_kind, _columns = KIND_FIELDS[kind]
        validate_kind(v)

        start = v.datetime("start_time", required=True)
        end = v.datetime("end_time")
        if start and end and end < start:
            v.error("end_time", "end_time must be a date after or equal to start_time")

        status = v.string("status", max_length=STATUS_MAX_LENGTH)
        v.cleaned["status"] = status or STATUS_BORROWED

        if LoanService._equipment_mode() == EQUIPMENT_MODE_FREE_TEXT:
            v.string("equipment_name", required=True)
            v.cleaned["equipment_id"] = None
        else:
            equipment_id = v.integer("equipment_id", required=True)
            if equipment_id is not None and EquipmentRepo.get(equipment_id) is None:
                v.error("equipment_id", "selected equipment_id is invalid")
            v.cleaned["equipment_name"] = None

        return v.raise_if_errors()

    @staticmethod
    def list_loans(kind, now: datetime, display_status: str | None = None):
        """[(loan, display_status)] for one borrower kind, newest start first."""
        kind = LoanService.parse_kind(kind, "kind")
        if display_status is not None and display_status not in DISPLAY_STATUSES:
            raise ValidationError("status filter must be Borrowed, Deadline or Returned")

        rows = [(loan, display_status_for(loan, now)) for loan in LoanRepo.list_by_kind(kind.value)]
        if display_status is not None:
            rows = [r for r in rows if r[1] == display_status]
        return rows

    @staticmethod
    def get_loan(loan_id: int, kind) -> LoanRecord:
        kind = LoanService.parse_kind(kind, "kind")
        loan = LoanRepo.get(loan_id, kind.value)
        if not loan:
            raise NotFoundError("Loan record not found")
        return loan

    @staticmethod
    def create_loan(data: dict) -> LoanRecord:
        data = as_object(data)
        kind = LoanService.parse_kind(data.get("kind") or data.get("type"), "kind")
        cleaned = LoanService._validate(data, kind)

        _validate_kind, columns = KIND_FIELDS[kind]
        loan = LoanRecord(borrower_kind=kind.value)
        for field in COMMON_FIELDS + columns:
            setattr(loan, field, cleaned.get(field))

        LoanRepo.create(loan)
        current_app.logger.info(f"[loans] created id={loan.id} type={kind.value} status={loan.status}")
        return loan

    @staticmethod
    def update_loan(loan_id: int, data: dict) -> LoanRecord:
        data = as_object(data)
        kind = LoanService.parse_kind(data.get("kind") or data.get("type"), "kind")
        loan = LoanService.get_loan(loan_id, kind)
        cleaned = LoanService._validate(data, kind)

        # status only moves through update_status (Returned must stamp end_time)
        _validate_kind, columns = KIND_FIELDS[kind]
        for field in COMMON_FIELDS + columns:
            if field != "status":
                setattr(loan, field, cleaned.get(field))

        LoanRepo.commit()
        current_app.logger.info(f"[loans] updated id={loan.id} type={kind.value}")
        return loan

    @staticmethod
    def delete_loan(loan_id: int, kind):
        loan = LoanService.get_loan(loan_id, kind)
        kind_value = loan.borrower_kind
        LoanRepo.delete(loan)
        current_app.logger.info(f"[loans] deleted id={loan_id} type={kind_value}")

    @staticmethod
    def update_status(loan_id: int, kind, new_status: str, now: datetime | None = None) -> dict:
        """
        The only post-creation mutation in the normal flow.
        Marking "Returned" always stamps end_time with `now`, replacing any
        expected return time that was stored before.
        """
        kind = LoanService.parse_kind(kind)

        status = (new_status or "").strip() if isinstance(new_status, str) else ""
        if not status:
            raise ValidationError("status is required", {"status": "status is required"})
        if len(status) > STATUS_MAX_LENGTH:
            raise ValidationError(
                f"status may not be longer than {STATUS_MAX_LENGTH} characters",
                {"status": "too long"},
            )

        loan = LoanRepo.get(loan_id, kind.value)
        if not loan:
            raise NotFoundError("Loan record not found")

        if now is None:
            now = datetime.utcnow()

        loan.status = status
        if status == STATUS_RETURNED:
            loan.end_time = now

        LoanRepo.commit()
        current_app.logger.info(
            f"[loans] status updated id={loan.id} type={kind.value} status={status} end_time={loan.end_time}"
        )
        return {"status": loan.status, "end_time": loan.end_time}
