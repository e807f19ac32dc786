from flask import current_app

from lendtrack.models.consultation import ConsultationAppointment
from lendtrack.models.loan import BorrowerKind
from lendtrack.repositories.consultation_repo import ConsultationRepo
from lendtrack.utils.errors import ValidationError
from lendtrack.utils.validation import FormValidator, as_object

STUDENT_COLUMNS = ("student_id", "department", "course", "year")
OUTSIDER_COLUMNS = ("address", "affiliation_or_office")


class ConsultationService:
    @staticmethod
    def _kind(value) -> BorrowerKind:
        kind = BorrowerKind.parse(value)
        if kind is None:
            raise ValidationError("kind must be student or outsider", {"kind": "invalid type"})
        return kind

    @staticmethod
    def list_appointments(kind):
        return ConsultationRepo.list_by_kind(ConsultationService._kind(kind).value)

    @staticmethod
    def create_appointment(data: dict) -> ConsultationAppointment:
        data = as_object(data)
        kind = ConsultationService._kind(data.get("kind") or data.get("type"))

        v = FormValidator(data)
        v.string("name", required=True)
        v.email("email")
        v.string("phone", max_length=15)
        v.string("purpose", required=True, max_length=500)
        v.datetime("appointment_date")

        if kind is BorrowerKind.STUDENT:
            v.string("student_id", required=True)
            v.string("department")
            v.string("course")
            v.string("year")
            columns = STUDENT_COLUMNS
        else:
            v.string("address", required=True)
            v.string("affiliation_or_office", required=True)
            columns = OUTSIDER_COLUMNS

        cleaned = v.raise_if_errors()

        appointment = ConsultationAppointment(borrower_kind=kind.value)
        for field in ("name", "email", "phone", "purpose", "appointment_date") + columns:
            setattr(appointment, field, cleaned.get(field))

        ConsultationRepo.create(appointment)
        current_app.logger.info(f"[consultations] created id={appointment.id} type={kind.value}")
        return appointment
