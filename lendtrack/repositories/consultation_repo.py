from lendtrack.models.consultation import ConsultationAppointment
from lendtrack.extensions import db

class ConsultationRepo:
    @staticmethod
    def list_by_kind(kind: str):
        return (
            ConsultationAppointment.query
            .filter_by(borrower_kind=kind)
            .order_by(ConsultationAppointment.appointment_date.asc(), ConsultationAppointment.id.asc())
            .all()
        )

    @staticmethod
    def create(appointment: ConsultationAppointment):
        db.session.add(appointment)
        db.session.commit()
        return appointment
