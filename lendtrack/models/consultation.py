from datetime import datetime
from lendtrack.extensions import db

class ConsultationAppointment(db.Model):
    __tablename__ = "consultations"

    id = db.Column(db.Integer, primary_key=True)
    borrower_kind = db.Column(db.String(20), nullable=False, index=True)  # student / outsider

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(15), nullable=True)

    student_id = db.Column(db.String(255), nullable=True)
    department = db.Column(db.String(255), nullable=True)
    course = db.Column(db.String(255), nullable=True)
    year = db.Column(db.String(255), nullable=True)

    address = db.Column(db.String(255), nullable=True)
    affiliation_or_office = db.Column(db.String(255), nullable=True)

    purpose = db.Column(db.String(500), nullable=False)
    appointment_date = db.Column(db.DateTime, nullable=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
