from datetime import datetime
from enum import Enum

from lendtrack.extensions import db


class BorrowerKind(str, Enum):
    STUDENT = "student"
    OUTSIDER = "outsider"

    @classmethod
    def parse(cls, value):
        """Accepts 'student' / 'Student' / BorrowerKind.STUDENT; None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return None


STATUS_BORROWED = "Borrowed"
STATUS_RETURNED = "Returned"


class LoanRecord(db.Model):
    __tablename__ = "loan_records"

    id = db.Column(db.Integer, primary_key=True)
    borrower_kind = db.Column(db.String(20), nullable=False, index=True)  # student / outsider

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(20), nullable=True)

    # student only
    student_id = db.Column(db.String(255), nullable=True, index=True)
    department = db.Column(db.String(255), nullable=True)
    course = db.Column(db.String(255), nullable=True)
    year = db.Column(db.String(255), nullable=True)

    # outsider only
    address = db.Column(db.String(255), nullable=True)
    affiliation_or_office = db.Column(db.String(255), nullable=True)

    equipment_id = db.Column(db.Integer, db.ForeignKey("equipment.id"), nullable=True, index=True)
    equipment_name = db.Column(db.String(255), nullable=True)

    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(50), nullable=False, default=STATUS_BORROWED)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    equipment = db.relationship("Equipment", backref="loans")

    @property
    def kind(self):
        return BorrowerKind.parse(self.borrower_kind)

    @property
    def equipment_label(self):
        if self.equipment is not None:
            return self.equipment.name
        return self.equipment_name
