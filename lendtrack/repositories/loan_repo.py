from sqlalchemy.orm import joinedload

from lendtrack.models.loan import LoanRecord, STATUS_RETURNED
from lendtrack.extensions import db

class LoanRepo:
    @staticmethod
    def get(loan_id: int, kind: str):
        return LoanRecord.query.filter_by(id=loan_id, borrower_kind=kind).first()

    @staticmethod
    def list_by_kind(kind: str):
        return (
            LoanRecord.query
            .options(joinedload(LoanRecord.equipment))
            .filter_by(borrower_kind=kind)
            .order_by(LoanRecord.start_time.desc(), LoanRecord.id.desc())
            .all()
        )

    @staticmethod
    def count_unreturned_for_equipment(equipment_id: int) -> int:
        return LoanRecord.query.filter(
            LoanRecord.equipment_id == equipment_id,
            LoanRecord.status != STATUS_RETURNED,
        ).count()

    @staticmethod
    def create(loan: LoanRecord):
        db.session.add(loan)
        db.session.commit()
        return loan

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def delete(loan: LoanRecord):
        db.session.delete(loan)
        db.session.commit()
