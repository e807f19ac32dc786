from lendtrack.models.equipment import Equipment
from lendtrack.extensions import db

class EquipmentRepo:
    @staticmethod
    def list_all():
        return Equipment.query.order_by(Equipment.id.asc()).all()

    @staticmethod
    def get(equipment_id: int):
        return db.session.get(Equipment, equipment_id)

    @staticmethod
    def get_by_serial(serial_number: str):
        return Equipment.query.filter_by(serial_number=serial_number).first()

    @staticmethod
    def create(equipment: Equipment):
        db.session.add(equipment)
        db.session.commit()
        return equipment

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(equipment: Equipment):
        db.session.delete(equipment)
        db.session.commit()
