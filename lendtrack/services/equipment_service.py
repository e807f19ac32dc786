from flask import current_app

from lendtrack.models.equipment import Equipment
from lendtrack.repositories.equipment_repo import EquipmentRepo
from lendtrack.repositories.loan_repo import LoanRepo
from lendtrack.utils.errors import ValidationError, NotFoundError
from lendtrack.utils.validation import FormValidator


class EquipmentService:
    @staticmethod
    def list_equipment():
        return EquipmentRepo.list_all()

    @staticmethod
    def get_equipment(equipment_id: int):
        equipment = EquipmentRepo.get(equipment_id)
        if not equipment:
            raise NotFoundError("Equipment not found")
        return equipment

    @staticmethod
    def _validate(data: dict, current_id: int | None = None, create: bool = True) -> dict:
        v = FormValidator(data)
        v.string("name", required=True)
        serial = v.string("serial_number", required=True)
        v.string("model", required=create)
        v.string("description", required=create, max_length=1000)

        if serial:
            other = EquipmentRepo.get_by_serial(serial)
            if other is not None and other.id != current_id:
                v.error("serial_number", "serial_number has already been taken")

        return v.raise_if_errors()

    @staticmethod
    def create_equipment(data: dict) -> Equipment:
        cleaned = EquipmentService._validate(data)
        equipment = Equipment(
            name=cleaned["name"],
            serial_number=cleaned["serial_number"],
            model=cleaned["model"],
            description=cleaned["description"],
        )
        EquipmentRepo.create(equipment)
        current_app.logger.info(f"[equipment] created id={equipment.id} serial={equipment.serial_number}")
        return equipment

    @staticmethod
    def update_equipment(equipment_id: int, data: dict) -> Equipment:
        equipment = EquipmentService.get_equipment(equipment_id)
        cleaned = EquipmentService._validate(data, current_id=equipment.id, create=False)

        for k in ["name", "serial_number", "model", "description"]:
            if k in data:
                setattr(equipment, k, cleaned[k])

        EquipmentRepo.update()
        return equipment

    @staticmethod
    def delete_equipment(equipment_id: int):
        equipment = EquipmentService.get_equipment(equipment_id)

        if LoanRepo.count_unreturned_for_equipment(equipment.id) > 0:
            raise ValidationError("This equipment is still borrowed. Mark the loans returned first.")

        # returned loans keep the name they were lent under
        for loan in list(equipment.loans):
            loan.equipment_name = equipment.name
            loan.equipment = None

        EquipmentRepo.delete(equipment)
        current_app.logger.info(f"[equipment] deleted id={equipment_id}")
