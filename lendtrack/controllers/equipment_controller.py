# lendtrack/controllers/equipment_controller.py

from flask import Blueprint, jsonify, current_app

from lendtrack.extensions import db
from lendtrack.services.equipment_service import EquipmentService
from lendtrack.utils.decorators import role_required, STAFF_ROLES
from lendtrack.utils.errors import LendTrackError, error_response
from lendtrack.utils.validation import json_body
from lendtrack.utils.serializers import equipment_to_dict

equipment_bp = Blueprint("equipment", __name__)


@equipment_bp.get("/")
def list_equipment():
    return jsonify({
        "success": True,
        "data": [equipment_to_dict(e) for e in EquipmentService.list_equipment()]
    })


@equipment_bp.get("/<int:equipment_id>")
def get_equipment(equipment_id: int):
    try:
        e = EquipmentService.get_equipment(equipment_id)
        return jsonify({"success": True, "data": equipment_to_dict(e)})
    except LendTrackError as e:
        return error_response(e)


@equipment_bp.post("/")
@role_required(*STAFF_ROLES)
def create_equipment():
    data = json_body()
    try:
        e = EquipmentService.create_equipment(data)
        return jsonify({"success": True, "data": equipment_to_dict(e)}), 201
    except LendTrackError as e:
        return error_response(e)


@equipment_bp.put("/<int:equipment_id>")
@role_required(*STAFF_ROLES)
def update_equipment(equipment_id: int):
    data = json_body()
    try:
        e = EquipmentService.update_equipment(equipment_id, data)
        return jsonify({"success": True, "data": equipment_to_dict(e)})
    except LendTrackError as e:
        return error_response(e)


@equipment_bp.delete("/<int:equipment_id>")
@role_required(*STAFF_ROLES)
def delete_equipment(equipment_id: int):
    try:
        EquipmentService.delete_equipment(equipment_id)
        return jsonify({"success": True, "message": "Equipment deleted"})
    except LendTrackError as e:
        return error_response(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"[equipment] delete failed: {e}")
        return jsonify({"success": False, "message": "Could not delete equipment"}), 500
