from flask import Blueprint, request, jsonify

from lendtrack.services.consultation_service import ConsultationService
from lendtrack.utils.errors import LendTrackError, error_response
from lendtrack.utils.validation import json_body
from lendtrack.utils.serializers import consultation_to_dict

consultation_bp = Blueprint("consultations", __name__)


@consultation_bp.get("/")
def list_consultations():
    try:
        rows = ConsultationService.list_appointments(request.args.get("kind") or request.args.get("type"))
    except LendTrackError as e:
        return error_response(e)
    return jsonify({"success": True, "data": [consultation_to_dict(c) for c in rows]})


@consultation_bp.post("/")
def create_consultation():
    data = json_body()
    try:
        c = ConsultationService.create_appointment(data)
        return jsonify({"success": True, "data": consultation_to_dict(c)}), 201
    except LendTrackError as e:
        return error_response(e)
