# lendtrack/controllers/loan_controller.py
from datetime import datetime

from flask import Blueprint, request, jsonify, current_app

from lendtrack.extensions import db
from lendtrack.services.loan_service import LoanService
from lendtrack.utils.decorators import role_required, STAFF_ROLES
from lendtrack.utils.errors import LendTrackError, error_response
from lendtrack.utils.validation import json_body
from lendtrack.utils.serializers import loan_to_dict
from lendtrack.services.status_resolver import display_status_for
from lendtrack.utils.timefmt import iso

loan_bp = Blueprint("loans", __name__)


def _server_error(action: str, e: Exception):
    db.session.rollback()
    current_app.logger.exception(f"[loans] {action} failed: {e}")
    return jsonify({"success": False, "message": f"Could not {action} loan record"}), 500


@loan_bp.get("/")
def list_loans():
    now = datetime.utcnow()
    try:
        rows = LoanService.list_loans(
            request.args.get("kind") or request.args.get("type"),
            now,
            display_status=request.args.get("status") or None,
        )
    except LendTrackError as e:
        return error_response(e)

    return jsonify({"success": True, "data": [loan_to_dict(loan, status) for loan, status in rows]})


@loan_bp.post("/")
def create_loan():
    data = json_body()
    try:
        loan = LoanService.create_loan(data)
        return jsonify({"success": True, "data": loan_to_dict(loan, display_status_for(loan, datetime.utcnow()))}), 201
    except LendTrackError as e:
        return error_response(e)
    except Exception as e:
        return _server_error("create", e)


@loan_bp.get("/<int:loan_id>")
def show_loan(loan_id: int):
    try:
        loan = LoanService.get_loan(loan_id, request.args.get("kind") or request.args.get("type"))
    except LendTrackError as e:
        return error_response(e)
    return jsonify({"success": True, "data": loan_to_dict(loan, display_status_for(loan, datetime.utcnow()))})


@loan_bp.put("/<int:loan_id>")
@role_required(*STAFF_ROLES)
def update_loan(loan_id: int):
    data = json_body()
    try:
        loan = LoanService.update_loan(loan_id, data)
        return jsonify({"success": True, "data": loan_to_dict(loan, display_status_for(loan, datetime.utcnow()))})
    except LendTrackError as e:
        return error_response(e)
    except Exception as e:
        return _server_error("update", e)


@loan_bp.delete("/<int:loan_id>")
@role_required(*STAFF_ROLES)
def delete_loan(loan_id: int):
    try:
        LoanService.delete_loan(loan_id, request.args.get("kind") or request.args.get("type"))
        return jsonify({"success": True, "message": "Loan record deleted"})
    except LendTrackError as e:
        return error_response(e)
    except Exception as e:
        return _server_error("delete", e)


@loan_bp.patch("/<int:loan_id>/status")
@role_required(*STAFF_ROLES)
def update_status(loan_id: int):
    data = json_body()
    try:
        result = LoanService.update_status(loan_id, data.get("type") or data.get("kind"), data.get("status"))
        return jsonify({"success": True, "status": result["status"], "end_time": iso(result["end_time"])})
    except LendTrackError as e:
        return error_response(e)
    except Exception as e:
        return _server_error("update status of", e)
