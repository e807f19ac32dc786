from flask import Blueprint, jsonify

from lendtrack.services.dashboard_service import DashboardService
from lendtrack.utils.errors import AggregationError

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.get("/dashboard-data")
def dashboard_data():
    try:
        return jsonify(DashboardService.build_summary())
    except AggregationError as e:
        # already logged by the service
        return jsonify({"error": "Failed to load dashboard data", "message": e.message}), 500
