from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt, verify_jwt_in_request
from lendtrack.services.auth_service import AuthService
from lendtrack.repositories.user_repo import UserRepo
from lendtrack.utils.errors import LendTrackError, error_response
from lendtrack.utils.validation import json_body

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = json_body()

    username = (data.get("username") or "").strip()
    email = (data.get("email") or "").strip()
    password = (data.get("password") or "").strip()

    if not username or not email or not password:
        return jsonify({"success": False, "message": "username/email/password are required"}), 400

    # first account bootstraps the admin; after that only an admin adds operators
    bootstrap = AuthService.first_account()
    if not bootstrap:
        verify_jwt_in_request()
        if (get_jwt() or {}).get("role") != "admin":
            return jsonify({"success": False, "message": "Forbidden"}), 403
        role = (data.get("role") or "staff").strip()

    try:
        if bootstrap:
            user = AuthService.bootstrap_admin(username, email, password)
        else:
            user = AuthService.register(username=username, email=email, password=password, role=role)
        return jsonify({"success": True, "id": user.id, "username": user.username, "role": user.role}), 201
    except LendTrackError as e:
        return error_response(e)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = json_body()
    try:
        token, user = AuthService.login(
            (data.get("username") or "").strip(),
            (data.get("password") or "").strip()
        )
        return jsonify({
            "success": True,
            "access_token": token,
            "user": {"id": user.id, "username": user.username, "role": user.role}
        })
    except LendTrackError as e:
        return jsonify({"success": False, "message": e.message}), 401


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    user_id = int(get_jwt_identity())
    claims = get_jwt()
    user = UserRepo.get_by_id(user_id)
    if user is None:
        return jsonify({"success": False, "message": "User not found"}), 404

    return jsonify({
        "success": True,
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": claims.get("role", user.role)
        }
    })
