from flask import current_app, jsonify, request
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from quizian import db
from quizian.auth import auth_bp
from quizian.auth.models import User
from quizian.auth.utils import (
    hash_password,
    is_valid_username,
    normalize_username,
    validate_password,
    verify_password,
)
from quizian.security import SecurityLogger, get_account_lockout, rate_limit


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@auth_bp.route("/", methods=["GET"])
def auth_root():
    """Simple health/info endpoint for auth API."""
    base_path = auth_bp.url_prefix
    return jsonify(
        {
            "status": "ok",
            "message": "Auth API is running",
            "endpoints": [
                f"{base_path}/register",
                f"{base_path}/login",
                f"{base_path}/logout",
                f"{base_path}/me",
            ],
        }
    ), 200


@auth_bp.route("/register", methods=["POST"])
@rate_limit(max_requests=10, window_seconds=60)
def register():
    data = _json_body()

    username = normalize_username(data.get("username"))
    full_name = data.get("full_name")
    full_name = full_name.strip() if isinstance(full_name, str) else ""
    password = data.get("password")
    if not isinstance(password, str):
        password = ""

    if not username or not password or not full_name:
        return jsonify({"success": False, "error": "Username, password, and full_name are required"}), 400

    if not is_valid_username(username):
        return jsonify({
            "success": False,
            "error": "Username must be 3-50 characters of letters, digits, '_' or '.'"
        }), 400

    ok, error = validate_password(password)
    if not ok:
        return jsonify({"success": False, "error": error}), 400

    try:
        if User.query.filter_by(username=username).first():
            return jsonify({"success": False, "error": "Username already exists"}), 409

        user = User(
            username=username,
            full_name=full_name,
            password_hash=hash_password(password),
        )
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # Concurrent registration with the same username
        db.session.rollback()
        return jsonify({"success": False, "error": "Username already exists"}), 409
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error while registering user")
        return jsonify({"success": False, "error": "Error creating user"}), 500

    login_user(user)
    current_app.logger.info(f"User registered: id={user.id}, username={user.username}")
    return jsonify({"success": True, "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
@rate_limit(max_requests=10, window_seconds=60)
def login():
    data = _json_body()

    username = normalize_username(data.get("username"))
    password = data.get("password")
    if not isinstance(password, str):
        password = ""

    if not username or not password:
        return jsonify({"success": False, "error": "Username and password are required"}), 400

    lockout = get_account_lockout()
    locked, locked_until = lockout.is_locked(username)
    if locked:
        return jsonify({
            "success": False,
            "error": "Too many failed login attempts. Please try again later.",
            "locked_until": locked_until.isoformat(),
        }), 423

    try:
        user = User.query.filter_by(username=username).first()
    except SQLAlchemyError:
        current_app.logger.exception("Error while logging in")
        return jsonify({"success": False, "error": "Error logging in"}), 500

    if not user or not verify_password(password, user.password_hash):
        lockout.record_failed_attempt(username)
        SecurityLogger.log_failed_login(username)
        return jsonify({
            "success": False,
            "error": "Invalid credentials",
            "remaining_attempts": lockout.get_remaining_attempts(username),
        }), 401

    lockout.record_successful_attempt(username)
    login_user(user)
    SecurityLogger.log_successful_login(user.id, user.username)
    return jsonify({"success": True, "user": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True, "message": "Logged out"}), 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify({"success": True, "user": current_user.to_dict()}), 200
