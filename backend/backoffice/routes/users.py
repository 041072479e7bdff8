# Overview: Flask API routes for user accounts; parses input and returns JSON responses.

from flask import Blueprint, request, current_app

from ..decorators import require_auth
from ..errors import DuplicateEmailError
from ..responses import success_response, error_response
from ..services import user_service
from ..validation import ValidationError, validate_create_user


users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.post("")
@require_auth
def create_user():
    try:
        data = validate_create_user(request.get_json(silent=True))
    except ValidationError as exc:
        return error_response(str(exc), 400, exc.errors)

    try:
        user = user_service.create_user(
            name=data["name"],
            email=data["email"],
            password=data["password"],
            rounds=current_app.config["BCRYPT_ROUNDS"],
        )
    except DuplicateEmailError as exc:
        return error_response(exc.message, 400)

    return success_response(user.to_dict(), "User created", 201)


@users_bp.get("")
@require_auth
def list_users():
    users = user_service.list_users()
    return success_response([user.to_dict() for user in users], "Users retrieved successfully", 200)


@users_bp.get("/<user_id>")
@require_auth
def get_user(user_id: str):
    user = user_service.find_by_id(user_id)
    if not user:
        return error_response("User not found", 404)
    return success_response(user.to_dict(), "User retrieved successfully", 200)


@users_bp.get("/by-email/<path:email>")
@require_auth
def get_user_by_email(email: str):
    user = user_service.find_by_email(email)
    if not user:
        return error_response("User not found", 404)
    return success_response(user.to_dict(), "User retrieved successfully", 200)
