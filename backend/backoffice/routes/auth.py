# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/backoffice/routes/auth.py
"""
Authentication API routes

- POST /api/auth/login     email + password -> identity and session token
- POST /api/auth/register  new account -> identity and session token
- GET  /api/auth/me        bearer token -> current user

Login failures return one message whether or not the email exists.
"""

from flask import Blueprint, request, current_app, g

from ..errors import InvalidCredentialsError, DuplicateEmailError, InvalidTokenError, StaleIdentityError
from ..decorators import require_auth
from ..responses import success_response, error_response
from ..services import auth_service
from ..services.token_service import get_token_issuer
from ..validation import ValidationError, validate_login, validate_register


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and issue a session token.

    Token must be sent as "Authorization: Bearer <token>" on protected routes.
    """
    try:
        data = validate_login(request.get_json(silent=True))
    except ValidationError as exc:
        return error_response(str(exc), 400, exc.errors)

    try:
        result = auth_service.login(
            data["email"],
            data["password"],
            issuer=get_token_issuer(),
        )
    except InvalidCredentialsError as exc:
        return error_response(exc.message, 401)

    current_app.logger.info("User %s logged in", result.user.id)
    return success_response(result.to_dict(), "Login successful", 200)


@auth_bp.post("/register")
def register_route():
    """Create an account and return a session token for it."""
    try:
        data = validate_register(request.get_json(silent=True))
    except ValidationError as exc:
        return error_response(str(exc), 400, exc.errors)

    try:
        result = auth_service.register(
            data["name"],
            data["email"],
            data["password"],
            data["avatar"],
            issuer=get_token_issuer(),
            rounds=current_app.config["BCRYPT_ROUNDS"],
        )
    except DuplicateEmailError as exc:
        return error_response(exc.message, 400)

    current_app.logger.info("Registered user %s", result.user.id)
    return success_response(result.to_dict(), "Registration successful", 201)


@auth_bp.get("/me")
@require_auth
def me_route():
    """Return the current state of the authenticated user."""
    try:
        user = auth_service.identify(g.token, issuer=get_token_issuer())
    except InvalidTokenError as exc:
        return error_response(exc.message, 401)
    except StaleIdentityError as exc:
        return error_response(exc.message, 404)

    return success_response(user.to_dict(), "User retrieved successfully", 200)
