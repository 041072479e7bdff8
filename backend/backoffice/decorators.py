# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, g

from .errors import InvalidTokenError
from .responses import error_response
from .services.token_service import get_token_issuer


def bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def require_auth(f):
    """
    Require a valid session token.

    Sets the following Flask g attributes:
    - g.token: the raw bearer token
    - g.claims: the verified UserClaims

    Only the signature and validity window are checked here; routes that need
    the user row call auth_service.identify (or user_service.find_by_id).

    Returns 401 with the same InvalidTokenError message for a missing,
    malformed, forged or expired token.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = bearer_token()
        if not token:
            return error_response(InvalidTokenError().message, 401)

        try:
            claims = get_token_issuer().verify(token)
        except InvalidTokenError as exc:
            return error_response(exc.message, 401)

        g.token = token
        g.claims = claims

        return f(*args, **kwargs)

    return decorated_function
