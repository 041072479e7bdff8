# Overview: Typed failure outcomes raised by the service layer.

"""
Error taxonomy for the back office core.

Services raise these; only the HTTP layer (routes and the handlers registered
in create_app) decides status codes and response bodies.

Authentication failures carry fixed messages so callers cannot tell an unknown
email from a wrong password, or an expired token from a forged one.
"""


class BackofficeError(Exception):
    """Base class for all domain errors."""

    default_message = "Operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidCredentialsError(BackofficeError):
    """Unknown email or wrong password. Deliberately one shape for both."""

    default_message = "Invalid email or password"

    def __init__(self):
        super().__init__(self.default_message)


class DuplicateEmailError(BackofficeError):
    """Registration conflict on the email uniqueness invariant."""

    default_message = "Email already exists"


class InvalidTokenError(BackofficeError):
    """Missing, malformed, forged or expired session token."""

    default_message = "Invalid or expired token"

    def __init__(self):
        super().__init__(self.default_message)


class StaleIdentityError(BackofficeError):
    """Token is valid but the user it names no longer exists."""

    default_message = "User not found"


class StorageUnavailableError(BackofficeError):
    """Database transport or infrastructure fault. Never retried in-core."""

    default_message = "Storage unavailable"


class ReferentialIntegrityError(BackofficeError):
    """Delete refused because dependent rows still reference the target."""

    default_message = "Record is still referenced"


class RecordNotFoundError(BackofficeError):
    default_message = "Record not found"
