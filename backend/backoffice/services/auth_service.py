# Overview: Service-layer operations for auth; composes credential store, hasher and tokens.

"""
Authentication Orchestrator

Three flows, each independent and stateless per call:

- login: email + password -> identity and session token
- register: new account -> identity and session token
- identify: session token -> the user as currently stored

SECURITY NOTES:
- Unknown email and wrong password raise the same InvalidCredentialsError, so
  the response never reveals whether an address is registered
- identify trusts the token for the user id only and always re-reads the user
- Registration and token issuance are not one transaction; issuance cannot
  fail once the insert has committed
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from ..errors import InvalidCredentialsError, InvalidTokenError, DuplicateEmailError, StaleIdentityError
from ..models import User
from . import user_service
from .password_service import DEFAULT_ROUNDS, hash_password, verify_password
from .token_service import TokenIssuer
from backoffice.time_utils import to_utc_z


@dataclass
class AuthResult:
    """Identity plus freshly issued session token."""
    user: User
    token: str
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": str(self.user.id),
            "name": self.user.name,
            "email": self.user.email,
            "avatar": self.user.avatar,
            "token": self.token,
            "expiresAt": to_utc_z(self.expires_at),
        }


def _issue_for(user: User, issuer: TokenIssuer) -> AuthResult:
    issued = issuer.issue(user.id, user.email, user.name)
    return AuthResult(user=user, token=issued.token, expires_at=issued.expires_at)


def login(email: str, password: str, *, issuer: TokenIssuer) -> AuthResult:
    """
    Authenticate by email (case-insensitive) and password.

    Raises InvalidCredentialsError if the email is unknown or the password does
    not match; both cases are indistinguishable to the caller.
    """
    user = user_service.find_by_email(email)
    if user is None:
        raise InvalidCredentialsError()

    if not verify_password(password, user.password):
        raise InvalidCredentialsError()

    return _issue_for(user, issuer)


def register(
    name: str,
    email: str,
    password: str,
    avatar: str | None = None,
    *,
    issuer: TokenIssuer,
    rounds: int = DEFAULT_ROUNDS,
) -> AuthResult:
    """
    Create an account and sign the new user in.

    Raises DuplicateEmailError if the email exists in any letter case, including
    when a concurrent registration wins the race to the unique index.
    """
    if user_service.exists_by_email(email):
        raise DuplicateEmailError()

    user = User(
        id=uuid.uuid4(),
        name=name,
        email=email.strip(),
        password=hash_password(password, rounds=rounds),
        avatar=avatar or None,
    )
    user_service.insert_user(user)

    return _issue_for(user, issuer)


def identify(token: str, *, issuer: TokenIssuer) -> User:
    """
    Resolve a session token to the current user row.

    Raises InvalidTokenError for any token problem, StaleIdentityError if the
    token is valid but its user has since been removed.
    """
    claims = issuer.verify(token)

    user_id = user_service.parse_user_id(claims.user_id)
    if user_id is None:
        # Signed by us but not naming a user id: treat like any bad token.
        raise InvalidTokenError()

    user = user_service.find_by_id(user_id)
    if user is None:
        raise StaleIdentityError()
    return user
