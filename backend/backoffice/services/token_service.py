# Overview: Service-layer session tokens; issues and verifies signed, time-bound JWTs.

"""
Stateless Session Tokens

Tokens are compact HS256 JWTs (header.claims.signature). Everything needed to
trust one travels inside it, so verification is pure computation: signature,
issuer, audience and expiry checks against the settings this issuer was built
with. No session table, no storage access.

CLAIMS:
- sub: user id
- email, name: identity snapshot at issuance (display only; callers re-fetch)
- jti: unique token id
- iss, aud, iat, exp

Every rejection surfaces as the same InvalidTokenError so clients cannot probe
whether a token expired or was forged. The log line keeps the real reason.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta

import jwt
from flask import current_app

from ..errors import InvalidTokenError
from backoffice.time_utils import as_aware, from_timestamp, utcnow


logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_DAYS = 7
DEFAULT_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "email", "name", "jti", "iss", "aud", "exp"]

EXTENSION_KEY = "token_issuer"


class TokenConfigurationError(RuntimeError):
    """Raised at startup when signing settings are missing or unusable."""


@dataclass(frozen=True)
class TokenSettings:
    key: str
    issuer: str
    audience: str
    expiration_days: int = DEFAULT_EXPIRATION_DAYS
    algorithm: str = DEFAULT_ALGORITHM

    @classmethod
    def from_config(cls, config: Mapping) -> "TokenSettings":
        """
        Build settings from a Flask config mapping.

        JWT_KEY, JWT_ISSUER and JWT_AUDIENCE are required. JWT_EXPIRATION_DAYS
        falls back to 7 when unset or blank.
        """
        key = config.get("JWT_KEY")
        if not key:
            raise TokenConfigurationError("JWT_KEY is not configured")

        issuer = config.get("JWT_ISSUER")
        audience = config.get("JWT_AUDIENCE")
        if not issuer or not audience:
            raise TokenConfigurationError("JWT_ISSUER and JWT_AUDIENCE must be configured")

        raw_days = config.get("JWT_EXPIRATION_DAYS")
        if raw_days is None or str(raw_days).strip() == "":
            days = DEFAULT_EXPIRATION_DAYS
        else:
            try:
                days = int(str(raw_days).strip())
            except ValueError:
                raise TokenConfigurationError("JWT_EXPIRATION_DAYS must be an integer")
        if days <= 0:
            raise TokenConfigurationError("JWT_EXPIRATION_DAYS must be positive")

        return cls(key=key, issuer=issuer, audience=audience, expiration_days=days)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime  # UTC-naive, whole seconds
    token_id: str


@dataclass(frozen=True)
class UserClaims:
    user_id: str
    email: str
    name: str
    token_id: str
    expires_at: datetime


class TokenIssuer:
    """
    Mints and checks session tokens for one set of signing settings.

    Immutable after construction, so a single instance is shared by every
    request thread.
    """

    def __init__(self, settings: TokenSettings):
        self.settings = settings

    def issue(
        self,
        user_id,
        email: str,
        name: str,
        *,
        now: datetime | None = None,
        expires_at: datetime | None = None,
    ) -> IssuedToken:
        """
        Sign a token for the given identity.

        expires_at defaults to now + expiration_days. Both are truncated to
        whole seconds, the resolution of the exp claim.
        """
        now = (now or utcnow()).replace(microsecond=0)
        if expires_at is None:
            expires_at = now + timedelta(days=self.settings.expiration_days)
        expires_at = expires_at.replace(microsecond=0)

        token_id = str(uuid.uuid4())
        payload = {
            "sub": str(user_id),
            "email": email,
            "name": name,
            "jti": token_id,
            "iss": self.settings.issuer,
            "aud": self.settings.audience,
            "iat": int(as_aware(now).timestamp()),
            "exp": int(as_aware(expires_at).timestamp()),
        }
        token = jwt.encode(payload, self.settings.key, algorithm=self.settings.algorithm)
        return IssuedToken(token=token, expires_at=expires_at, token_id=token_id)

    def verify(self, token: str | None) -> UserClaims:
        """
        Check signature, issuer, audience and expiry.

        Returns the identity claims, or raises InvalidTokenError for any
        failure. Never touches storage.
        """
        if not token or not isinstance(token, str):
            logger.info("Token rejected: missing")
            raise InvalidTokenError()

        try:
            payload = jwt.decode(
                token,
                self.settings.key,
                algorithms=[self.settings.algorithm],
                audience=self.settings.audience,
                issuer=self.settings.issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Token rejected: expired")
            raise InvalidTokenError()
        except jwt.InvalidSignatureError:
            logger.warning("Token rejected: bad signature")
            raise InvalidTokenError()
        except (jwt.InvalidIssuerError, jwt.InvalidAudienceError):
            logger.warning("Token rejected: issuer or audience mismatch")
            raise InvalidTokenError()
        except jwt.PyJWTError as exc:
            logger.info("Token rejected: %s", exc.__class__.__name__)
            raise InvalidTokenError()

        for claim in ("sub", "email", "name", "jti"):
            if not isinstance(payload.get(claim), str):
                logger.info("Token rejected: malformed %s claim", claim)
                raise InvalidTokenError()

        return UserClaims(
            user_id=payload["sub"],
            email=payload["email"],
            name=payload["name"],
            token_id=payload["jti"],
            expires_at=from_timestamp(payload["exp"]),
        )


def init_app(app) -> TokenIssuer:
    """Build the issuer from app config and attach it to the app."""
    issuer = TokenIssuer(TokenSettings.from_config(app.config))
    app.extensions[EXTENSION_KEY] = issuer
    return issuer


def get_token_issuer() -> TokenIssuer:
    return current_app.extensions[EXTENSION_KEY]
