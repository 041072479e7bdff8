# backend/backoffice/config.py
from __future__ import annotations
import os


def _split_origins(value: str) -> set[str]:
    return {origin.strip() for origin in value.split(",") if origin.strip()}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/backoffice.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///backoffice.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session token signing. JWT_KEY must be at least 32 bytes for HS256.
    JWT_KEY = os.environ.get("JWT_KEY", "dev-jwt-signing-key-change-me-0123456789")
    JWT_ISSUER = os.environ.get("JWT_ISSUER", "backoffice")
    JWT_AUDIENCE = os.environ.get("JWT_AUDIENCE", "backoffice-clients")
    JWT_EXPIRATION_DAYS = os.environ.get("JWT_EXPIRATION_DAYS", "7")

    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    CORS_ALLOWED_ORIGINS = _split_origins(os.environ.get(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:4173,http://127.0.0.1:4173",
    ))
