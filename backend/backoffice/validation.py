from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 255
AVATAR_MAX_LENGTH = 500

# Local part, one '@', a dotted domain. Deliverability is not our problem.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """
    400-level input problem.

    errors holds one {"property", "message"} entry per failed rule so the
    client can show every problem at once.
    """

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


@dataclass(frozen=True)
class FieldRule:
    """
    Declarative checks for one string field of a JSON payload.

    optional fields are only checked when a non-empty value is supplied.
    """
    name: str
    label: str
    required: bool = True
    min_length: int | None = None
    max_length: int | None = None
    email: bool = False


LOGIN_RULES = (
    FieldRule("email", "Email", max_length=EMAIL_MAX_LENGTH, email=True),
    FieldRule("password", "Password"),
)

REGISTER_RULES = (
    FieldRule("name", "Name", max_length=NAME_MAX_LENGTH),
    FieldRule("email", "Email", max_length=EMAIL_MAX_LENGTH, email=True),
    FieldRule("password", "Password", min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH),
    FieldRule("avatar", "Avatar URL", required=False, max_length=AVATAR_MAX_LENGTH),
)

CREATE_USER_RULES = REGISTER_RULES[:3]


def _check_field(rule: FieldRule, raw: Any) -> list[str]:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return [f"{rule.label} is required"] if rule.required else []
    if not isinstance(raw, str):
        return [f"{rule.label} must be a string"]

    problems = []
    value = raw if rule.name == "password" else raw.strip()
    if rule.email and not _EMAIL_RE.match(value):
        problems.append("Invalid email format")
    if rule.min_length is not None and len(value) < rule.min_length:
        problems.append(f"{rule.label} must be at least {rule.min_length} characters")
    if rule.max_length is not None and len(value) > rule.max_length:
        problems.append(f"{rule.label} must not exceed {rule.max_length} characters")
    return problems


def validate_payload(payload: Any, rules: tuple[FieldRule, ...]) -> dict:
    """
    Validate a JSON object against string field rules.

    Returns a cleaned dict holding only the ruled fields (stripped, except the
    password which is taken verbatim). Optional fields left blank come back as
    None. Raises ValidationError listing every failing rule.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    errors = []
    cleaned: dict = {}
    for rule in rules:
        raw = payload.get(rule.name)
        for message in _check_field(rule, raw):
            errors.append({"property": rule.name, "message": message})
        if isinstance(raw, str) and raw.strip():
            cleaned[rule.name] = raw if rule.name == "password" else raw.strip()
        else:
            cleaned[rule.name] = None

    if errors:
        raise ValidationError("Validation failed", errors)
    return cleaned


def validate_login(payload: Any) -> dict:
    return validate_payload(payload, LOGIN_RULES)


def validate_register(payload: Any) -> dict:
    return validate_payload(payload, REGISTER_RULES)


def validate_create_user(payload: Any) -> dict:
    return validate_payload(payload, CREATE_USER_RULES)
