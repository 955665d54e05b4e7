"""Normalize and validate the admin identity inputs.

Each ``normalize_*`` function is total: it returns the normalized value or
``None`` when the input is invalid. ``validate_admin_inputs`` turns those
results into a single ``ValidationError`` listing every failing field.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from .config import BootstrapConfig
from .errors import ValidationError

USERNAME_MIN, USERNAME_MAX = 3, 32
PASSWORD_MIN, PASSWORD_MAX = 8, 256
EMAIL_MAX = 254
EMAIL_LOCAL_MAX = 64
EMAIL_DOMAIN_MIN = 3

_USERNAME_RE = re.compile(r"[A-Za-z0-9_.-]+")
_EMAIL_LOCAL_RE = re.compile(r"[a-z0-9.!#$%&'*+/=?^_`{|}~-]+")
_EMAIL_DOMAIN_RE = re.compile(r"[a-z0-9.-]+")
_WHITESPACE_RE = re.compile(r"\s")

MSG_MISSING_USER = "Missing ADMIN_USER."
MSG_INVALID_USER = "Invalid ADMIN_USER (3-32 chars, letters/digits/._- only)."
MSG_MISSING_PASS = "Missing ADMIN_PASS."
MSG_INVALID_PASS = "Invalid ADMIN_PASS (8-256 chars)."
MSG_INVALID_EMAIL = "Invalid ADMIN_EMAIL."


def normalize_username(raw: object) -> str | None:
    u = str(raw or "").strip()
    if len(u) < USERNAME_MIN or len(u) > USERNAME_MAX:
        return None
    if not _USERNAME_RE.fullmatch(u):
        return None
    return u


def normalize_password(raw: object) -> str | None:
    # No trimming: whitespace is a legitimate password character
    p = str(raw or "")
    if len(p) < PASSWORD_MIN or len(p) > PASSWORD_MAX:
        return None
    return p


def normalize_email(raw: object) -> str | None:
    e = str(raw or "").strip().lower()
    if not e or len(e) > EMAIL_MAX:
        return None
    if _WHITESPACE_RE.search(e):
        return None
    if e.count("@") != 1:
        return None
    local, domain = e.split("@")
    if not local or not domain:
        return None
    if len(local) > EMAIL_LOCAL_MAX or not _EMAIL_LOCAL_RE.fullmatch(local):
        return None
    if len(domain) < EMAIL_DOMAIN_MIN or "." not in domain:
        return None
    if not _EMAIL_DOMAIN_RE.fullmatch(domain):
        return None
    if domain.startswith(".") or domain.endswith(".") or ".." in domain:
        return None
    return e


@dataclass(frozen=True)
class AdminInputs:
    username: str
    password: str = field(repr=False)
    email: str | None = None


def validate_admin_inputs(config: BootstrapConfig) -> AdminInputs:
    """Validate the identity fields of ``config``.

    Raises ValidationError with one message per failing field. An empty email
    means "not provided"; a whitespace-only email is provided but invalid.
    """
    errors: list[str] = []

    raw_user = str(config.username or "")
    username = normalize_username(raw_user)
    if not raw_user.strip():
        errors.append(MSG_MISSING_USER)
    elif username is None:
        errors.append(MSG_INVALID_USER)

    raw_pass = str(config.password or "")
    password = normalize_password(raw_pass)
    if not raw_pass:
        errors.append(MSG_MISSING_PASS)
    elif password is None:
        errors.append(MSG_INVALID_PASS)

    raw_email = str(config.email or "")
    email = normalize_email(raw_email) if raw_email else None
    if raw_email and email is None:
        errors.append(MSG_INVALID_EMAIL)

    if errors:
        raise ValidationError(errors)
    return AdminInputs(username=username, password=password, email=email)  # type: ignore[arg-type]


__all__ = [
    "AdminInputs",
    "normalize_email",
    "normalize_password",
    "normalize_username",
    "validate_admin_inputs",
]
