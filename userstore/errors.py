"""Error taxonomy for the admin bootstrap.

Configuration problems (ValidationError) are detected before any I/O. Store
and credential failures are fatal. A missing or corrupt store is not an error
at all; see ``store.load_collection``.
"""
from __future__ import annotations

from typing import Any


class BootstrapError(Exception):
    exit_code = 1

    def __init__(self, code: str, detail: str | None = None, **extra: Any):
        self.code = code
        self.detail = detail or code
        self.extra = extra
        super().__init__(self.detail)


class ValidationError(BootstrapError):
    exit_code = 2

    def __init__(self, errors: list[str], detail: str | None = None, **extra: Any):
        super().__init__("validation_error", detail or (errors[0] if errors else "validation_error"), **extra)
        self.errors = list(errors)


class StoreError(BootstrapError):
    def __init__(self, code: str, path: Any, detail: str | None = None, **extra: Any):
        super().__init__(code, detail, path=str(path), **extra)
        self.path = str(path)


class CredentialError(BootstrapError):
    def __init__(self, detail: str | None = None, **extra: Any):
        super().__init__("credential_derivation_failed", detail, **extra)


__all__ = ["BootstrapError", "ValidationError", "StoreError", "CredentialError"]
