"""Password derivation behind a small Protocol so parameters can be tuned
(or the algorithm swapped) without touching the store logic."""
from __future__ import annotations

import asyncio
import hashlib
import secrets
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .errors import CredentialError


@dataclass(frozen=True)
class Credential:
    salt: str
    pass_hash: str


@runtime_checkable
class PasswordHasher(Protocol):
    def derive(self, password: str) -> Credential: ...  # pragma: no cover - interface only


@dataclass(frozen=True)
class ScryptHasher:
    n: int = 16384
    r: int = 8
    p: int = 1
    dklen: int = 64
    salt_bytes: int = 16
    maxmem: int = 32 * 1024 * 1024

    def derive(self, password: str) -> Credential:
        salt = secrets.token_bytes(self.salt_bytes)
        key = hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt,
            n=self.n,
            r=self.r,
            p=self.p,
            maxmem=self.maxmem,
            dklen=self.dklen,
        )
        return Credential(salt=salt.hex(), pass_hash=key.hex())


_default_hasher: PasswordHasher = ScryptHasher()


def get_hasher() -> PasswordHasher:
    return _default_hasher


async def derive_credential(password: str, hasher: PasswordHasher | None = None) -> Credential:
    """Derive a fresh salted credential off the event loop."""
    h = hasher or get_hasher()
    try:
        return await asyncio.to_thread(h.derive, password)
    except Exception as e:
        raise CredentialError(f"Password derivation failed: {e}") from e


__all__ = ["Credential", "PasswordHasher", "ScryptHasher", "derive_credential", "get_hasher"]
