"""Flat-file user store: load, upsert the admin record, persist atomically.

Store shape on disk::

    {"users": [UserRecord, ...]}

Loading is lenient: a missing file, undecodable bytes, invalid JSON or a
document without a list-valued ``users`` key all yield an empty collection.
Only genuine I/O failures (permissions, is-a-directory, ...) are fatal.

Persisting writes ``<path>.tmp`` and renames it over ``<path>``; the rename is
the only point at which a new state becomes visible.
"""
from __future__ import annotations

import json
import logging
import math
import os
import uuid
from collections.abc import Callable
from contextlib import suppress
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .errors import StoreError
from .hashing import Credential

log = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
UNLIMITED_QUOTA = -1
DIR_MODE = 0o700
FILE_MODE = 0o600
TMP_SUFFIX = ".tmp"


def empty_collection() -> dict[str, Any]:
    return {"users": []}


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2026-10-18T09:30:00.000Z."""
    dt = (now or datetime.now(UTC)).astimezone(UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-finite number {token} is not valid JSON")


def _finite_float(token: str) -> float:
    v = float(token)
    if not math.isfinite(v):
        raise ValueError(f"number {token} overflows")
    return v


def load_collection(path: str | os.PathLike[str]) -> dict[str, Any]:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("store not found, starting empty path=%s", p)
        return empty_collection()
    except UnicodeDecodeError:
        log.debug("store not valid utf-8, starting empty path=%s", p)
        return empty_collection()
    except OSError as e:
        raise StoreError("store_read_failed", p, f"Cannot read users file {p}: {e}") from e
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        log.debug("store not valid JSON, starting empty path=%s", p)
        return empty_collection()
    if not isinstance(parsed, dict) or not isinstance(parsed.get("users"), list):
        log.debug("store has unexpected shape, starting empty path=%s", p)
        return empty_collection()
    return parsed


def find_user(collection: dict[str, Any], username: str) -> dict[str, Any] | None:
    # First match wins; duplicates left by earlier corruption are not merged.
    # Numeric usernames compare by their string form.
    for rec in collection.get("users") or []:
        if not isinstance(rec, dict):
            continue
        name = rec.get("username")
        if isinstance(name, str | int) and not isinstance(name, bool) and str(name) == username:
            return rec
    return None


def _is_number(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    return isinstance(v, int) or (isinstance(v, float) and math.isfinite(v))


def upsert_admin(
    collection: dict[str, Any],
    username: str,
    credential: Credential,
    email: str | None = None,
    *,
    now: datetime | None = None,
    id_factory: Callable[[], str] | None = None,
) -> tuple[dict[str, Any], bool]:
    """Insert or update the admin record for ``username`` in place.

    Returns ``(record, created)``.
    """
    ts = utc_timestamp(now)
    users: list[Any] = collection.setdefault("users", [])
    user = find_user(collection, username)

    if user is None:
        user = {"id": (id_factory or (lambda: str(uuid.uuid4())))(), "username": username}
        if email:
            user["email"] = email
        user.update(
            {
                "role": ADMIN_ROLE,
                "salt": credential.salt,
                "passHash": credential.pass_hash,
                "quota": UNLIMITED_QUOTA,
                "unlocked": [],
                "contentTokens": [],
                "disabled": False,
                "accessUntilMs": None,
                "createdAt": ts,
            }
        )
        users.append(user)
        return user, True

    user["username"] = username
    if email:
        user["email"] = email
    user["role"] = ADMIN_ROLE
    user["salt"] = credential.salt
    user["passHash"] = credential.pass_hash
    if not _is_number(user.get("quota")):
        user["quota"] = UNLIMITED_QUOTA
    if not isinstance(user.get("unlocked"), list):
        user["unlocked"] = []
    if not isinstance(user.get("contentTokens"), list):
        user["contentTokens"] = []
    user["disabled"] = False
    user["accessUntilMs"] = None
    created_at = user.get("createdAt")
    if not isinstance(created_at, str) or not created_at:
        user["createdAt"] = ts
    return user, False


def dump_collection(collection: dict[str, Any]) -> str:
    return json.dumps(collection, ensure_ascii=False, indent=2, allow_nan=False) + "\n"


def _fsync_dir(directory: Path) -> None:
    # Persist the rename itself; directories cannot be opened this way on Windows
    if os.name != "posix":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def persist_collection(path: str | os.PathLike[str], collection: dict[str, Any]) -> Path:
    """Atomically replace ``path`` with the serialized collection."""
    p = Path(path)
    tmp = p.with_name(p.name + TMP_SUFFIX)
    try:
        payload = dump_collection(collection).encode("utf-8")
        p.parent.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
        # Refuse to follow a planted symlink at the temp path
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_NOFOLLOW", 0)
        fd = os.open(tmp, flags, FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        # O_CREAT mode is ignored when a stale temp file already exists
        os.chmod(tmp, FILE_MODE)
        os.replace(tmp, p)
        _fsync_dir(p.parent)
    except (OSError, ValueError) as e:
        with suppress(OSError):
            tmp.unlink()
        raise StoreError("store_write_failed", p, f"Cannot write users file {p}: {e}") from e
    log.debug("store written path=%s users=%d", p, len(collection.get("users") or []))
    return p


__all__ = [
    "ADMIN_ROLE",
    "UNLIMITED_QUOTA",
    "dump_collection",
    "empty_collection",
    "find_user",
    "load_collection",
    "persist_collection",
    "upsert_admin",
    "utc_timestamp",
]
