"""Single linear pass: validate, load, derive, upsert, persist."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import BootstrapConfig
from .hashing import PasswordHasher, derive_credential
from .store import load_collection, persist_collection, upsert_admin
from .validation import validate_admin_inputs

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapResult:
    username: str
    users_file: Path
    created: bool
    record: dict[str, Any]


async def run_bootstrap(config: BootstrapConfig, hasher: PasswordHasher | None = None) -> BootstrapResult:
    # Raises ValidationError before the store is touched
    inputs = validate_admin_inputs(config)
    users_file = config.users_file

    collection = load_collection(users_file)
    credential = await derive_credential(inputs.password, hasher)
    record, created = upsert_admin(collection, inputs.username, credential, inputs.email)
    persist_collection(users_file, collection)

    log.info(
        "admin %s username=%s users_file=%s",
        "created" if created else "updated",
        inputs.username,
        users_file,
    )
    return BootstrapResult(username=inputs.username, users_file=users_file, created=created, record=record)


def bootstrap_admin(config: BootstrapConfig, hasher: PasswordHasher | None = None) -> BootstrapResult:
    return asyncio.run(run_bootstrap(config, hasher))


__all__ = ["BootstrapResult", "bootstrap_admin", "run_bootstrap"]
