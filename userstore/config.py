from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

# Repository root (userstore's parent)
BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DATA_DIR = BASE_DIR / ".userstore-data"
USERS_FILENAME = "users.json"


def _first_non_empty(env: Mapping[str, str], *names: str) -> str:
    for name in names:
        value = env.get(name) or ""
        if value:
            return value
    return ""


@dataclass
class BootstrapConfig:
    username: str = ""
    password: str = field(default="", repr=False)
    email: str = ""
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BootstrapConfig:
        env = os.environ if environ is None else environ
        data_dir = (env.get("DATA_DIR") or "").strip()
        return cls(
            # ADMIN_USER wins over ADMIN_USERNAME when both are set
            username=_first_non_empty(env, "ADMIN_USER", "ADMIN_USERNAME"),
            password=_first_non_empty(env, "ADMIN_PASS", "ADMIN_PASSWORD"),
            email=env.get("ADMIN_EMAIL") or "",
            data_dir=Path(data_dir).expanduser().resolve() if data_dir else DEFAULT_DATA_DIR,
            log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
        )

    def override(self, d: Mapping[str, object]) -> None:
        for k, v in d.items():
            if v is None or not hasattr(self, k):
                continue
            if k == "data_dir":
                v = Path(str(v)).expanduser().resolve()
            setattr(self, k, v)

    @property
    def users_file(self) -> Path:
        return Path(self.data_dir) / USERS_FILENAME
