import os
import sys

import pytest

# Path setup before any project imports to satisfy E402
ROOT = os.path.dirname(__file__)
PARENT = os.path.abspath(os.path.join(ROOT, ".."))
if PARENT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, PARENT)

_ENV_KEYS = (
    "ADMIN_USER",
    "ADMIN_USERNAME",
    "ADMIN_PASS",
    "ADMIN_PASSWORD",
    "ADMIN_EMAIL",
    "DATA_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_admin_env(monkeypatch):
    # Keep the developer's shell (or .env) from leaking into tests
    for k in _ENV_KEYS:
        monkeypatch.delenv(k, raising=False)


@pytest.fixture
def fast_hasher():
    """Scrypt with a small cost factor; same output lengths as the default."""
    from userstore.hashing import ScryptHasher

    return ScryptHasher(n=2**10)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def make_config(data_dir):
    from userstore.config import BootstrapConfig

    def _make(**kw):
        base = {"username": "root-ops", "password": "correcthorse1", "email": "", "data_dir": data_dir}
        base.update(kw)
        return BootstrapConfig(**base)

    return _make
