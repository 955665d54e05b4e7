"""Bootstrap the admin account of a flat-file JSON user store."""

from __future__ import annotations

from .bootstrap import BootstrapResult, bootstrap_admin, run_bootstrap
from .config import BootstrapConfig

__all__ = ["BootstrapConfig", "BootstrapResult", "bootstrap_admin", "run_bootstrap"]
