"""Create or update the admin account in the flat-file user store.

Usage (from repo root):
  ADMIN_USER=ops ADMIN_PASS='...' python scripts/bootstrap_admin.py

Reads ADMIN_USER/ADMIN_USERNAME, ADMIN_PASS/ADMIN_PASSWORD, ADMIN_EMAIL and
DATA_DIR from the environment (a local .env is loaded first). The password is
only ever taken from the environment. Re-running rotates the stored salt and
hash; the record's createdAt is kept.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback

from dotenv import load_dotenv

# Ensure project root on sys.path when running as standalone script
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from userstore.bootstrap import bootstrap_admin  # noqa: E402
from userstore.config import BootstrapConfig  # noqa: E402
from userstore.errors import BootstrapError, ValidationError  # noqa: E402
from userstore.logging_setup import configure_logging  # noqa: E402

log = logging.getLogger("userstore.scripts.bootstrap_admin")

USAGE = """Usage:
  ADMIN_USER='ops' ADMIN_PASS='...' [ADMIN_EMAIL='ops@example.com'] [DATA_DIR=...] python scripts/bootstrap_admin.py
"""


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create or update the admin account in users.json.")
    p.add_argument("--username", help="Admin username (default env ADMIN_USER / ADMIN_USERNAME).")
    p.add_argument("--email", help="Admin email (default env ADMIN_EMAIL).")
    p.add_argument("--data-dir", dest="data_dir", help="Store directory (default env DATA_DIR).")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    cfg = BootstrapConfig.from_env()
    cfg.override({"username": args.username, "email": args.email, "data_dir": args.data_dir})
    configure_logging("DEBUG" if args.verbose else cfg.log_level)

    try:
        result = bootstrap_admin(cfg)
    except ValidationError as e:
        for msg in e.errors:
            print(msg, file=sys.stderr)
        sys.stderr.write(USAGE)
        return e.exit_code
    except BootstrapError as e:
        log.error("%s: %s\n%s", e.code, e.detail, traceback.format_exc())
        return e.exit_code
    except Exception:
        log.error("Unhandled error during admin bootstrap\n%s", traceback.format_exc())
        return 1

    action = "created" if result.created else "updated"
    print(f"Admin user ready: {result.username} ({action})")
    print(f"Users file: {result.users_file}")
    print("Restart the application server to pick up changes if it is already running.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
