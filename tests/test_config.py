from __future__ import annotations

from pathlib import Path

from userstore.config import DEFAULT_DATA_DIR, BootstrapConfig


def test_from_env_defaults():
    cfg = BootstrapConfig.from_env({})
    assert cfg.username == "" and cfg.password == "" and cfg.email == ""
    assert cfg.data_dir == DEFAULT_DATA_DIR
    assert cfg.users_file == DEFAULT_DATA_DIR / "users.json"
    assert cfg.log_level == "INFO"


def test_from_env_first_non_empty_wins():
    env = {"ADMIN_USER": "", "ADMIN_USERNAME": "fallback", "ADMIN_PASS": "primary-pass", "ADMIN_PASSWORD": "other"}
    cfg = BootstrapConfig.from_env(env)
    assert cfg.username == "fallback"
    assert cfg.password == "primary-pass"


def test_from_env_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("ADMIN_USER", "root-ops")
    monkeypatch.setenv("ADMIN_PASSWORD", "correcthorse1")
    monkeypatch.setenv("ADMIN_EMAIL", "ops@example.com")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "store"))
    cfg = BootstrapConfig.from_env()
    assert cfg.username == "root-ops"
    assert cfg.password == "correcthorse1"
    assert cfg.email == "ops@example.com"
    assert cfg.users_file == (tmp_path / "store" / "users.json").resolve()


def test_relative_data_dir_resolved(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    cfg = BootstrapConfig.from_env({"DATA_DIR": "rel"})
    assert cfg.data_dir == (tmp_path / "rel").resolve()
    assert cfg.data_dir.is_absolute()


def test_override_skips_none_and_unknown(tmp_path):
    cfg = BootstrapConfig(username="a")
    cfg.override({"username": None, "email": "x@example.com", "bogus": 1, "data_dir": str(tmp_path)})
    assert cfg.username == "a"
    assert cfg.email == "x@example.com"
    assert cfg.data_dir == Path(tmp_path).resolve()
    assert not hasattr(cfg, "bogus")


def test_password_not_in_repr():
    assert "s3cret-pass" not in repr(BootstrapConfig(password="s3cret-pass"))
