# Tests for the startup script's dependency check.

import sys

import pytest

import run_server


def test_all_dependencies_present():
    assert run_server.check_dependencies() is True


def test_missing_package_is_reported(monkeypatch):
    monkeypatch.setitem(sys.modules, "pydantic_settings", None)
    assert run_server.check_dependencies() is False


def test_main_exits_before_importing_config(monkeypatch):
    monkeypatch.setitem(sys.modules, "dotenv", None)
    monkeypatch.delitem(sys.modules, "config", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        run_server.main()
    assert exc_info.value.code == 1
    assert "config" not in sys.modules
