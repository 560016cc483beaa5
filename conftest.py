import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


@pytest.fixture
def root(tmp_path):
    """Served root holding notes.txt and sub/a.txt"""
    served = tmp_path / "root"
    served.mkdir()
    (served / "notes.txt").write_text("top level notes\n")
    (served / "sub").mkdir()
    (served / "sub" / "a.txt").write_bytes(b"contents of a\x00\x01")
    return served


@pytest.fixture
def make_settings(root):
    def _make(**overrides):
        values = {"root_dir": str(root), "users": "admin:password"}
        values.update(overrides)
        return Settings(**values)
    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def auth_client(client):
    client.cookies.set("auth", "secret")
    return client
