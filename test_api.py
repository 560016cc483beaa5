# End-to-end tests for the HTTP routes.

import pytest
from fastapi.testclient import TestClient

from main import create_app


def listing(response):
    return sorted((e["name"], e["is_dir"]) for e in response.json())


class TestLogin:

    def test_wrong_password(self, client):
        response = client.get("/login/admin/wrongpass", follow_redirects=False)
        assert response.status_code == 401
        assert response.text == "Invalid credentials"
        assert "set-cookie" not in response.headers

    def test_unknown_user(self, client):
        response = client.get("/login/nobody/password", follow_redirects=False)
        assert response.status_code == 401

    def test_valid_login_sets_cookie_and_redirects(self, client):
        response = client.get("/login/admin/password", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"
        cookie = response.headers["set-cookie"].lower()
        assert cookie.startswith("auth=secret")
        assert "httponly" in cookie
        assert "samesite=strict" in cookie

    def test_login_cookie_unlocks_listing(self, client):
        assert client.get("/list/").status_code == 401
        client.get("/login/admin/password", follow_redirects=False)
        assert client.get("/list/").status_code == 200

    def test_users_from_settings(self, make_settings):
        app = create_app(make_settings(users="alice:wonderland"))
        with TestClient(app) as client:
            assert client.get("/login/alice/wonderland", follow_redirects=False).status_code == 303
            assert client.get("/login/admin/password", follow_redirects=False).status_code == 401


class TestIndexPage:

    def test_serves_frontend(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'id="directory-list"' in response.text
        assert "/list/" in response.text


class TestListRoute:

    def test_requires_session_cookie(self, client):
        response = client.get("/list/")
        assert response.status_code == 401
        assert response.text == "Unauthorized"

    def test_rejects_wrong_cookie_value(self, client):
        client.cookies.set("auth", "not-the-secret")
        assert client.get("/list/").status_code == 401

    def test_root_listing(self, auth_client):
        response = auth_client.get("/list/")
        assert response.status_code == 200
        assert listing(response) == [("notes.txt", False), ("sub", True)]

    def test_subdirectory_listing(self, auth_client):
        response = auth_client.get("/list/sub/")
        assert response.status_code == 200
        assert response.json() == [{"name": "a.txt", "is_dir": False}]

    def test_missing_directory(self, auth_client):
        response = auth_client.get("/list/missing/")
        assert response.status_code == 404
        assert response.json() == "Directory not found"

    def test_listing_a_file_fails(self, auth_client):
        response = auth_client.get("/list/notes.txt")
        assert response.status_code == 500
        assert response.json() == "Failed to read directory"

    def test_encoded_traversal_is_not_found(self, auth_client):
        response = auth_client.get("/list/..%2F..%2F")
        assert response.status_code == 404

    def test_null_byte_is_not_found(self, auth_client):
        response = auth_client.get("/list/%00")
        assert response.status_code == 404
        assert response.json() == "Directory not found"

    def test_open_profile_needs_no_cookie(self, make_settings):
        with TestClient(create_app(make_settings(auth_required=False))) as client:
            response = client.get("/list/sub/")
            assert response.status_code == 200
            assert response.json() == [{"name": "a.txt", "is_dir": False}]

    def test_only_get_is_routed(self, auth_client):
        assert auth_client.post("/list/").status_code == 405


class TestCatchAll:

    def test_downloads_exact_bytes(self, client, root):
        response = client.get("/sub/a.txt")
        assert response.status_code == 200
        assert response.content == (root / "sub" / "a.txt").read_bytes()
        assert response.headers["content-disposition"].startswith("attachment")

    def test_downloads_do_not_need_session(self, client):
        assert client.get("/notes.txt").status_code == 200

    def test_directory_returns_index(self, client):
        response = client.get("/sub/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Index of /sub/" in response.text
        assert "content-disposition" not in response.headers

    def test_missing_file(self, client):
        assert client.get("/missing.txt").status_code == 404

    def test_null_byte_is_not_found(self, client):
        assert client.get("/%00").status_code == 404
        assert client.get("/a%00b").status_code == 404

    def test_processing_time_header(self, client):
        assert "x-processing-time" in client.get("/notes.txt").headers


class TestScenario:

    def test_browse_and_download(self, client, root):
        assert client.get("/login/admin/password", follow_redirects=False).status_code == 303

        top = client.get("/list/")
        assert listing(top) == [("notes.txt", False), ("sub", True)]

        sub = client.get("/list/sub/")
        assert sub.json() == [{"name": "a.txt", "is_dir": False}]

        download = client.get("/sub/a.txt")
        assert download.content == b"contents of a\x00\x01"
