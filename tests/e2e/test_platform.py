"""End-to-end tests for health, security headers and administration."""

import pytest
from fastapi.testclient import TestClient

from quill.interface.api.app import create_app
from quill.interface.api.middleware import SECURITY_HEADERS
from tests.di import build_test_container
from tests.e2e.api import login, register


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["version"] == "0.1.0"


@pytest.mark.parametrize("path", ["/health", "/posts", "/users/ghost"])
def test_security_headers_on_every_response(client, path):
    response = client.get(path)

    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


class TestAdminAudit:
    """Audit log access."""

    def test_regular_user_is_forbidden(self, client):
        register(client, "@alice")
        login(client, "@alice")

        assert client.get("/admin/audit").status_code == 403

    def test_anonymous_is_unauthorized(self, client):
        assert client.get("/admin/audit").status_code == 401

    def test_bootstrapped_admin_reads_audit_log(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("AUTH__ADMIN_PASSWORD", "AdminPass1")
        with TestClient(create_app(build_test_container())) as client:
            register(client, "@alice")
            login(client, "@alice", "Wrong1234")
            assert login(client, "@admin", "AdminPass1").status_code == 200

            # Act
            response = client.get("/admin/audit", params={"limit": 2})

        # Assert
        assert response.status_code == 200
        events = response.json()["events"]
        assert [e["event"] for e in events] == ["login", "failed_login"]
