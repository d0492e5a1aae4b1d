"""
Tests for the main application endpoints.
"""
import logging


def test_root_endpoint(client):
    """
    Test the root endpoint returns a welcome message.
    """
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data


def test_health_check(client):
    """
    Test the health check endpoint returns a healthy status.
    """
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "database" in data


def test_requests_are_tagged_with_request_id(client):
    response = client.get("/health")
    assert response.headers.get("X-Request-ID")
    assert "X-Process-Time" in response.headers


def test_cors_allows_configured_frontend(client):
    response = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"
    assert response.headers.get("access-control-allow-credentials") == "true"


def test_client_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_log_names_session_user(client, nurse_signup, caplog):
    user_id = client.post("/api/auth/signup", json=nurse_signup).json()["user"]["id"]
    with caplog.at_level(logging.INFO, logger="clinic_auth.core.middleware"):
        client.get("/api/auth/me")
    assert f"GET /api/auth/me (user {user_id}) - Status: 200" in caplog.text


def test_rejected_session_is_logged_as_warning(client, caplog):
    with caplog.at_level(logging.INFO, logger="clinic_auth.core.middleware"):
        client.get("/api/auth/me")
    records = [r for r in caplog.records if r.name == "clinic_auth.core.middleware"]
    assert records[-1].levelno == logging.WARNING
    assert "(anonymous) - Status: 401" in records[-1].getMessage()
