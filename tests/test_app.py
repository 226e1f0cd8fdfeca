"""Tests for configuration, health check and the session middleware."""

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError
from structlog.testing import capture_logs

from todo_app.config import Settings
from todo_app.observability.logging_config import setup_logging


class TestSettings:
    def test_defaults_use_session_backend(self, monkeypatch):
        monkeypatch.delenv("STORAGE_BACKEND", raising=False)

        settings = Settings(_env_file=None)

        assert settings.STORAGE_BACKEND == "session"
        assert settings.session_cookie_secure is False

    def test_database_backend_requires_url(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, STORAGE_BACKEND="database", DATABASE_URL="")

    def test_production_cookie_is_secure(self):
        assert Settings(_env_file=None, ENV="production").session_cookie_secure is True

    def test_log_level_defaults_to_info(self):
        assert Settings(_env_file=None).LOG_LEVEL == "INFO"

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(ValueError):
            setup_logging(level="chatty")


@pytest.mark.integration
class TestHealth:
    def test_session_backend_checks_redis_only(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "redis": "ok"}

    def test_database_backend_checks_postgres(self, db_client):
        response = db_client.get("/health")

        assert response.json() == {"status": "ok", "redis": "ok", "postgres": "ok"}

    def test_degraded_when_redis_is_down(self, app, fake_redis):
        async def broken_ping():
            raise ConnectionError("refused")

        fake_redis.ping = broken_ping

        response = TestClient(app).get("/health")

        assert response.json()["status"] == "degraded"
        assert response.json()["redis"].startswith("error:")


@pytest.mark.integration
class TestSessionMiddleware:
    def test_cookie_is_reused(self, client):
        first = client.get("/lists").cookies["todo_session"]
        second = client.get("/lists").cookies["todo_session"]

        assert first == second

    def test_malformed_cookie_is_replaced(self, app):
        client = TestClient(app, cookies={"todo_session": "../../etc/passwd"})

        issued = client.get("/lists").cookies["todo_session"]

        assert issued != "../../etc/passwd"
        assert len(issued) == 32

    def test_separate_clients_get_separate_lists(self, app):
        alice, bob = TestClient(app), TestClient(app)

        alice.post("/lists", data={"list_name": "Alice's list"})

        assert "No lists yet." in bob.get("/lists").text

    def test_trace_id_is_echoed(self, client):
        response = client.get("/lists", headers={"X-Trace-ID": "trace-123"})

        assert response.headers["X-Trace-ID"] == "trace-123"

    def test_metrics_endpoint(self, client):
        client.get("/lists")

        response = client.get("/metrics/")

        assert response.status_code == 200
        assert "todo_request_total" in response.text


@pytest.mark.integration
class TestRequestLogging:
    def test_request_end_carries_session_and_xhr(self, client):
        session_id = client.get("/lists").cookies["todo_session"]

        with capture_logs() as logs:
            client.post("/lists/9/delete", headers={"X-Requested-With": "XMLHttpRequest"})

        [end] = [entry for entry in logs if entry["event"] == "请求结束"]
        assert end["session_id"] == session_id
        assert end["xhr"] is True
        assert end["status_code"] == 200

    def test_not_found_is_logged(self, client):
        with capture_logs() as logs:
            client.get("/lists/abc", follow_redirects=False)

        [entry] = [entry for entry in logs if entry["event"] == "实体不存在，重定向"]
        assert entry["entity"] == "list"
        assert entry["redirect_to"] == "/lists"
