"""Tests for the request logging and correlation middleware."""

import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from chathub.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api/missing")
    async def missing():
        raise HTTPException(status_code=404, detail="nope")

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    return TestClient(app)


class TestCorrelationMiddleware:
    def test_echoes_incoming_id(self, client):
        # Act
        response = client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})

        # Assert
        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_generates_id_when_absent(self, client):
        # Act
        response = client.get("/api/health")

        # Assert
        assert len(response.headers["X-Correlation-ID"]) == 36


class TestRequestLoggingMiddleware:
    def test_client_errors_log_as_warning_with_request_id(self, client, caplog):
        # Act
        with caplog.at_level(logging.DEBUG, logger="chathub.observability.middleware"):
            client.get("/api/missing", headers={"X-Correlation-ID": "req-1"})

        # Assert
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.status_code == 404
        assert record.request_id == "req-1"

    def test_health_checks_log_at_debug(self, client, caplog):
        # Act
        with caplog.at_level(logging.DEBUG, logger="chathub.observability.middleware"):
            client.get("/api/health")

        # Assert
        assert caplog.records[-1].levelno == logging.DEBUG
