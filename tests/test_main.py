import logging
from unittest.mock import AsyncMock

import structlog
from fastapi.testclient import TestClient

from app.core.logging import setup_logging
from app.main import app
from app.services.product_service import product_service


def test_root_lists_product_endpoint(client):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Welcome to the backend server!"
    assert body["endpoints"] == {"products": "/api/products"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_responses_carry_request_id(client):
    response = client.get("/health")
    assert response.headers.get("X-Request-ID")


def test_request_id_is_bound_for_handler_logs(client, monkeypatch):
    seen = {}

    async def record_context(db):
        seen.update(structlog.contextvars.get_contextvars())
        return []

    monkeypatch.setattr(product_service, "get_all_products", record_context)

    response = client.get("/api/products")

    assert response.status_code == 200
    assert seen["request_id"] == response.headers["X-Request-ID"]


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_unsupported_method_uses_error_body(client):
    response = client.post("/health")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}


def test_unhandled_exception_returns_generic_500(client, monkeypatch):
    monkeypatch.setattr(
        product_service, "get_all_products", AsyncMock(side_effect=RuntimeError("secret internals"))
    )
    unchecked = TestClient(app, raise_server_exceptions=False)

    response = unchecked.get("/api/products")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "secret internals" not in response.text


def test_setup_logging_does_not_stack_handlers():
    setup_logging()
    before = len(logging.getLogger().handlers)
    logger = setup_logging()

    assert len(logging.getLogger().handlers) == before
    assert logger is not None
