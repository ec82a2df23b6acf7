"""Tests for the database exception handlers registered in ``flowerss.main``."""

from __future__ import annotations

import json

import pytest
from fastapi import Request, status
from sqlalchemy.exc import (
    DatabaseError,
    DBAPIError,
    IntegrityError,
    OperationalError,
)
from sqlalchemy.exc import (
    TimeoutError as SQLAlchemyTimeoutError,
)
from starlette.datastructures import Headers

import flowerss.main as flowerss_main
from flowerss.schemas.error import ErrorType
from flowerss.utils.request_context import clear_request_id, set_request_id


def _build_request(path: str = "/users/1/subscriptions") -> Request:
    """Create a minimal ``Request`` suitable for invoking handlers."""

    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "headers": Headers().raw,
    }
    return Request(scope)


async def _invoke(handler, exc: Exception, request_id: str) -> tuple[int, dict]:
    token = set_request_id(request_id)
    try:
        response = await handler(_build_request(), exc)
    finally:
        clear_request_id(token)
    return response.status_code, json.loads(response.body.decode())


@pytest.mark.asyncio
async def test_integrity_error_maps_to_conflict():
    """A duplicate subscription that slips past the existence check is a 409."""

    exc = IntegrityError(
        "INSERT INTO subscriptions",
        {},
        Exception("UNIQUE constraint failed: subscriptions.user_id, subscriptions.source_id"),
    )

    status_code, payload = await _invoke(
        flowerss_main.database_integrity_exception_handler, exc, "req-409"
    )

    assert status_code == status.HTTP_409_CONFLICT
    assert payload["error_type"] == ErrorType.DATABASE_ERROR.value
    assert payload["status_code"] == status.HTTP_409_CONFLICT
    assert payload["request_id"] == "req-409"
    assert payload["path"] == "/users/1/subscriptions"
    assert payload["retry_after"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        DBAPIError("SELECT 1", {}, Exception("connection refused")),
        OperationalError("SELECT 1", {}, Exception("database is locked")),
    ],
)
async def test_connection_errors_map_to_service_unavailable(exc):
    status_code, payload = await _invoke(
        flowerss_main.database_connection_exception_handler, exc, "req-503"
    )

    assert status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert payload["error_type"] == ErrorType.DATABASE_ERROR.value
    assert payload["message"] == "Database connection failed"
    assert payload["retry_after"] == 5
    assert payload["request_id"] == "req-503"


@pytest.mark.asyncio
async def test_pool_timeout_maps_to_gateway_timeout():
    status_code, payload = await _invoke(
        flowerss_main.database_timeout_exception_handler,
        SQLAlchemyTimeoutError("QueuePool limit reached"),
        "req-504",
    )

    assert status_code == status.HTTP_504_GATEWAY_TIMEOUT
    assert payload["error_type"] == ErrorType.TIMEOUT_ERROR.value
    assert payload["retry_after"] == 3


@pytest.mark.asyncio
async def test_generic_database_error_maps_to_internal_error():
    exc = DatabaseError("DELETE FROM sources", {}, Exception("disk I/O error"))

    status_code, payload = await _invoke(
        flowerss_main.database_generic_exception_handler, exc, "req-500"
    )

    assert status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["error_type"] == ErrorType.DATABASE_ERROR.value
    assert payload["message"] == "Database operation failed"
    assert payload["retry_after"] == 3


@pytest.mark.asyncio
async def test_handler_registry_prefers_most_specific_database_error():
    """IntegrityError is a DatabaseError subclass but keeps its own handler."""

    handlers = flowerss_main.app.exception_handlers

    assert handlers[IntegrityError] is flowerss_main.database_integrity_exception_handler
    assert handlers[DBAPIError] is flowerss_main.database_connection_exception_handler
    assert handlers[OperationalError] is flowerss_main.database_connection_exception_handler
    assert handlers[DatabaseError] is flowerss_main.database_generic_exception_handler
