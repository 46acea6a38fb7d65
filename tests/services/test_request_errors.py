"""Request Envelope — request ids, storage faults and the catch-all handler.

Invariants:
    - Every response carries X-Request-Id, unhandled failures included
    - A well-formed inbound X-Request-Id is echoed back; anything else is replaced
    - Storage faults surface as 500 INTERNAL_ERROR without driver detail
"""

import logging
import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from roster.api.dependencies import get_user_service
from roster.core.errors import DatabaseError, MembershipConflictError
from roster.infrastructure.database import DatabaseSessionManager
from roster.main import app


async def test_response_carries_generated_request_id(client, seeded):
    res = await client.get("/api/v1/users")
    uuid.UUID(res.headers["X-Request-Id"])


async def test_error_response_carries_request_id(client, seeded):
    res = await client.delete("/api/v1/groups/999/users/1")
    assert res.status_code == 404
    assert res.headers["X-Request-Id"]


async def test_inbound_request_id_is_echoed(client, seeded):
    res = await client.get(
        "/api/v1/groups", headers={"X-Request-Id": "trace-abc-12345"},
    )
    assert res.headers["X-Request-Id"] == "trace-abc-12345"


@pytest.mark.parametrize("inbound", ["short", "has spaces in it", "x" * 80])
async def test_malformed_request_id_is_replaced(client, seeded, inbound):
    res = await client.get("/api/v1/groups", headers={"X-Request-Id": inbound})
    assert res.headers["X-Request-Id"] != inbound
    uuid.UUID(res.headers["X-Request-Id"])


class _FailingUserService:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def list_offset(self, limit, offset):
        raise self.exc


async def test_database_error_is_internal_error(client):
    app.dependency_overrides[get_user_service] = lambda: _FailingUserService(
        DatabaseError("execute"),
    )
    res = await client.get("/api/v1/users")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "An unexpected error occurred"


async def test_unexpected_exception_does_not_leak(client):
    app.dependency_overrides[get_user_service] = lambda: _FailingUserService(
        RuntimeError("password=hunter2 at db:5432"),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        res = await c.get("/api/v1/users")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "hunter2" not in res.text


async def test_session_manager_maps_driver_errors(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory

    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc_info.value.operation == "execute"
    assert await manager.health_check() is True


async def test_unexpected_exception_response_keeps_request_id(client, caplog):
    app.dependency_overrides[get_user_service] = lambda: _FailingUserService(
        RuntimeError("boom"),
    )
    with caplog.at_level(logging.INFO, logger="roster.http"):
        res = await client.get(
            "/api/v1/users", headers={"X-Request-Id": "trace-abc-12345"},
        )
    assert res.status_code == 500
    assert res.headers["X-Request-Id"] == "trace-abc-12345"
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    finish = [r for r in caplog.records if getattr(r, "status_code", None) == 500]
    assert finish and finish[0].request_id == "trace-abc-12345"


async def test_session_manager_passes_domain_errors_through(
    test_engine, test_session_factory,
):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory

    with pytest.raises(MembershipConflictError):
        async with manager.session():
            raise MembershipConflictError(1, 2)
