"""Tests for RequestIDMiddleware: generated, reused and rejected request IDs."""

import uuid

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from apierrors.middleware import MAX_REQUEST_ID_LENGTH, RequestIDMiddleware, get_request_id


def make_test_app() -> FastAPI:
    test_app = FastAPI()
    test_app.add_middleware(RequestIDMiddleware)

    @test_app.get("/whoami")
    async def whoami():
        return {"request_id": get_request_id()}

    return test_app


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=make_test_app()), base_url="http://test"
    ) as ac:
        yield ac


class TestRequestIDMiddleware:
    async def test_generates_uuid_when_header_missing(self, client):
        response = await client.get("/whoami")

        req_id = response.headers["x-request-id"]
        assert str(uuid.UUID(req_id)) == req_id
        assert response.json()["request_id"] == req_id

    async def test_reuses_incoming_header(self, client):
        response = await client.get("/whoami", headers={"X-Request-ID": "trace-abc"})

        assert response.headers["x-request-id"] == "trace-abc"
        assert response.json()["request_id"] == "trace-abc"

    async def test_oversized_header_is_replaced(self, client):
        too_long = "x" * (MAX_REQUEST_ID_LENGTH + 1)

        response = await client.get("/whoami", headers={"X-Request-ID": too_long})

        assert response.headers["x-request-id"] != too_long

    async def test_each_request_gets_its_own_id(self, client):
        first = await client.get("/whoami")
        second = await client.get("/whoami")

        assert first.headers["x-request-id"] != second.headers["x-request-id"]

    def test_no_request_id_outside_request(self):
        assert get_request_id() == ""
