"""Error Handlers — unmatched routes, catch-all 500 and tagged store failures.

Invariants:
    - Unknown path → 404 with the JSON error envelope
    - Unhandled exception → 500 with a generic message, no internal detail
    - Store failure → tagged status, generic message
"""

from httpx import ASGITransport, AsyncClient

from librario.api.dependencies import get_book_store
from librario.core.errors import DatabaseConnectionError
from librario.main import app


class _ExplodingBookStore:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def list_books(self):
        raise self.exc


async def test_unknown_route_is_json_404(client):
    res = await client.get("/no/such/route")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_wrong_method_keeps_status(client):
    res = await client.delete("/libros")
    assert res.status_code == 405
    assert "error" in res.json()


async def test_unhandled_exception_is_generic_500(client):
    app.dependency_overrides[get_book_store] = lambda: _ExplodingBookStore(
        RuntimeError("secret connection string leaked"),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        res = await c.get("/libros")

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.text


async def test_store_failure_maps_to_tagged_status(client):
    app.dependency_overrides[get_book_store] = lambda: _ExplodingBookStore(
        DatabaseConnectionError("list_books"),
    )
    res = await client.get("/libros")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_UNAVAILABLE"

