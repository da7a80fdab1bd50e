"""Tests for web middleware and deps edge cases."""

import asyncio

from web.deps import AdminAuthMiddleware, DBConnectionMiddleware


def _run_websocket_scope(middleware_cls, **kwargs) -> bool:
    called = False

    async def inner_app(scope, receive, send):
        nonlocal called
        called = True

    middleware = middleware_cls(inner_app, **kwargs)
    asyncio.run(middleware({"type": "websocket"}, None, None))
    return called


class TestAdminAuthMiddlewareNonHTTP:
    def test_non_http_scope_passes_through(self):
        assert _run_websocket_scope(AdminAuthMiddleware)


class TestDBConnectionMiddlewareNonHTTP:
    def test_non_http_scope_passes_through(self):
        assert _run_websocket_scope(DBConnectionMiddleware)


class TestAdminAllowList:
    def test_not_allowed_email_is_forbidden(self, auth_client, monkeypatch):
        from daflash.settings import settings

        monkeypatch.setattr(settings, "admin_emails", ["someone-else@daflash.com"])
        response = auth_client.get("/api/admin/quotes")
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}

    def test_empty_allow_list_admits_session(self, auth_client, monkeypatch):
        from daflash.settings import settings

        monkeypatch.setattr(settings, "admin_emails", [])
        assert auth_client.get("/api/admin/quotes").status_code == 200
