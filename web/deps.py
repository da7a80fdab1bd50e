from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from fastapi import Request
from sqlalchemy import Connection
from starlette.types import ASGIApp, Receive, Scope, Send

from daflash.db import get_engine
from daflash.errors import DocumentValidationError
from daflash.numbering import COUNTER, NumberAllocator
from daflash.repositories.base import NumberSource
from daflash.repositories.sqlalchemy import (
    SQLAlchemyCatalogRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyContentRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyNumberCounterRepository,
    SQLAlchemyQuoteRepository,
)
from daflash.services.authorization_service import AuthorizationService, is_allowed_admin
from daflash.services.catalog_service import CatalogService
from daflash.services.client_service import ClientService
from daflash.services.content_service import ContentService
from daflash.services.invoice_service import InvoiceService
from daflash.services.quote_service import QuoteService
from daflash.settings import settings
from web.responses import error_response

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/api/admin"
SESSION_EMAIL_KEY = "admin_email"


class AdminAuthMiddleware:
    """Pure ASGI middleware guarding the admin API with the allowed-admin predicate."""

    def __init__(self, app: ASGIApp, allowed_emails: Iterable[str] | None = None) -> None:
        self.app = app
        self.allowed_emails = list(allowed_emails) if allowed_emails is not None else None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        path = request.url.path
        if not path.startswith(ADMIN_PREFIX):
            await self.app(scope, receive, send)
            return

        email = request.session.get(SESSION_EMAIL_KEY)
        if not email:
            logger.info("Admin API rejected: %s %s, no session", request.method, path)
            response = error_response("Unauthorized", 401)
            await response(scope, receive, send)
            return
        allowed = self.allowed_emails if self.allowed_emails is not None else settings.admin_emails
        if not is_allowed_admin(email, allowed):
            logger.warning("Admin API rejected: %s %s, %s not allowed", request.method, path, email)
            response = error_response("Forbidden", 403)
            await response(scope, receive, send)
            return
        await self.app(scope, receive, send)


class DBConnectionMiddleware:
    """Pure ASGI middleware, creates a single DB connection per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request) -> Connection:
    """Lazy per-request connection, created on first use and closed by middleware."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


async def read_json(request: Request) -> dict:
    raw = await request.body()
    try:
        data = json.loads(raw or b"{}")
    except ValueError:
        raise DocumentValidationError(["Request body is not valid JSON"]) from None
    if not isinstance(data, dict):
        raise DocumentValidationError(["Request body must be a JSON object"])
    return data


def _get_allocator(conn: Connection, source: NumberSource) -> NumberAllocator:
    counters = SQLAlchemyNumberCounterRepository(conn) if settings.numbering_mode == COUNTER else None
    return NumberAllocator(source, counters, settings.numbering_mode)


def get_client_service(request: Request) -> ClientService:
    return ClientService(SQLAlchemyClientRepository(_get_conn(request)))


def get_catalog_service(request: Request) -> CatalogService:
    return CatalogService(SQLAlchemyCatalogRepository(_get_conn(request)))


def get_quote_service(request: Request) -> QuoteService:
    conn = _get_conn(request)
    repo = SQLAlchemyQuoteRepository(conn)
    return QuoteService(
        repo,
        _get_allocator(conn, repo),
        default_tax=settings.default_tax_config(),
        expiry_days=settings.quote_expiry_days,
    )


def get_invoice_service(request: Request) -> InvoiceService:
    conn = _get_conn(request)
    repo = SQLAlchemyInvoiceRepository(conn)
    return InvoiceService(
        repo,
        _get_allocator(conn, repo),
        quote_repo=SQLAlchemyQuoteRepository(conn),
        default_tax=settings.default_tax_config(),
        due_days=settings.invoice_due_days,
    )


def get_content_service(request: Request) -> ContentService:
    return ContentService(SQLAlchemyContentRepository(_get_conn(request)), demo_enabled=settings.demo_content)


def get_authorization_service(request: Request) -> AuthorizationService:
    return AuthorizationService(settings.admin_emails, settings.admin_password_hash)
