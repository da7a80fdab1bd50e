from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from daflash.db import initialize_db
from daflash.errors import (
    DocumentNotFoundError,
    DocumentValidationError,
    InvalidTransitionError,
    NumericDomainError,
)
from daflash.logging import configure_logging, reconfigure
from daflash.rate_limit import InMemoryCounterStore, RateLimiter
from daflash.settings import settings
from web.auth import router as auth_router
from web.deps import AdminAuthMiddleware, DBConnectionMiddleware
from web.responses import error_response, json_response
from web.routes.catalog import router as catalog_router
from web.routes.client import router as client_router
from web.routes.content import router as content_router
from web.routes.invoice import router as invoice_router
from web.routes.public import router as public_router
from web.routes.quote import router as quote_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Alembic's fileConfig may have replaced our handlers
    reconfigure()
    logger.info("Application started")
    yield


app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)

app.state.login_limiter = RateLimiter(
    InMemoryCounterStore(),
    max_requests=settings.login_rate_limit_max,
    window_seconds=settings.login_rate_limit_window_seconds,
)

app.add_middleware(DBConnectionMiddleware)
app.add_middleware(AdminAuthMiddleware)
app.add_middleware(SessionMiddleware, secret_key=settings.get_secret_key())

app.include_router(auth_router)
app.include_router(public_router)
app.include_router(client_router)
app.include_router(catalog_router)
app.include_router(quote_router)
app.include_router(invoice_router)
# Generic /api/admin/{collection} routes go last
app.include_router(content_router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    messages = [f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in exc.errors()]
    logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, messages)
    return error_response(f"Validation failed: {'; '.join(messages)}", 400, errors=messages)


@app.exception_handler(DocumentValidationError)
async def document_validation_handler(request: Request, exc: DocumentValidationError):
    return error_response(f"Validation failed: {exc}", 400, errors=exc.errors, preview=exc.preview)


@app.exception_handler(NumericDomainError)
async def numeric_domain_handler(request: Request, exc: NumericDomainError):
    logger.warning("Rejected amount on %s %s: %s", request.method, request.url.path, exc)
    return error_response(f"Validation failed: {exc}", 400)


@app.exception_handler(DocumentNotFoundError)
async def not_found_handler(request: Request, exc: DocumentNotFoundError):
    logger.info("Not found on %s %s: %s", request.method, request.url.path, exc)
    return error_response(str(exc), 404)


@app.exception_handler(InvalidTransitionError)
async def transition_handler(request: Request, exc: InvalidTransitionError):
    return error_response(str(exc), 409, current=exc.current, target=exc.target)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return error_response("Internal Server Error", 500)


@app.get("/health")
async def health():
    return json_response({"status": "ok"})
