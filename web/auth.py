from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash.rate_limit import RateLimiter, get_client_ip
from web.deps import SESSION_EMAIL_KEY, get_authorization_service, read_json
from web.responses import error_response, json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/login")
async def login(request: Request):
    client_ip = get_client_ip(request.headers, request.client.host if request.client else None)
    limiter: RateLimiter = request.app.state.login_limiter
    limit = limiter.check(client_ip)
    limit_headers = {
        "X-RateLimit-Limit": str(limiter.max_requests),
        "X-RateLimit-Remaining": str(limit.remaining),
        "X-RateLimit-Reset": str(limit.reset_in),
    }
    if not limit.success:
        logger.warning("Rate-limited login attempt from %s", client_ip)
        return error_response(
            "Too many login attempts. Please wait before trying again.",
            429,
            reset_in=limit.reset_in,
            headers={**limit_headers, "Retry-After": str(limit.reset_in)},
        )

    body = await read_json(request)
    email = str(body.get("email", "")).strip().lower()
    password = str(body.get("password", ""))

    if not get_authorization_service(request).authenticate(email, password):
        logger.warning("Failed login attempt for email=%s from %s", email, client_ip)
        return error_response("Invalid email or password", 401, headers=limit_headers)

    request.session.clear()
    request.session[SESSION_EMAIL_KEY] = email
    logger.info("Admin %s logged in from %s", email, client_ip)
    return json_response({"authenticated": True, "email": email}, headers=limit_headers)


@router.post("/logout")
async def logout(request: Request):
    email = request.session.get(SESSION_EMAIL_KEY)
    request.session.clear()
    logger.info("Admin %s logged out", email)
    return json_response({"authenticated": False})


@router.get("/session")
async def session(request: Request):
    email = request.session.get(SESSION_EMAIL_KEY)
    return json_response(
        {
            "authenticated": bool(email),
            "email": email,
            "is_admin": get_authorization_service(request).is_allowed_admin(email),
        }
    )
