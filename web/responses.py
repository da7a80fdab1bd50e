from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
}


def json_response(data: Any, status_code: int = 200, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        jsonable_encoder(data),
        status_code=status_code,
        headers={**NO_CACHE_HEADERS, **(headers or {})},
    )


def error_response(message: str, status_code: int, **extra: Any) -> JSONResponse:
    headers = extra.pop("headers", None)
    return json_response({"error": message, **extra}, status_code=status_code, headers=headers)
