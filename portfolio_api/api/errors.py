from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api.errors import ApiError

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def describe_validation_issue(issue: Dict[str, Any]) -> str:
    """Render one pydantic issue as "<field>: <message>"."""
    msg = str(issue.get("msg") or "Invalid request payload")
    if msg.startswith(_VALUE_ERROR_PREFIX):
        msg = msg[len(_VALUE_ERROR_PREFIX):]

    if issue.get("type") == "json_invalid":
        return "Invalid request payload"

    loc = [str(part) for part in issue.get("loc") or () if part != "body"]
    if not loc:
        return "Invalid request payload" if issue.get("type") == "missing" else msg
    return f"{'.'.join(loc)}: {msg}"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(_, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_, exc: RequestValidationError):
        issues = exc.errors()
        message = describe_validation_issue(issues[0]) if issues else "Invalid request payload"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
