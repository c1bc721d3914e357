# portal/error_handlers.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import PortalError

_HTTP_CODES = {
    400: "VALIDATION_ERROR",
    401: "AUTH_ERROR",
    403: "FORBIDDEN_ERROR",
    404: "NOT_FOUND_ERROR",
    405: "METHOD_NOT_ALLOWED",
}


async def portal_error_handler(request: Request, exc: PortalError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Field locations only; submitted values are not echoed back
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    fields = [f for f in fields if f]
    message = "Invalid request data"
    if fields:
        message = f"Invalid request data: {', '.join(sorted(set(fields)))}"
    return JSONResponse(status_code=400, content={"detail": message, "code": "VALIDATION_ERROR"})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = {"detail": exc.detail, "code": _HTTP_CODES.get(exc.status_code, "ERROR")}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
