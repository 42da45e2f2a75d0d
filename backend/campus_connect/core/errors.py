import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class Unauthenticated(HTTPException):
    def __init__(self, detail="Authorization token missing"):
        super().__init__(status_code=401, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail="Access denied"):
        super().__init__(status_code=403, detail=detail)


class InvalidInput(HTTPException):
    def __init__(self, detail="Invalid input"):
        super().__init__(status_code=400, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail="Not found"):
        super().__init__(status_code=404, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail="Conflict"):
        super().__init__(status_code=400, detail=detail)


class CapacityExceeded(Conflict):
    def __init__(self, detail="Slot is fully booked"):
        super().__init__(detail)


class UpstreamFailure(HTTPException):
    def __init__(self, detail="Upstream failure"):
        super().__init__(status_code=400, detail=detail)


class RegistrationIncomplete(UpstreamFailure):
    """The auth user exists but its profile row could not be written."""

    def __init__(self, user_id, reason):
        self.user_id = user_id
        super().__init__(
            f"User registered but profile creation failed: {reason}"
        )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first['msg']}" if field else first["msg"]
    return JSONResponse(status_code=400, content={"error": message})


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    orig = getattr(exc, "orig", None)
    logger.warning("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(orig or exc)})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
