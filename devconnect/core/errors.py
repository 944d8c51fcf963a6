"""
Error types and FastAPI exception handlers.

Wire shapes:
- single message:  {"msg": "..."}
- message list:    {"errors": [{"msg": "..."}]}   (validation, conflicts, bad credentials)
- server failure:  {"msg": "Server Error."}       (details only go to the log)
"""

from typing import Any, Dict, List

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from devconnect.schemas.schemas import FIELD_WIRE_NAMES

logger = structlog.get_logger()

SERVER_ERROR_MESSAGE = "Server Error."


class DevConnectError(Exception):
    """Base typed error. `as_list` selects the {"errors": [...]} body shape."""

    status_code: int = 500
    as_list: bool = False

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_public_dict(self) -> Dict[str, Any]:
        if self.as_list:
            return {"errors": [{"msg": self.message}]}
        return {"msg": self.message}


class UnauthenticatedError(DevConnectError):
    status_code = 401


class ForbiddenError(DevConnectError):
    # Ownership failures answer 401, not 403, for client compatibility.
    status_code = 401


class NotFoundError(DevConnectError):
    status_code = 404


class MalformedIdError(DevConnectError):
    status_code = 400


class ConflictError(DevConnectError):
    status_code = 400
    as_list = True


class InvalidCredentialsError(DevConnectError):
    status_code = 400
    as_list = True


class InvalidTokenError(Exception):
    """Token failed verification. Signature, expiry and format faults all look the same."""


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into [{msg, param, location}]."""
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        location = loc[0] if loc else "body"
        param = ".".join(FIELD_WIRE_NAMES.get(str(part), str(part)) for part in loc[1:]) if len(loc) > 1 else ""
        ctx_error = (err.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else err.get("msg", "Invalid value.")
        errors.append({"msg": message, "param": param, "location": location})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-to-response mapping to an app."""

    @app.exception_handler(DevConnectError)
    async def _devconnect_error_handler(request: Request, exc: DevConnectError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"errors": _validation_errors(exc)})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content={"msg": SERVER_ERROR_MESSAGE})
