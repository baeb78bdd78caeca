"""Domain errors and their HTTP translation.

Learn: Services raise the exceptions defined here; routes translate the
expected ones into HTTPException. The handlers registered by
register_exception_handlers() cover the two cases a route can't catch
itself: malformed request bodies (400 with per-field detail) and internal
failures (500 with a generic body, full traceback to the logs only).

Datastore errors (SQLAlchemyError) are handled inside the middleware
stack, so their 500s still carry X-Request-ID and the security headers.
The catch-all Exception handler runs in Starlette's outermost error
middleware and its responses carry neither.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger()


class EmailTakenError(Exception):
    """Raised when signing up with an email that already has an account."""


class InvalidCredentialsError(Exception):
    """Raised on login with an unknown email or a wrong password.

    Both cases use this one exception so callers can't tell them apart.
    """


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        # loc is ("body", "email") / ("path", "task_id"); drop the source
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        errors.append({
            "field": ".".join(loc) or None,
            "message": err.get("msg", "Invalid value"),
        })
    return errors


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": _field_errors(exc)},
    )


async def internal_error_handler(request: Request, exc: Exception):
    logger.error(
        "request.unhandled_error",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
