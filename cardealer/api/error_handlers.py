"""Error Handlers: global exception handlers for the car dealer API.

Invariants:
    - CarDealerError -> {status, message} with the error's own HTTP status
    - RequestValidationError -> 400 with {field: message, ...}
    - Exception (catch-all) -> 500 {status, message}, message text only, no traceback

Design Decisions:
    - Three-layer handler: domain (CarDealerError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from cardealer.core.errors import CarDealerError, ErrorSeverity

logger = logging.getLogger(__name__)

# Request parts that prefix every error location
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CarDealerError)
    async def car_dealer_error_handler(request: Request, exc: CarDealerError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.severity == ErrorSeverity.CRITICAL else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "entity": exc.context.entity,
                "entity_id": exc.context.entity_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic request binding errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: report the message, never the traceback."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "message": f"Internal server error: {exc}",
            },
        )


def build_validation_error_response(errors) -> dict[str, str]:
    """Flatten Pydantic errors to {field: message}; first message per field wins."""
    fields: dict[str, str] = {}
    for e in errors:
        loc = list(e.get("loc", ()))
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "request"
        fields.setdefault(field, e["msg"])
    return fields
