"""Exception handlers mapping errors to JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from library_catalog.core.errors import CatalogError

logger = logging.getLogger(__name__)


def _field_name(location: tuple) -> str:
    # Drop the "body"/"query" prefix FastAPI puts in front of the field path
    parts = [str(part) for part in location[1:]] or [str(part) for part in location]
    return ".".join(parts)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.info(
        "%s %s rejected with %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render unparseable payloads as 400 with per-field messages."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = _field_name(tuple(error.get("loc", ())))
        errors.setdefault(field, []).append(error.get("msg", ""))

    first_field, first_messages = next(iter(errors.items()), ("request", ["Invalid request."]))
    message = f"{first_field}: {first_messages[0]}"
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": message,
            "title": "One or more validation errors occurred.",
            "detail": message,
            "errors": errors,
        },
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("%s %s hit a store constraint: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": "The change conflicts with existing data."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the catalog's exception handlers on the application."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
