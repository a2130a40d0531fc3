"""Generic error page for everything the handlers do not deal with themselves.

Missing records arrive here as HTTPException(404). Database failures
(DataAccessError) are never caught by the handlers; they propagate to
``data_access_error_handler`` unchanged. Anything else ends in
``unhandled_error_handler``, so every failure still gets the error page.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

DataAccessError = SQLAlchemyError


def render_error(request: Request, status_code: int, message: str):
    return request.app.state.templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Error", "message": message, "status_code": status_code},
        status_code=status_code,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail
    )
    return render_error(request, exc.status_code, str(exc.detail))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    logger.warning("%s %s -> 422: %s", request.method, request.url.path, exc.errors())
    return render_error(request, 422, "Invalid request parameters")


async def data_access_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "%s %s failed on data access", request.method, request.url.path, exc_info=exc
    )
    return render_error(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc
    )
    return render_error(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(DataAccessError, data_access_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
