import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.request_id import REQUEST_ID_HEADER, request_id_ctx


logger = logging.getLogger(__name__)


def _get_request_id(request: Request) -> str:
    header_request_id = request.headers.get(REQUEST_ID_HEADER)
    if header_request_id:
        return header_request_id
    return request_id_ctx.get() or ""


def _error_response(request: Request, status_code: int, detail, code: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "code": code,
            "request_id": _get_request_id(request),
        },
        headers=headers,
    )


def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.detail, "HTTP_EXCEPTION", getattr(exc, "headers", None))


def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.detail, "HTTP_EXCEPTION", getattr(exc, "headers", None))


def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(request, 422, jsonable_encoder(exc.errors()), "VALIDATION_ERROR")


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    retry_after = getattr(exc, "retry_after", None)
    return _error_response(
        request,
        429,
        "Demasiadas solicitudes",
        "RATE_LIMIT_EXCEEDED",
        {"Retry-After": str(retry_after)} if retry_after else None,
    )


def internal_error_response(request: Request) -> JSONResponse:
    """500 genérico, sin detalles del error"""
    return _error_response(request, 500, "Error interno del servidor", "INTERNAL_ERROR")


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"request_id": _get_request_id(request)})
    return internal_error_response(request)


def register_exception_handlers(app: FastAPI) -> None:
    """Registrar los handlers de errores en la aplicación"""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
