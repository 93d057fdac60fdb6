# rideshare/errors.py
"""
Доменные ошибки и их перевод в HTTP-ответы вида {"message": ...}.

Сервисы бросают наследников AppError, роутеры их не ловят:
обработчики ниже отвечают за код статуса и тело ответа.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: list | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data provided"


class InsufficientSeats(BadRequest):
    default_message = "Not enough seats available"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin access required"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


def _message(message: str, errors: list | None = None) -> dict:
    body = {"message": message}
    if errors:
        body["errors"] = errors
    return body


async def _app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_message(exc.message, exc.errors))


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    # ctx у pydantic может содержать исключения, jsonable_encoder их не сериализует
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(_message("Invalid data provided", errors)),
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_message(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=_message("Conflict"))


async def _db_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("storage failure on %s %s", request.method, request.url.path)
    message = getattr(request.state, "failure_message", None) or "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_message(message),
    )


def failure_message(message: str):
    """
    Зависимость роута: текст ответа 500, если упадёт БД.
    Клиент показывает его пользователю как есть.

        @router.post("", dependencies=[Depends(failure_message("Failed to create car"))])
    """
    def _set(request: Request) -> None:
        request.state.failure_message = message
    return _set


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, _db_error_handler)
