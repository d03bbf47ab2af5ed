from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import OperationalError
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, SeatsUnavailableError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _failure(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={'success': False, 'message': message, **extra}
    )


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    if isinstance(error, SeatsUnavailableError):
        return _failure(error.status_code, error.message, unavailable_seats=error.seats)
    return _failure(error.status_code, error.message)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _failure(status.HTTP_400_BAD_REQUEST, str(exc))


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'success': False, 'message': 'Required fields missing.', 'detail': error.errors()},
    )


async def store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'❌ [STORE] {type(exc).__name__}: {exc}')
    return _failure(status.HTTP_503_SERVICE_UNAVAILABLE, 'Service temporarily unavailable')


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    RedisError: store_unavailable_handler,
    OperationalError: store_unavailable_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
