import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from autoinspect.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class InvalidInputError(AppException):
    """Bad input; retrying without new input will fail again."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ProviderError(AppException):
    """The image-analysis provider failed or is not configured."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message, status_code=status_code)


class PersistenceError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class StorageError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        )
