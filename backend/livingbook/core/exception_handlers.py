import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from livingbook.core.errors import DomainError, StorageError

logger = logging.getLogger("uvicorn.error")


def _storage_response(exc: StorageError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": exc.error},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("storage error on %s %s: %s", request.method, request.url.path, exc.error)
        return _storage_response(exc)
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("store fault on %s %s", request.method, request.url.path)
    orig = getattr(exc, "orig", None)
    return _storage_response(StorageError(str(orig or exc)))


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    SQLAlchemyError: sqlalchemy_error_handler,
}


def register_exception_handlers(app):
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
