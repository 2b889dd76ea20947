import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import (
    CatalogUnavailableError,
    InvalidPreconditionError,
    IronLogError,
    NotFoundError,
    StoreWriteError,
    WorkoutAlreadyCompletedError,
)

logger = logging.getLogger(__name__)

# Most specific first
STATUS_BY_ERROR = (
    (WorkoutAlreadyCompletedError, status.HTTP_409_CONFLICT),
    (InvalidPreconditionError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (CatalogUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StoreWriteError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: IronLogError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(IronLogError)
    async def ironlog_error_handler(request: Request, exc: IronLogError):
        code = status_for(exc)
        if code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=code, content={"detail": str(exc)})
