import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic_core import ValidationError
from starlette import status

from finance_dashboard.services.errors import (
    BaseServiceError,
    InvalidTransitionError,
    TransportError,
)

logger = logging.getLogger(__name__)

# looked up along the exception's MRO, so the closest base class wins
ERROR_STATUS_CODES: dict[type[BaseServiceError], int] = {
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    TransportError: status.HTTP_502_BAD_GATEWAY,
    BaseServiceError: status.HTTP_400_BAD_REQUEST,
}


def status_code_for(exc: BaseServiceError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return status.HTTP_400_BAD_REQUEST


async def service_error_handler(
    request: Request, exc: BaseServiceError
) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(
        "%s %s rejected with %s: %s",
        request.method,
        request.url.path,
        status_code,
        exc.detail,
    )
    return JSONResponse({"detail": exc.detail}, status_code=status_code)


async def draft_validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    # raised when a draft merge produces a field pydantic cannot coerce
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors(include_url=False, include_context=False)},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(BaseServiceError, service_error_handler)
    app.add_exception_handler(ValidationError, draft_validation_error_handler)
