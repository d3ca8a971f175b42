"""Translate domain/application exceptions into HTTP responses."""

import logging

from fastapi import HTTPException, status

from admin_dashboard.domain.exceptions import (
    ApiError,
    ApiHttpError,
    ApiTransportError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    MutationInFlightError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

# Everything a screen operation is expected to raise.
DOMAIN_ERRORS = (
    ApiError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    MutationInFlightError,
    ValidationFailedError,
)


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationFailedError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": exc.errors},
        )
    if isinstance(exc, ConfirmationRequiredError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, MutationInFlightError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ApiTransportError):
        return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=exc.message)
    if isinstance(exc, ApiHttpError):
        logger.warning("Backend rejected %s %s: %s", exc.method, exc.url, exc)
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": exc.message,
                "status_code": exc.status_code,
                "errors": exc.field_errors,
            },
        )
    if isinstance(exc, ApiError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
