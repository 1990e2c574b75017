"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from portal.domain.errors import (
    EntityNotFoundError,
    EstimateTransitionError,
    OperationFailedError,
    PermissionDeniedError,
    PortalError,
    ValidationFailedError,
)

_STATUS_BY_ERROR: tuple[tuple[type[PortalError], int], ...] = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (EstimateTransitionError, status.HTTP_400_BAD_REQUEST),
    (ValidationFailedError, status.HTTP_400_BAD_REQUEST),
    (OperationFailedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: PortalError) -> HTTPException:
    """Translate a domain error into the matching :class:`HTTPException`."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
