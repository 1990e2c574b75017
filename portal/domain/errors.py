"""Exceptions raised by the primary (mutation) path of the use cases."""

from __future__ import annotations


class PortalError(Exception):
    """Base class for errors surfaced to API callers."""


class EntityNotFoundError(PortalError):
    """Raised when the requested project, estimate or invoice does not exist."""


class PermissionDeniedError(PortalError):
    """Raised when the caller may not perform the requested operation."""


class ValidationFailedError(PortalError):
    """Raised when the submitted data is inconsistent."""


class EstimateTransitionError(PortalError):
    """Raised when an estimate status change is not allowed."""


class OperationFailedError(PortalError):
    """Raised when the primary mutation could not be completed by the store."""


__all__ = [
    "PortalError",
    "EntityNotFoundError",
    "PermissionDeniedError",
    "ValidationFailedError",
    "EstimateTransitionError",
    "OperationFailedError",
]
