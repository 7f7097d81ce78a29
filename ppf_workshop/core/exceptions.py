"""Custom exceptions for the PPF workshop application."""

from __future__ import annotations

from typing import Any


class WorkshopException(Exception):
    """Base exception for the workshop application."""

    status_code: int = 500
    kind: str = "internal_error"

    def __init__(self, message: str = "", **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(WorkshopException):
    """Raised when input validation fails."""

    status_code = 400
    kind = "validation_error"


class AuthenticationError(WorkshopException):
    """Raised when a request carries no usable credential."""

    status_code = 401
    kind = "unauthorized"


class AuthorizationError(WorkshopException):
    """Raised when an authenticated identity lacks a required scope."""

    status_code = 403
    kind = "forbidden"


class NotFoundError(WorkshopException):
    """Raised when a resource is not found."""

    status_code = 404
    kind = "not_found"


class MethodNotAllowed(WorkshopException):
    status_code = 405
    kind = "method_not_allowed"


class ConflictError(WorkshopException):
    """Raised on uniqueness violations and concurrent lost updates."""

    status_code = 409
    kind = "conflict"


class WorkflowError(WorkshopException):
    """Base for job-stage workflow rule violations."""

    status_code = 409
    kind = "workflow_error"


class BoundaryError(WorkflowError):
    """Raised when a stage move would leave the 1..11 range."""

    kind = "boundary_error"


class PreconditionNotMet(WorkflowError):
    """Raised when a stage checklist is incomplete."""

    kind = "precondition_not_met"


class InvalidStateTransition(WorkflowError):
    """Raised when a job status change is not allowed."""

    kind = "invalid_state_transition"


class ServiceUnavailable(WorkshopException):
    """Raised when the identity provider is unreachable or unconfigured."""

    status_code = 500
    kind = "service_unavailable"


class ConfigurationError(WorkshopException):
    """Raised when configuration is invalid."""

    kind = "configuration_error"
