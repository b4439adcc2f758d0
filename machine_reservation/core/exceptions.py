"""
Custom exceptions for the machine reservation service.

Provides a hierarchy of typed exceptions. Only authentication failures
leave the workflow engine as exceptions; every other failure is turned
into an ordinary response before it reaches the caller.
"""

import json
from typing import Any, Optional


class ReservationSystemError(Exception):
    """Base exception for all machine reservation errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            code: Optional error code for programmatic handling.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(ReservationSystemError):
    """Base exception for authentication failures."""

    pass


class Unauthorized(AuthenticationError):
    """
    The request token failed validation.

    Serializes to the external ``{"statusCode": 401, "message": ...}``
    payload, and its string form is that payload as JSON.
    """

    status_code = 401

    def __init__(self, message: str = "Invalid token", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "message": self.message}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __str__(self) -> str:
        return self.to_json()


# =============================================================================
# Machine Control Errors
# =============================================================================


class MachineControlError(ReservationSystemError):
    """Base exception for machine controller errors."""

    def __init__(
        self,
        message: str,
        machine_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.machine_id = machine_id
        if machine_id:
            self.details["machine"] = machine_id


class HardwareFault(MachineControlError):
    """The physical machine failed to carry out a command."""

    pass


# =============================================================================
# Repository Errors
# =============================================================================


class RepositoryError(ReservationSystemError):
    """Base exception for machine store errors."""

    pass


class DuplicateMachineError(RepositoryError):
    """A machine with the same id is already stored."""

    pass
