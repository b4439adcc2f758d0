"""
Request, response and result models for the workflow engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

from machine_reservation.core.value_objects import MachineRecord


# =============================================================================
# Enums
# =============================================================================


class HttpMethod(Enum):
    """Supported request methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class HttpResponseCode(IntEnum):
    """Status codes returned by the service."""

    OK = 200
    CREATED = 201  # Reserved, no workflow returns it yet
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    HARDWARE_ERROR = 420  # Non-standard: the machine failed to start
    INTERNAL_SERVER_ERROR = 500


# =============================================================================
# Request / Response
# =============================================================================


@dataclass
class Request:
    """
    A request handed over by the transport.

    Attributes:
        method: Request method.
        path: Request path, e.g. ``/machine/m1/start``.
        token: Authentication token.
        location_id: Location to reserve at (reserve only).
        job_id: Job to reserve for (reserve only).
        machine_id: Machine the request targets (inspect and start); must
            agree with the id in the path when given.
    """

    method: HttpMethod
    path: str
    token: str
    location_id: Optional[str] = None
    job_id: Optional[str] = None
    machine_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, HttpMethod):
            self.method = HttpMethod(str(self.method).upper())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Request":
        """
        Create a request from its transport dictionary.

        Raises:
            KeyError: If method, path or token is missing.
            ValueError: If the method is not supported.
        """
        return cls(
            method=data["method"],
            path=data["path"],
            token=data["token"],
            location_id=data.get("locationId"),
            job_id=data.get("jobId"),
            machine_id=data.get("machineId"),
        )


@dataclass(frozen=True)
class Response:
    """
    Response returned to the transport.

    Attributes:
        status_code: Status code.
        machine: Machine state, when the workflow has one to show.
    """

    status_code: HttpResponseCode
    machine: Optional[MachineRecord] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the transport."""
        result: dict[str, Any] = {"statusCode": int(self.status_code)}
        if self.machine is not None:
            result["machine"] = self.machine.to_dict()
        return result


# =============================================================================
# Workflow Result
# =============================================================================


@dataclass(frozen=True)
class WorkflowResult:
    """
    Outcome of handling a request, success or failure.

    Every workflow path produces one of these; only the outer adapter
    decides whether a failure is raised or returned.

    Attributes:
        status_code: Status code of the outcome.
        machine: Machine state to return, if any.
        message: Human-readable message.
    """

    status_code: HttpResponseCode
    machine: Optional[MachineRecord] = None
    message: str = ""

    @property
    def success(self) -> bool:
        """Check if the request succeeded."""
        return self.status_code < HttpResponseCode.BAD_REQUEST

    @property
    def is_unauthorized(self) -> bool:
        """Check if the request failed authentication."""
        return self.status_code == HttpResponseCode.UNAUTHORIZED

    @classmethod
    def ok(cls, machine: MachineRecord) -> "WorkflowResult":
        """Create a successful result."""
        return cls(HttpResponseCode.OK, machine, "OK")

    @classmethod
    def not_found(cls, message: str) -> "WorkflowResult":
        """Create a result for a missing machine."""
        return cls(HttpResponseCode.NOT_FOUND, message=message)

    @classmethod
    def bad_request(
        cls,
        message: str,
        machine: Optional[MachineRecord] = None,
    ) -> "WorkflowResult":
        """Create a result for a request that cannot be applied."""
        return cls(HttpResponseCode.BAD_REQUEST, machine, message)

    @classmethod
    def hardware_error(cls, machine: Optional[MachineRecord], message: str) -> "WorkflowResult":
        """Create a result for a machine that failed to start."""
        return cls(HttpResponseCode.HARDWARE_ERROR, machine, message)

    @classmethod
    def unauthorized(cls, message: str = "Invalid token") -> "WorkflowResult":
        """Create a result for a failed authentication."""
        return cls(HttpResponseCode.UNAUTHORIZED, message=message)

    @classmethod
    def unknown_route(cls, message: str) -> "WorkflowResult":
        """Create a result for a request no route matches."""
        return cls(HttpResponseCode.INTERNAL_SERVER_ERROR, message=message)

    def to_response(self) -> Response:
        """Convert to the transport response."""
        return Response(status_code=self.status_code, machine=self.machine)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result = self.to_response().to_dict()
        result["message"] = self.message
        return result
