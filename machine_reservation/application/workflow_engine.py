"""
Workflow Engine - Single entry point for machine requests.

Authenticates each request, routes it to a workflow and returns the
response. Authentication failures are raised as ``Unauthorized``; every
other failure is an ordinary response.
"""

from __future__ import annotations

from typing import Optional

from machine_reservation.application.machine_service import MachineService
from machine_reservation.application.models import (
    HttpMethod,
    Request,
    Response,
    WorkflowResult,
)
from machine_reservation.application.router import Router
from machine_reservation.core.exceptions import Unauthorized
from machine_reservation.core.interfaces import (
    IdentityProvider,
    MachineController,
    MachineRepository,
    RecordCache,
)
from machine_reservation.core.value_objects import MachineRecord
from machine_reservation.loggers import logger


class WorkflowEngine:
    """
    Routes authenticated requests to the reserve, inspect and start workflows.

    Requests are handled one at a time, each to completion. Reserve
    (scan then write) and start (read then write) are not atomic, so
    concurrent callers need a per-machine lock around ``handle``.
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        store: MachineRepository,
        cache: RecordCache[MachineRecord],
        controller: MachineController,
    ) -> None:
        """
        Initialize the engine.

        Args:
            identity_provider: Client used to validate request tokens.
            store: Authoritative machine store.
            cache: Read cache keyed by machine id.
            controller: Client for the physical machines.
        """
        self._identity_provider = identity_provider
        self._service = MachineService(store, cache, controller)
        self._router = Router()
        self._register_default_routes()

    @property
    def router(self) -> Router:
        """Get the request router."""
        return self._router

    def _register_default_routes(self) -> None:
        """Register the machine workflows."""
        self._router.register(
            "reserve_machine",
            HttpMethod.POST,
            "/machine/request",
            self._handle_reserve,
            "Reserve an available machine at a location for a job",
        )
        self._router.register(
            "get_machine",
            HttpMethod.GET,
            "/machine/{machine_id}",
            self._handle_inspect,
            "Get the state of a machine",
        )
        self._router.register(
            "start_machine",
            HttpMethod.POST,
            "/machine/{machine_id}/start",
            self._handle_start,
            "Start the cycle of a reserved machine",
        )

    def handle(self, request: Request) -> Response:
        """
        Handle a request.

        Args:
            request: The request to handle.

        Returns:
            The response for the request.

        Raises:
            Unauthorized: If the request token is invalid.
        """
        result = self.handle_result(request)
        if result.is_unauthorized:
            raise Unauthorized(result.message)
        return result.to_response()

    def handle_result(self, request: Request) -> WorkflowResult:
        """
        Handle a request without raising.

        Args:
            request: The request to handle.

        Returns:
            The outcome of the request, authentication failures included.
        """
        if not self._identity_provider.validate_token(request.token):
            logger.warning(f"Rejected {request.method.value} {request.path}: invalid token")
            return WorkflowResult.unauthorized()

        match = self._router.match(request.method, request.path)
        if match is None:
            logger.warning(f"No route for {request.method.value} {request.path}")
            return WorkflowResult.unknown_route(
                f"No route for {request.method.value} {request.path}"
            )

        logger.debug(f"Routing {request.method.value} {request.path} to {match.route.name}")
        return match.route.handler(request, match.params)

    # =========================================================================
    # Route Handlers
    # =========================================================================

    def _handle_reserve(self, request: Request, params: dict[str, str]) -> WorkflowResult:
        missing = [
            name
            for name, value in (("locationId", request.location_id), ("jobId", request.job_id))
            if not value
        ]
        if missing:
            logger.warning(f"Reserve request missing fields: {missing}")
            return WorkflowResult.bad_request(f"Missing required fields: {missing}")

        return self._service.reserve(request.location_id, request.job_id)

    def _handle_inspect(self, request: Request, params: dict[str, str]) -> WorkflowResult:
        mismatch = self._check_machine_id(request, params)
        if mismatch is not None:
            return mismatch
        return self._service.inspect(params["machine_id"])

    def _handle_start(self, request: Request, params: dict[str, str]) -> WorkflowResult:
        mismatch = self._check_machine_id(request, params)
        if mismatch is not None:
            return mismatch
        return self._service.start(params["machine_id"])

    @staticmethod
    def _check_machine_id(request: Request, params: dict[str, str]) -> Optional[WorkflowResult]:
        """Reject a request whose machine id disagrees with its path."""
        if request.machine_id is None or request.machine_id == params["machine_id"]:
            return None
        message = f"Machine id {request.machine_id} does not match path {request.path}"
        logger.warning(message)
        return WorkflowResult.bad_request(message)
