"""
Application layer - Application services and use cases.

Contains:
- Request, response and result models
- Router
- Machine workflows
- Workflow engine
"""

from .models import (
    HttpMethod,
    HttpResponseCode,
    Request,
    Response,
    WorkflowResult,
)
from .router import Router, RouteDefinition, RouteMatch
from .machine_service import MachineService
from .workflow_engine import WorkflowEngine


__all__ = [
    "HttpMethod",
    "HttpResponseCode",
    "Request",
    "Response",
    "WorkflowResult",
    "Router",
    "RouteDefinition",
    "RouteMatch",
    "MachineService",
    "WorkflowEngine",
]
