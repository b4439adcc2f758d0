"""
Router - Matches requests to workflow handlers by method and path.

Path templates use ``{name}`` placeholders for single path segments,
e.g. ``/machine/{machine_id}/start``. A placeholder never matches
whitespace, and a path must match its template in full.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from machine_reservation.application.models import HttpMethod, Request, WorkflowResult


# Type alias for route handlers
RouteHandlerFunc = Callable[[Request, dict[str, str]], WorkflowResult]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def compile_template(template: str) -> re.Pattern[str]:
    """
    Compile a path template into an anchored regex.

    Args:
        template: Path template.

    Returns:
        Pattern with one named group per placeholder.
    """
    parts = _PLACEHOLDER.split(template)
    # split() alternates literal text and placeholder names
    pattern = "".join(
        re.escape(part) if i % 2 == 0 else rf"(?P<{part}>[^/\s]+)"
        for i, part in enumerate(parts)
    )
    return re.compile(rf"^{pattern}\Z")


@dataclass
class RouteDefinition:
    """
    Definition of a route.

    Attributes:
        name: Route name.
        method: Method the route answers.
        template: Path template.
        pattern: Compiled path pattern.
        handler: Handler function.
        description: Human-readable description.
    """

    name: str
    method: HttpMethod
    template: str
    pattern: re.Pattern[str]
    handler: RouteHandlerFunc
    description: str = ""


@dataclass(frozen=True)
class RouteMatch:
    """A matched route with the values of its path placeholders."""

    route: RouteDefinition
    params: dict[str, str]


class Router:
    """
    Routes requests to their handlers.

    Routes are tried in registration order; the first match wins.
    """

    def __init__(self) -> None:
        """Initialize an empty router."""
        self._routes: list[RouteDefinition] = []

    def register(
        self,
        name: str,
        method: HttpMethod,
        template: str,
        handler: RouteHandlerFunc,
        description: str = "",
    ) -> None:
        """
        Register a route.

        Args:
            name: Route name.
            method: Method the route answers.
            template: Path template.
            handler: Handler called with the request and path params.
            description: Human-readable description.
        """
        self._routes.append(
            RouteDefinition(
                name=name,
                method=method,
                template=template,
                pattern=compile_template(template),
                handler=handler,
                description=description,
            )
        )

    def match(self, method: HttpMethod, path: str) -> Optional[RouteMatch]:
        """
        Find the route for a method and path.

        Args:
            method: Request method.
            path: Request path.

        Returns:
            The match, or None if no route answers.
        """
        for route in self._routes:
            if route.method != method:
                continue
            found = route.pattern.fullmatch(path)
            if found:
                return RouteMatch(route=route, params=found.groupdict())
        return None

    def get_available_routes(self) -> list[dict[str, Any]]:
        """Get list of registered routes with their descriptions."""
        return [
            {
                "name": route.name,
                "method": route.method.value,
                "path": route.template,
                "description": route.description,
            }
            for route in self._routes
        ]

    def __len__(self) -> int:
        return len(self._routes)
