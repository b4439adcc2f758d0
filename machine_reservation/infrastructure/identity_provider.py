"""
Identity Provider client (stub).

Stands in for the external identity provider. Which tokens it accepts is
decided by the caller; with no tokens configured every token is rejected.
"""

from __future__ import annotations

from typing import Mapping, Optional

from machine_reservation.core.interfaces import CostRecorder
from machine_reservation.simulation.accountant import ResourceConsumer
from machine_reservation.simulation.units import CONNECTION, EXTERNAL_API_CALL


class IdentityProviderClient(ResourceConsumer):
    """Client for token validation and user identification."""

    def __init__(
        self,
        accountant: CostRecorder,
        users_by_token: Optional[Mapping[str, str]] = None,
        consumer_name: Optional[str] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            accountant: Recorder the costs are charged to.
            users_by_token: Accepted tokens mapped to their user ids.
            consumer_name: Name to attribute costs to.
        """
        super().__init__(accountant, consumer_name)
        self._users_by_token = dict(users_by_token or {})
        self._consume(CONNECTION)

    def validate_token(self, token: str) -> bool:
        """
        Validate an authentication token.

        Args:
            token: Token to validate.

        Returns:
            True if the token is valid.
        """
        self._consume(EXTERNAL_API_CALL)
        return token in self._users_by_token

    def identify(self, token: str) -> str:
        """
        Get the user id behind a token.

        Args:
            token: Authentication token.

        Returns:
            The user id, or an empty string for unknown tokens.
        """
        self._consume(EXTERNAL_API_CALL)
        return self._users_by_token.get(token, "")
