"""
Transport Port - Abstract interface for talking to the issue tracker.

The core never builds URLs or headers. It hands a method, an API path
relative to the REST root, and an optional JSON body to a transport.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class TransportPort(ABC):
    """One authenticated HTTP call against the issue tracker."""

    @abstractmethod
    def request(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Perform a request and return the decoded JSON body.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Path relative to the REST root (e.g. 'issue/PROJ-1')
            body: Optional JSON body

        Returns:
            Decoded response ({} for empty bodies)

        Raises:
            TransportError: On HTTP or connection failures
        """
        ...


class CredentialProviderPort(ABC):
    """Supplies credentials to a transport."""

    @abstractmethod
    def get_credentials(self) -> tuple[str, str]:
        """Return (username, secret)."""
        ...
