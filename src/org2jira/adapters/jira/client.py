"""
Jira API Client - Low-level HTTP client for the Jira REST API.

Implements the TransportPort over a requests.Session.
"""

import logging
from typing import Any, Optional

import requests

from ...core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    TransportError,
)
from ...core.ports.transport import CredentialProviderPort, TransportPort


class JiraApiClient(TransportPort):
    """
    Low-level Jira REST API client.

    Handles authentication, request/response, and error handling.
    """

    API_VERSION = "2"

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProviderPort,
        dry_run: bool = True,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Jira client.

        Args:
            base_url: Jira instance URL (e.g., https://jira.example.com)
            credentials: Provider of (username, secret)
            dry_run: If True, don't make write operations
            timeout: Per-request timeout in seconds
            session: Optional pre-configured session
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/{self.API_VERSION}"
        self.dry_run = dry_run
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")

        self._session = session or requests.Session()
        self._session.auth = credentials.get_credentials()
        self._session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    # -------------------------------------------------------------------------
    # TransportPort Implementation
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Make an authenticated request to the Jira API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path (e.g., 'issue/PROJ-123')
            body: Optional JSON body

        Returns:
            JSON response as dict

        Raises:
            TransportError: On API errors
        """
        method = method.upper()
        if self.dry_run and method != "GET":
            self.logger.info(f"[DRY-RUN] Would {method} {path}")
            return {}

        url = f"{self.api_url}/{path.lstrip('/')}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self._session.request(
                method, url, json=body, timeout=self.timeout
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}", path=path, cause=e)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", path=path, cause=e)

        return self._handle_response(response, path)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        path: str,
    ) -> dict[str, Any]:
        """Handle API response and errors."""
        if response.ok:
            if not response.text:
                return {}
            try:
                return response.json()
            except ValueError as e:
                raise TransportError(
                    f"Invalid JSON from {path}", path=path,
                    status_code=response.status_code, cause=e,
                )

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check JIRA_USER and JIRA_API_TOKEN.",
                path=path, status_code=status,
            )

        if status == 403:
            raise PermissionDeniedError(
                f"Permission denied for {path}", path=path, status_code=status
            )

        if status == 404:
            raise NotFoundError(f"Not found: {path}", path=path, status_code=status)

        raise TransportError(
            f"API error {status}: {error_body}", path=path, status_code=status
        )
