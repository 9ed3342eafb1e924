"""
Base classes and interfaces for hosting-provider integrations.

This module defines the shared contract of the REST clients in
app.environments (Netlify, Firebase Hosting): one method per provider
call, every non-2xx answer turned into an APIError.

Design Pattern: Template Method
===============================
HostingService._request() owns the HTTP plumbing (auth header, timeout,
error mapping). Subclasses only say which URL to call and how the
provider spells its error messages (_extract_error).
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings


logger = logging.getLogger("pabrik.environments")


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


# ---------------------------------------------------------------------------
# BASE CLASS
# ---------------------------------------------------------------------------


class HostingService:
    """
    Base class for a hosting provider's REST client.

    Attributes:
        service_name: Used in log lines and error messages
        access_token: Bearer token sent with every request
        timeout: Per-request deadline in seconds
    """

    service_name: str = ""

    def __init__(
        self,
        access_token: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            access_token: Provider bearer token
            timeout: Override settings.PUBLISH_REQUEST_TIMEOUT
            transport: Custom httpx transport (tests pass httpx.MockTransport)
        """
        self.access_token = access_token
        self.timeout = timeout or settings.PUBLISH_REQUEST_TIMEOUT
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Get authorization headers for API requests."""
        return {"Authorization": f"Bearer {self.access_token}"}

    def _extract_error(self, response: httpx.Response) -> str:
        """Best human-readable error message from a failed response."""
        return response.text or f"HTTP {response.status_code}"

    async def _request(
        self,
        method: str,
        url: str,
        *,
        allowed_statuses: tuple = (),
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> httpx.Response:
        """
        Make an authenticated request to the provider.

        Args:
            method: HTTP method
            url: Absolute URL
            allowed_statuses: Non-2xx statuses the caller handles itself
            headers: Extra headers merged over the auth header
            **kwargs: Passed to httpx (json=, content=, params=)

        Returns:
            The httpx.Response (2xx or one of allowed_statuses)

        Raises:
            APIError: On network failure, timeout or any other status
        """
        request_headers = self._get_headers()
        if headers:
            request_headers.update(headers)

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(method, url, headers=request_headers, **kwargs)
            except httpx.RequestError as e:
                logger.error(f"{self.service_name} network error on {method} {url}: {e!r}")
                raise APIError(f"Network error contacting {self.service_name}: {e!r}")

        if response.is_success or response.status_code in allowed_statuses:
            return response

        error_detail = self._extract_error(response)
        logger.error(f"{self.service_name} API error: {response.status_code} - {error_detail}")
        raise APIError(
            error_detail,
            status_code=response.status_code,
            response=response.text,
        )

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        """Response body as a dict; empty or non-JSON bodies give {}."""
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
