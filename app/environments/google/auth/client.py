"""
Google Service Account Auth - Process-wide credentials for Firebase Hosting.

The Hosting API is called as the project's service account, not as an
end user, so there is no OAuth consent flow here: the key from
FIREBASE_SERVICE_ACCOUNT_JSON is loaded once at startup and its access
token is reused by every publish request.

Lifecycle:
==========
    UNINITIALIZED ──initialize()──► READY(credentials)
                         │
                         └────────► FAILED(cause)

- initialize() runs once, in the background, when the app starts.
- A missing or broken key only logs; the server keeps serving the
  other endpoints.
- get_access_token() checks the state first and raises
  ConfigurationError unless READY. While READY it refreshes the cached
  token when it has expired (tokens live about an hour).

References:
===========
- https://googleapis.dev/python/google-auth/latest/reference/google.oauth2.service_account.html
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Any, Dict, Optional

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from app.core.config import settings
from app.core.errors import ConfigurationError
from app.environments.google.auth.schemas import HOSTING_SCOPES


logger = logging.getLogger("pabrik.environments.google.auth")


class AuthState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


class ServiceAccountAuth:
    """
    Service-account credentials with an explicit initialization state.

    Example Usage:
        auth = ServiceAccountAuth()
        await auth.initialize()          # once, at startup
        token = await auth.get_access_token()
    """

    def __init__(self, service_account_json: Optional[str] = None):
        """
        Args:
            service_account_json: Key file contents (defaults to settings)
        """
        self._raw_json = (
            service_account_json
            if service_account_json is not None
            else settings.FIREBASE_SERVICE_ACCOUNT_JSON
        )
        self.state = AuthState.UNINITIALIZED
        self.failure: Optional[str] = None
        self._credentials: Optional[service_account.Credentials] = None
        self._info: Dict[str, Any] = {}
        self._refresh_lock = asyncio.Lock()

    @property
    def project_id(self) -> Optional[str]:
        """Project the service account belongs to."""
        return self._info.get("project_id")

    # -------------------------------------------------------------------------
    # INITIALIZATION
    # -------------------------------------------------------------------------

    async def initialize(self) -> AuthState:
        """
        Load the key and fetch a first access token.

        Never raises; the outcome is recorded in self.state.
        """
        if self.state is not AuthState.UNINITIALIZED:
            return self.state

        if not self._raw_json:
            return self._fail(
                "FIREBASE_SERVICE_ACCOUNT_JSON is not set. Firebase deploys are disabled.",
                level=logging.WARNING,
            )

        try:
            self._info = json.loads(self._raw_json)
            if not isinstance(self._info, dict):
                raise ValueError(f"expected a JSON object, got {type(self._info).__name__}")
            self._credentials = service_account.Credentials.from_service_account_info(
                self._info, scopes=HOSTING_SCOPES
            )
        except (ValueError, KeyError) as e:
            return self._fail(f"Could not parse FIREBASE_SERVICE_ACCOUNT_JSON: {e}")

        try:
            await asyncio.to_thread(self._credentials.refresh, Request())
        except google.auth.exceptions.GoogleAuthError as e:
            return self._fail(f"Could not obtain a Google access token: {e}")

        self.state = AuthState.READY
        logger.info(f"Firebase Hosting credentials ready for project {self.project_id}")
        return self.state

    def _fail(self, cause: str, level: int = logging.ERROR) -> AuthState:
        self.state = AuthState.FAILED
        self.failure = cause
        self._credentials = None
        logger.log(level, cause)
        return self.state

    # -------------------------------------------------------------------------
    # TOKEN ACCESS
    # -------------------------------------------------------------------------

    async def get_access_token(self) -> str:
        """
        Return a valid bearer token for the Hosting API.

        Raises:
            ConfigurationError: If credentials are not READY or a refresh fails
        """
        if self.state is not AuthState.READY or self._credentials is None:
            raise ConfigurationError(
                "Server is not configured for Firebase deploys. "
                "The service account key is missing or invalid.",
                details=self.failure,
            )

        async with self._refresh_lock:
            if not self._credentials.valid:
                logger.info("Refreshing Firebase Hosting access token")
                try:
                    await asyncio.to_thread(self._credentials.refresh, Request())
                except google.auth.exceptions.GoogleAuthError as e:
                    logger.error(f"Access token refresh failed: {e}")
                    raise ConfigurationError(
                        "Could not refresh the Firebase access token.", details=str(e)
                    )
        return self._credentials.token


# Process-wide instance, initialized by the app lifespan
firebase_auth = ServiceAccountAuth()
