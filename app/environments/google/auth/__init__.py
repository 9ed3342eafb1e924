"""
Google Auth Module - Service-account credentials for Google APIs.

Firebase Hosting is driven by the project's service account, so this
module holds a single process-wide credential with an explicit state
(UNINITIALIZED, READY, FAILED) instead of per-user OAuth tokens.
"""

from app.environments.google.auth.client import AuthState, ServiceAccountAuth, firebase_auth
from app.environments.google.auth.schemas import HOSTING_SCOPES

__all__ = [
    "AuthState",
    "ServiceAccountAuth",
    "firebase_auth",
    "HOSTING_SCOPES",
]
