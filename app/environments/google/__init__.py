"""
Google Environment Module - Firebase Hosting integration.

Architecture:
=============
google/
├── __init__.py           # Module exports
├── auth/                 # Service-account credentials (process-wide)
│   ├── client.py
│   └── schemas.py        # Scope constants
└── hosting/              # Firebase Hosting REST API
    └── client.py

Usage:
======
    from app.environments.google import firebase_auth, FirebaseHostingClient

    token = await firebase_auth.get_access_token()
    hosting = FirebaseHostingClient(access_token=token, project_id="my-project")
    site = await hosting.create_site("acme-promo")
"""

from app.environments.google.auth import AuthState, ServiceAccountAuth, firebase_auth, HOSTING_SCOPES
from app.environments.google.hosting import FirebaseHostingClient, HostingSite, HostingVersion

__all__ = [
    "AuthState",
    "ServiceAccountAuth",
    "firebase_auth",
    "HOSTING_SCOPES",
    "FirebaseHostingClient",
    "HostingSite",
    "HostingVersion",
]
