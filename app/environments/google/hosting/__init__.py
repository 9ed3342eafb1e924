"""
Firebase Hosting Module - REST client for the Firebase Hosting API.
"""

from app.environments.google.hosting.client import (
    FirebaseHostingClient,
    HostingSite,
    HostingVersion,
)

__all__ = [
    "FirebaseHostingClient",
    "HostingSite",
    "HostingVersion",
]
