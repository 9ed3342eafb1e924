"""
Environments Module - External Hosting Integrations

REST clients for the static-hosting providers the generated pages are
published to.

Architecture Overview:
======================
environments/
├── __init__.py           # Module exports
├── base.py               # HostingService base class + exceptions
├── netlify/              # Netlify sites and deploys
│   └── client.py
└── google/               # Firebase Hosting
    ├── auth/             # Service-account credentials
    └── hosting/          # Hosting REST API

Design Principles:
==================
1. One method per provider call; orchestration lives in app.services
2. Every failed call raises APIError with the provider's own message
3. Transports are injectable so tests never touch the network
"""

from app.environments.base import (
    HostingService,
    EnvironmentError,
    APIError,
)

__all__ = [
    "HostingService",
    "EnvironmentError",
    "APIError",
]
