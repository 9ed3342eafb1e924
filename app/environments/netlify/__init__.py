"""
Netlify Environment Module - Netlify sites and deploys.

Usage:
======
    from app.environments.netlify import NetlifyClient

    client = NetlifyClient(access_token=settings.NETLIFY_ACCESS_TOKEN)
    site = await client.create_site()
"""

from app.environments.netlify.client import (
    NetlifyClient,
    NetlifyDeploy,
    NetlifySite,
    build_site_archive,
)

__all__ = [
    "NetlifyClient",
    "NetlifyDeploy",
    "NetlifySite",
    "build_site_archive",
]
