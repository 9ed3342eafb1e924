"""
Netlify API Client - Create, deploy and delete sites.

API Reference:
==============
- Sites: https://open-api.netlify.com/#tag/site
- Deploys: https://docs.netlify.com/api/get-started/#zip-file-method

Usage Example:
==============
    client = NetlifyClient(access_token="nfp_xxx")

    site = await client.create_site(account_slug="my-team")
    deploy = await client.deploy_html(site.site_id, "<!DOCTYPE html>...")
    print(deploy.deploy_ssl_url or site.url)
"""

import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Optional

import httpx

from app.environments.base import APIError, HostingService


logger = logging.getLogger("pabrik.environments.netlify")


@dataclass(frozen=True)
class NetlifySite:
    """The parts of a created site the publish workflow needs."""
    site_id: str
    url: Optional[str] = None


@dataclass(frozen=True)
class NetlifyDeploy:
    deploy_id: str
    deploy_ssl_url: Optional[str] = None
    ssl_url: Optional[str] = None


def build_site_archive(html_content: str) -> bytes:
    """Zip archive whose only file is index.html."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("index.html", html_content.encode("utf-8"))
    return buffer.getvalue()


class NetlifyClient(HostingService):
    """Netlify REST client. Requires a personal access token."""

    service_name = "Netlify"

    BASE_URL = "https://api.netlify.com/api/v1"

    def _extract_error(self, response: httpx.Response) -> str:
        data = self._json(response)
        return data.get("message") or response.text or f"HTTP {response.status_code}"

    async def create_site(self, account_slug: Optional[str] = None) -> NetlifySite:
        """
        Create a new, empty site with a Netlify-generated name.

        Args:
            account_slug: Team to create the site in (token owner's default if None)
        """
        body = {"account_slug": account_slug} if account_slug else {}
        response = await self._request("POST", f"{self.BASE_URL}/sites", json=body)
        data = self._json(response)

        site_id = data.get("site_id") or data.get("id")
        if not site_id:
            raise APIError("Netlify create site response has no 'site_id'")

        site = NetlifySite(site_id=site_id, url=data.get("ssl_url") or data.get("url"))
        logger.info(f"Created Netlify site {site.site_id} ({site.url})")
        return site

    async def deploy_html(self, site_id: str, html_content: str) -> NetlifyDeploy:
        """Deploy html_content as the site's only file, index.html."""
        response = await self._request(
            "POST",
            f"{self.BASE_URL}/sites/{site_id}/deploys",
            headers={"Content-Type": "application/zip"},
            content=build_site_archive(html_content),
        )
        data = self._json(response)

        deploy = NetlifyDeploy(
            deploy_id=data.get("id", ""),
            deploy_ssl_url=data.get("deploy_ssl_url"),
            ssl_url=data.get("ssl_url"),
        )
        logger.info(f"Deployed to Netlify site {site_id} (deploy {deploy.deploy_id})")
        return deploy

    async def delete_site(self, site_id: str) -> None:
        """Delete a site and everything deployed to it."""
        await self._request("DELETE", f"{self.BASE_URL}/sites/{site_id}")
        logger.info(f"Deleted Netlify site {site_id}")
