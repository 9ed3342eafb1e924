"""
Firebase Hosting API Client - Sites, versions, uploads and releases.

One method per REST call of the Hosting API (v1beta1). The order in which
they must be called lives in the publish workflow, not here.

API Reference:
==============
- Sites: https://firebase.google.com/docs/reference/hosting/rest/v1beta1/projects.sites
- Versions: https://firebase.google.com/docs/reference/hosting/rest/v1beta1/sites.versions
- Releases: https://firebase.google.com/docs/reference/hosting/rest/v1beta1/sites.releases

Usage Example:
==============
    client = FirebaseHostingClient(access_token="ya29.xxx", project_id="my-project")

    site = await client.create_site("acme-promo")
    version = await client.create_version("acme-promo", {"/index.html": digest})
    await client.upload_file(version.upload_url, digest, payload)
    await client.finalize_version("acme-promo", version.version_id)
    await client.create_release("acme-promo", version.version_id)
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from app.environments.base import APIError, HostingService


logger = logging.getLogger("pabrik.environments.google.hosting")


@dataclass(frozen=True)
class HostingSite:
    site_id: str
    default_url: str
    already_existed: bool = False


@dataclass(frozen=True)
class HostingVersion:
    version_id: str
    upload_url: str


class FirebaseHostingClient(HostingService):
    """
    Firebase Hosting REST client.

    Requires an OAuth access token with the cloud-platform or firebase
    scope, usually from a service account (see ServiceAccountAuth).
    """

    service_name = "Firebase Hosting"

    BASE_URL = "https://firebasehosting.googleapis.com/v1beta1"

    def __init__(self, access_token: str, project_id: str, **kwargs):
        super().__init__(access_token, **kwargs)
        self.project_id = project_id

    def _extract_error(self, response: httpx.Response) -> str:
        # Google APIs answer {"error": {"code": 409, "message": "...", "status": "..."}}
        error = self._json(response).get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return response.text or f"HTTP {response.status_code}"

    def _site_path(self, site_id: str) -> str:
        return f"{self.BASE_URL}/projects/{self.project_id}/sites/{site_id}"

    # -------------------------------------------------------------------------
    # SITES
    # -------------------------------------------------------------------------

    async def create_site(self, site_id: str) -> HostingSite:
        """
        Create a Hosting site named site_id.

        A 409 (site already exists) is not an error: the site is reused.
        The API then returns no body worth reading, so the default URL
        falls back to https://<site_id>.web.app.
        """
        response = await self._request(
            "POST",
            f"{self.BASE_URL}/projects/{self.project_id}/sites",
            params={"siteId": site_id},
            json={},
            allowed_statuses=(409,),
        )
        already_existed = response.status_code == 409
        data = {} if already_existed else self._json(response)

        site = HostingSite(
            site_id=site_id,
            default_url=data.get("defaultUrl") or f"https://{site_id}.web.app",
            already_existed=already_existed,
        )
        if already_existed:
            logger.info(f"Firebase site {site_id} already exists, reusing it")
        else:
            logger.info(f"Created Firebase site {site_id} ({site.default_url})")
        return site

    # -------------------------------------------------------------------------
    # VERSIONS
    # -------------------------------------------------------------------------

    async def create_version(self, site_id: str, file_hashes: Dict[str, str]) -> HostingVersion:
        """
        Create a new version declaring its files.

        Args:
            site_id: Target site
            file_hashes: Path on the site (e.g. "/index.html") -> content hash

        Returns:
            HostingVersion with the id and the upload URL for its files
        """
        files = {path: {"hash": digest, "status": "ACTIVE"} for path, digest in file_hashes.items()}
        response = await self._request(
            "POST",
            f"{self._site_path(site_id)}/versions",
            json={"config": {"files": files}},
        )
        data = self._json(response)

        name = data.get("name")
        upload_url = data.get("uploadUrl")
        if not name or not upload_url:
            raise APIError("Firebase create version response has no 'name' or 'uploadUrl'")

        # name is ".../sites/<site>/versions/<version_id>"
        version = HostingVersion(version_id=name.rsplit("/", 1)[-1], upload_url=upload_url)
        logger.info(f"Created version {version.version_id} for site {site_id}")
        return version

    async def upload_file(self, upload_url: str, file_hash: str, payload: bytes) -> None:
        """
        Upload one file's bytes, addressed by its hash.

        Content-Length is the byte length of payload, which differs from the
        character length of the HTML as soon as it contains non-ASCII text.
        """
        await self._request(
            "POST",
            f"{upload_url}/{file_hash}",
            headers={
                "Content-Type": "application/octet-stream",
                "Content-Length": str(len(payload)),
            },
            content=payload,
        )
        logger.info(f"Uploaded {len(payload)} bytes as {file_hash[:12]}...")

    async def finalize_version(self, site_id: str, version_id: str) -> None:
        """Mark a version FINALIZED; no more files can be added to it."""
        await self._request(
            "PATCH",
            f"{self._site_path(site_id)}/versions/{version_id}",
            params={"update_mask": "status"},
            json={"status": "FINALIZED"},
        )
        logger.info(f"Finalized version {version_id}")

    # -------------------------------------------------------------------------
    # RELEASES
    # -------------------------------------------------------------------------

    async def create_release(self, site_id: str, version_id: str) -> Optional[str]:
        """
        Release a finalized version, making it the live content of the site.

        Returns:
            The release name reported by the API, if any
        """
        response = await self._request(
            "POST",
            f"{self._site_path(site_id)}/releases",
            params={"versionName": f"sites/{site_id}/versions/{version_id}"},
        )
        release_name = self._json(response).get("name")
        logger.info(f"Released version {version_id} on site {site_id}")
        return release_name
