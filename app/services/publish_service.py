"""
Publish Service - Take one HTML document live on a static-hosting provider.

Two targets implement the same contract, publish(html) -> PublishOutcome:

- NetlifyTarget: create a fresh site, deploy index.html to it.
- FirebaseTarget: ensure the site, create a version, upload the file,
  finalize the version, release it.

Each attempt walks an explicit state machine. A target moves to the next
state only after the provider acknowledged the call; any failure stops
the walk and is reported with the step that failed:

    START → SITE_ENSURED → VERSION_CREATED → CONTENT_UPLOADED → FINALIZED → RELEASED
      │          │               │                  │              │
      └──────────┴───────────────┴──────── Failed(step, cause) ────┘

Netlify only has two steps, so it goes START → SITE_ENSURED → RELEASED.

Compensation is asymmetric. When the Netlify deploy fails after the site
was created, the site is deleted once, best effort; a failed delete is
logged and never replaces the original error. Firebase leaves whatever it
created in place and reports it in PartialPublishError.created.
TODO: decide with product whether Firebase should clean up orphaned versions.

Usage:
======
```python
outcome = await NetlifyTarget().publish(html)
outcome = await FirebaseTarget(site_id="acme-promo").publish(html)
outcome.raise_for_failure()
print(outcome.url)
```
"""

import hashlib
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import httpx

from app.core.config import settings
from app.core.errors import (
    AppError,
    ConfigurationError,
    InvalidSiteIdError,
    PartialPublishError,
    PublishError,
)
from app.environments.base import APIError
from app.environments.google.auth import ServiceAccountAuth, firebase_auth
from app.environments.google.hosting import FirebaseHostingClient
from app.environments.netlify import NetlifyClient


logger = logging.getLogger("pabrik.services.publish")


SITE_ID_PATTERN = re.compile(r"[a-z0-9-]{6,30}")
INDEX_PATH = "/index.html"


def is_valid_site_id(site_id: str) -> bool:
    """True when site_id is 6-30 lowercase letters, digits or hyphens."""
    return isinstance(site_id, str) and SITE_ID_PATTERN.fullmatch(site_id) is not None


def content_hash(payload: bytes) -> str:
    """SHA-256 hex digest used to declare and to address uploaded content."""
    return hashlib.sha256(payload).hexdigest()


# ---------------------------------------------------------------------------
# STATES AND OUTCOME
# ---------------------------------------------------------------------------

class PublishState(str, Enum):
    """Last state acknowledged by the provider."""
    START = "start"
    SITE_ENSURED = "site_ensured"
    VERSION_CREATED = "version_created"
    CONTENT_UPLOADED = "content_uploaded"
    FINALIZED = "finalized"
    RELEASED = "released"


class PublishStep(str, Enum):
    """The provider call being attempted."""
    AUTHENTICATE = "authenticate"
    CREATE_SITE = "create_site"
    DEPLOY = "deploy"
    CREATE_VERSION = "create_version"
    UPLOAD_CONTENT = "upload_content"
    FINALIZE_VERSION = "finalize_version"
    RELEASE_VERSION = "release_version"


@dataclass(frozen=True)
class PublishOutcome:
    """
    Result of one publish attempt.

    Success only when state is RELEASED; otherwise failed_step and error
    say where and why it stopped.

    Attributes:
        provider: "netlify" or "firebase"
        state: Last state the provider acknowledged
        url: Public URL (success only)
        site_id: Provider site the attempt worked on, once known
        failed_step: Step that failed (failure only)
        error: The error to surface to the caller (failure only)
        compensated: Whether a cleanup of created resources was attempted
    """
    provider: str
    state: PublishState
    url: Optional[str] = None
    site_id: Optional[str] = None
    failed_step: Optional[PublishStep] = None
    error: Optional[AppError] = None
    compensated: bool = False

    @property
    def success(self) -> bool:
        return self.state is PublishState.RELEASED and self.error is None

    def raise_for_failure(self) -> None:
        """Raise the recorded error unless the attempt succeeded."""
        if not self.success:
            raise self.error or PublishError(self.provider, str(self.failed_step), "Unknown failure")


@dataclass
class _Attempt:
    """Mutable bookkeeping for one publish run."""
    provider: str
    total_steps: int
    state: PublishState = PublishState.START
    created: List[str] = field(default_factory=list)

    def begin(self, number: int, message: str) -> None:
        logger.info(f"[{self.provider}] Step {number}/{self.total_steps}: {message}")

    def acknowledge(self, number: int, state: PublishState) -> None:
        self.state = state
        logger.info(f"[{self.provider}] Step {number}/{self.total_steps} done ({state.value})")


# ---------------------------------------------------------------------------
# TARGETS
# ---------------------------------------------------------------------------

class PublishTarget(ABC):
    """A hosting provider that can take an HTML document live."""

    provider: str = ""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # Passed to every REST client; tests inject httpx.MockTransport
        self._transport = transport

    @abstractmethod
    async def publish(self, html_content: str) -> PublishOutcome:
        """Run the provider's whole sequence. Never raises for provider failures."""
        pass

    def _config_failure(self, error: ConfigurationError, site_id: Optional[str] = None) -> PublishOutcome:
        logger.error(f"[{self.provider}] Not configured: {error.message}")
        return PublishOutcome(
            provider=self.provider,
            state=PublishState.START,
            site_id=site_id,
            failed_step=PublishStep.AUTHENTICATE,
            error=error,
        )


class NetlifyTarget(PublishTarget):
    """
    Publish to a brand-new Netlify site.

    Every call creates a new site; nothing is reused or updated.
    """

    provider = "netlify"

    def __init__(
        self,
        access_token: Optional[str] = None,
        account_slug: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport)
        self.access_token = access_token if access_token is not None else settings.NETLIFY_ACCESS_TOKEN
        self.account_slug = account_slug if account_slug is not None else settings.NETLIFY_ACCOUNT_SLUG

    async def publish(self, html_content: str) -> PublishOutcome:
        if not self.access_token:
            return self._config_failure(ConfigurationError(
                "Server is not configured for Netlify deploys. The Netlify token is missing."
            ))

        client = NetlifyClient(access_token=self.access_token, transport=self._transport)
        attempt = _Attempt(provider=self.provider, total_steps=2)
        site = None
        step = PublishStep.CREATE_SITE

        try:
            attempt.begin(1, "creating a new Netlify site")
            site = await client.create_site(account_slug=self.account_slug or None)
            attempt.created.append(f"site:{site.site_id}")
            attempt.acknowledge(1, PublishState.SITE_ENSURED)

            step = PublishStep.DEPLOY
            attempt.begin(2, f"deploying index.html to site {site.site_id}")
            deploy = await client.deploy_html(site.site_id, html_content)
            # The deploy URL resolves immediately; the site's own alias may lag behind
            url = deploy.deploy_ssl_url or site.url or deploy.ssl_url
            if not url:
                raise APIError("Netlify deploy response has no URL")
            attempt.acknowledge(2, PublishState.RELEASED)

        except Exception as e:
            compensated = False
            if site is not None:
                await self._delete_site_quietly(client, site.site_id)
                compensated = True
            if not isinstance(e, APIError):
                raise

            logger.error(f"[{self.provider}] Publish failed at {step.value}: {e}")
            if site is None:
                error = PublishError(self.provider, step.value, str(e))
            else:
                error = PartialPublishError(
                    self.provider, step.value, str(e),
                    created=attempt.created, compensated=compensated,
                )
            return PublishOutcome(
                provider=self.provider,
                state=attempt.state,
                site_id=site.site_id if site else None,
                failed_step=step,
                error=error,
                compensated=compensated,
            )

        logger.info(f"[{self.provider}] Publish succeeded: {url}")
        return PublishOutcome(
            provider=self.provider,
            state=attempt.state,
            url=url,
            site_id=site.site_id,
        )

    async def _delete_site_quietly(self, client: NetlifyClient, site_id: str) -> None:
        logger.info(f"[{self.provider}] Deleting site {site_id} after the failed deploy")
        try:
            await client.delete_site(site_id)
        except APIError as e:
            logger.warning(f"[{self.provider}] Could not delete site {site_id}: {e}")


class FirebaseTarget(PublishTarget):
    """
    Publish to a Firebase Hosting site named by the caller.

    The site id becomes <site_id>.web.app and must match ^[a-z0-9-]{6,30}$.
    An existing site with that id is reused.
    """

    provider = "firebase"

    def __init__(
        self,
        site_id: str,
        auth: Optional[ServiceAccountAuth] = None,
        project_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Raises:
            InvalidSiteIdError: If site_id does not match the pattern
        """
        if not is_valid_site_id(site_id):
            raise InvalidSiteIdError(site_id)
        super().__init__(transport)
        self.site_id = site_id
        self.auth = auth or firebase_auth
        self.project_id = project_id

    def _resolve_project_id(self) -> str:
        project_id = self.project_id or settings.FIREBASE_PROJECT_ID or self.auth.project_id
        if not project_id:
            raise ConfigurationError(
                "Firebase project id is unknown. Set FIREBASE_PROJECT_ID."
            )
        return project_id

    async def publish(self, html_content: str) -> PublishOutcome:
        try:
            token = await self.auth.get_access_token()
            project_id = self._resolve_project_id()
        except ConfigurationError as e:
            return self._config_failure(e, site_id=self.site_id)

        client = FirebaseHostingClient(
            access_token=token,
            project_id=project_id,
            transport=self._transport,
        )
        attempt = _Attempt(provider=self.provider, total_steps=5)
        payload = html_content.encode("utf-8")
        digest = content_hash(payload)
        step = PublishStep.CREATE_SITE

        try:
            attempt.begin(1, f"ensuring site {self.site_id}")
            site = await client.create_site(self.site_id)
            if not site.already_existed:
                attempt.created.append(f"site:{self.site_id}")
            attempt.acknowledge(1, PublishState.SITE_ENSURED)

            step = PublishStep.CREATE_VERSION
            attempt.begin(2, f"creating a version declaring {INDEX_PATH}")
            version = await client.create_version(self.site_id, {INDEX_PATH: digest})
            attempt.created.append(f"version:{version.version_id}")
            attempt.acknowledge(2, PublishState.VERSION_CREATED)

            step = PublishStep.UPLOAD_CONTENT
            attempt.begin(3, f"uploading {len(payload)} bytes")
            await client.upload_file(version.upload_url, digest, payload)
            attempt.acknowledge(3, PublishState.CONTENT_UPLOADED)

            step = PublishStep.FINALIZE_VERSION
            attempt.begin(4, f"finalizing version {version.version_id}")
            await client.finalize_version(self.site_id, version.version_id)
            attempt.acknowledge(4, PublishState.FINALIZED)

            step = PublishStep.RELEASE_VERSION
            attempt.begin(5, f"releasing version {version.version_id} to {site.default_url}")
            await client.create_release(self.site_id, version.version_id)
            attempt.acknowledge(5, PublishState.RELEASED)

        except APIError as e:
            logger.error(f"[{self.provider}] Publish failed at {step.value}: {e}")
            if attempt.state is PublishState.START:
                error = PublishError(self.provider, step.value, str(e))
            else:
                # No rollback here; created resources are reported for manual cleanup
                error = PartialPublishError(
                    self.provider, step.value, str(e),
                    created=attempt.created, compensated=False,
                )
            return PublishOutcome(
                provider=self.provider,
                state=attempt.state,
                site_id=self.site_id,
                failed_step=step,
                error=error,
            )

        logger.info(f"[{self.provider}] Publish succeeded: {site.default_url}")
        return PublishOutcome(
            provider=self.provider,
            state=attempt.state,
            url=site.default_url,
            site_id=self.site_id,
        )
