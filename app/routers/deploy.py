"""
Deploy Router - Publish generated HTML to a static-hosting provider.

Endpoints:
==========
- POST /api/deploy          → new Netlify site
- POST /api/deploy-firebase → Firebase Hosting site <siteId>.web.app

Both return {"message": ..., "url": ...} on success. The publish
workflow itself lives in app.services.publish_service.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends

from app.core.errors import ValidationError
from app.deps import get_firebase_target_factory, get_netlify_target
from app.schemas.deploy import DeployResponse, FirebaseDeployRequest, NetlifyDeployRequest
from app.services.publish_service import FirebaseTarget, NetlifyTarget


logger = logging.getLogger("pabrik.routers.deploy")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["deploy"])


@router.post("/deploy", response_model=DeployResponse)
async def deploy_to_netlify(
    request: NetlifyDeployRequest,
    target: NetlifyTarget = Depends(get_netlify_target),
):
    """
    Publish the page to a brand-new Netlify site.

    If the deploy fails after the site was created, the site is deleted
    before the error is returned.
    """
    logger.info("Received /api/deploy request")

    if not request.html_content:
        raise ValidationError("Payload (htmlContent) is incomplete.")

    outcome = await target.publish(request.html_content)
    outcome.raise_for_failure()

    return DeployResponse(message="Deploy succeeded!", url=outcome.url)


@router.post("/deploy-firebase", response_model=DeployResponse)
async def deploy_to_firebase(
    request: FirebaseDeployRequest,
    make_target: Callable[[str], FirebaseTarget] = Depends(get_firebase_target_factory),
):
    """
    Publish the page to the Firebase Hosting site named by siteId.

    The site id is validated before anything else happens. An existing
    site is reused; a failed step is reported by name and nothing is
    rolled back.
    """
    logger.info("Received /api/deploy-firebase request")

    if not request.html_content or not request.site_id:
        raise ValidationError("Payload (htmlContent or siteId) is incomplete.")

    target = make_target(request.site_id)
    logger.info(f"Starting Firebase deploy for site {target.site_id}")

    outcome = await target.publish(request.html_content)
    outcome.raise_for_failure()

    return DeployResponse(message="Firebase deploy succeeded!", url=outcome.url)
