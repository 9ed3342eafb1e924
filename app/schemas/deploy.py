"""
Deploy schemas - Pydantic models for the publish endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS (what the client sends)
# ---------------------------------------------------------------------------

class NetlifyDeployRequest(BaseModel):
    """
    Schema for POST /api/deploy.

    Example request body:
    {
        "htmlContent": "<!DOCTYPE html>..."
    }
    """
    model_config = ConfigDict(populate_by_name=True)

    html_content: Optional[str] = Field(None, alias="htmlContent")


class FirebaseDeployRequest(BaseModel):
    """
    Schema for POST /api/deploy-firebase.

    siteId is chosen by the frontend and becomes <siteId>.web.app.
    It is checked against ^[a-z0-9-]{6,30}$ before any provider call.

    Example request body:
    {
        "htmlContent": "<!DOCTYPE html>...",
        "siteId": "acme-promo-2024"
    }
    """
    model_config = ConfigDict(populate_by_name=True)

    html_content: Optional[str] = Field(None, alias="htmlContent")
    site_id: Optional[str] = Field(None, alias="siteId")


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS (what the server returns)
# ---------------------------------------------------------------------------

class DeployResponse(BaseModel):
    """
    Successful publish.

    Example response:
    {
        "message": "Deploy succeeded!",
        "url": "https://acme-promo-2024.web.app"
    }
    """
    message: str
    url: str
