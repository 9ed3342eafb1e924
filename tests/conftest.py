"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Test client (FastAPI TestClient) with dependency overrides reset
- Mocked AI provider and generation service
- Scripted hosting-provider APIs on httpx.MockTransport (no network)
- Sample briefs
"""

import re
from typing import Callable, Dict, Generator, List, Optional, Tuple, Union
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.ai.providers.base import AIResponse, ProviderType, TokenUsage
from app.main import app
from app.services.generation_service import GenerationService


# ---------------------------------------------------------------------------
# SCRIPTED PROVIDER API
# ---------------------------------------------------------------------------

Reply = Union[Tuple[int, Optional[dict]], Callable[[httpx.Request], httpx.Response]]


class ProviderAPI:
    """
    A fake REST API for httpx.MockTransport.

    Routes map (METHOD, path regex) to either (status, json_body) or a
    callable taking the request. Every request is recorded in order;
    unmatched requests get a 599 so a test notices them.

    Example:
        api = ProviderAPI({("POST", r"/sites$"): (200, {"site_id": "abc"})})
        client = NetlifyClient("token", transport=api.transport)
    """

    def __init__(self, routes: Dict[Tuple[str, str], Reply]):
        self.routes = dict(routes)
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for (method, pattern), reply in self.routes.items():
            if request.method == method and re.search(pattern, request.url.path):
                if callable(reply):
                    return reply(request)
                status, body = reply
                if body is None:
                    return httpx.Response(status)
                return httpx.Response(status, json=body)
        return httpx.Response(599, text=f"unexpected {request.method} {request.url}")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: Optional[str] = None, pattern: Optional[str] = None) -> List[httpx.Request]:
        """Recorded requests, optionally filtered by method and path regex."""
        return [
            r for r in self.requests
            if (method is None or r.method == method)
            and (pattern is None or re.search(pattern, r.url.path))
        ]


@pytest.fixture
def provider_api() -> type:
    """The ProviderAPI class, for building a scripted API per test."""
    return ProviderAPI


# ---------------------------------------------------------------------------
# AI FIXTURES
# ---------------------------------------------------------------------------

def make_ai_response(content: str = "<!DOCTYPE html><html></html>", **kwargs) -> AIResponse:
    """Build an AIResponse with test defaults."""
    return AIResponse(
        content=content,
        provider=ProviderType.GEMINI,
        model="gemini-2.5-flash",
        usage=TokenUsage(prompt_tokens=120, completion_tokens=800),
        latency_ms=150.0,
        **kwargs,
    )


@pytest.fixture
def ai_response() -> Callable[..., AIResponse]:
    """Factory for AIResponse objects (tests cannot import from conftest)."""
    return make_ai_response


@pytest.fixture
def mock_provider() -> MagicMock:
    """An AIProvider whose generate() returns a small HTML page."""
    provider = MagicMock()
    provider.provider_type = ProviderType.GEMINI
    provider.model = "gemini-2.5-flash"
    provider.generate = AsyncMock(return_value=make_ai_response())
    return provider


@pytest.fixture
def generation_service(mock_provider: MagicMock) -> GenerationService:
    return GenerationService(provider=mock_provider)


# ---------------------------------------------------------------------------
# FIREBASE AUTH FIXTURE
# ---------------------------------------------------------------------------

@pytest.fixture
def ready_auth() -> MagicMock:
    """Service-account auth that is READY and hands out a fixed token."""
    auth = MagicMock()
    auth.project_id = "pabriklanding"
    auth.get_access_token = AsyncMock(return_value="ya29.test-token")
    return auth


# ---------------------------------------------------------------------------
# BRIEF FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_brief() -> dict:
    """Only the required fields."""
    return {
        "productName": "Acme",
        "productDescription": "Widgets",
        "targetAudience": "Devs",
        "ctaLink": "https://x.test",
    }


@pytest.fixture
def full_brief(minimal_brief: dict) -> dict:
    """Every field filled in."""
    return {
        **minimal_brief,
        "productUsp": "Never breaks",
        "productPrice": "Rp 99.000",
        "productSlashedPrice": "Rp 199.000",
        "finalGoal": "Direct sales",
        "productOffer": "50% off today only",
        "colorScheme": "Navy and gold",
        "mood": "Luxurious",
        "languageStyle": "Casual",
        "requiredSections": "Hero, FAQ",
        "referenceLink": "https://inspiration.test",
        "heroImage": "https://img.test/hero.png",
        "featureImages": "https://img.test/f1.png\nhttps://img.test/f2.png",
        "featureSlider": True,
        "testimonialImages": "https://img.test/t1.png",
        "additionalDetails": "Mention free shipping",
    }


# ---------------------------------------------------------------------------
# TEST CLIENT
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """
    Test client for the FastAPI app.

    Tests override dependencies through app.dependency_overrides; they are
    cleared after each test.
    """
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
