"""
Dependencies module - reusable FastAPI dependencies for route handlers.

Routes never build services or publish targets themselves; they ask for
them here, so tests can swap any of them via app.dependency_overrides.
"""

from typing import Callable

from app.services.generation_service import GenerationService, generation_service
from app.services.publish_service import FirebaseTarget, NetlifyTarget


def get_generation_service() -> GenerationService:
    """The process-wide generation service (Gemini-backed)."""
    return generation_service


def get_netlify_target() -> NetlifyTarget:
    """A Netlify target using the configured access token."""
    return NetlifyTarget()


def get_firebase_target_factory() -> Callable[[str], FirebaseTarget]:
    """
    Factory for Firebase targets.

    The site id comes from the request body, so the route receives a
    callable instead of a ready target. Calling it validates the site id
    and raises InvalidSiteIdError before any network call.
    """
    return FirebaseTarget
