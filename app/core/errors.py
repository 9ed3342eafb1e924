"""
Application errors - the taxonomy every route maps to an HTTP response.

Each error carries its own HTTP status so the exception handler in
app.main can render any of them as {"error": ..., "details": ...}
without knowing where it came from.

Hierarchy:
==========
AppError
├── ValidationError (400)          bad or missing request input
│   ├── MissingFieldError          a required field is absent
│   └── InvalidSiteIdError         Firebase site id fails the pattern
├── ConfigurationError (500)       credential missing or never initialized
└── UpstreamError (502)            an external API said no
    ├── GenerationError            the text-generation call failed
    └── PublishError               a hosting provider step failed
        └── PartialPublishError    ...after resources were already created
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base exception for all errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Response body for this error."""
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# ---------------------------------------------------------------------------
# 4xx
# ---------------------------------------------------------------------------


class ValidationError(AppError):
    """Raised when request input is missing or malformed. Never retried."""
    status_code = 400


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or blank."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class InvalidSiteIdError(ValidationError):
    """Raised when a Firebase site id does not match ^[a-z0-9-]{6,30}$."""

    def __init__(self, site_id: str):
        super().__init__(
            f'Invalid site id: "{site_id}". Must be 6-30 characters of '
            "lowercase letters, digits and hyphens."
        )
        self.site_id = site_id


# ---------------------------------------------------------------------------
# 5xx
# ---------------------------------------------------------------------------


class ConfigurationError(AppError):
    """Raised at call time when a credential is missing or not initialized."""
    status_code = 500


class UpstreamError(AppError):
    """Raised when an external API returns a failure."""
    status_code = 502


class GenerationError(UpstreamError):
    """Raised when the text-generation service fails or returns nothing."""

    def __init__(self, cause: str):
        super().__init__("Text generation failed.", details=cause)
        self.cause = cause


class PublishError(UpstreamError):
    """Raised when a hosting provider step fails before anything was created."""

    def __init__(self, provider: str, step: str, cause: str):
        super().__init__(
            f"Publishing to {provider} failed at step '{step}'.",
            details=cause,
        )
        self.provider = provider
        self.step = step
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["step"] = self.step
        return body


class PartialPublishError(PublishError):
    """
    Raised when a publish sequence fails after provider-side resources exist.

    created lists what is left behind (e.g. ["site:abc"]). compensated tells
    whether a cleanup was attempted. When it is False the caller has to
    reconcile the provider state by hand.
    """

    def __init__(
        self,
        provider: str,
        step: str,
        cause: str,
        created: Optional[List[str]] = None,
        compensated: bool = False,
    ):
        super().__init__(provider, step, cause)
        self.created = created or []
        self.compensated = compensated

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["created"] = self.created
        body["compensated"] = self.compensated
        return body
