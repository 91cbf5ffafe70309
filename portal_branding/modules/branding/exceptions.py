"""Branding domain specific exceptions."""

from __future__ import annotations

from typing import Optional


class BrandingError(Exception):
    """Base class for branding related errors."""


class TransportError(BrandingError):
    """Raised when the backend answers with a non-2xx status or is unreachable."""

    def __init__(self, message: str, *, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class AuthError(TransportError):
    """Raised on 401/403 so callers can prompt for re-authentication."""


class ValidationError(TransportError):
    """Raised on 400; the message is the backend's body verbatim."""


class PreconditionError(BrandingError):
    """Raised when a write is refused before any request is sent."""


class CapabilityError(PreconditionError):
    """Raised when the injected capability check denies asset management."""


class InvalidPayloadError(PreconditionError):
    """Raised when upload content fails local checks."""


class SessionClosedError(BrandingError):
    """Raised when a closed resolution session is asked to resolve again."""
