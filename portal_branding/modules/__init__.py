"""Feature modules and public exports."""

from . import branding

__all__ = [
    "branding",
]
