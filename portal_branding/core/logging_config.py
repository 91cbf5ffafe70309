"""Process-wide logging setup for the branding client."""

from __future__ import annotations

import logging

from portal_branding.core.config import Settings

_configured = False


def configure_logging(settings: Settings, *, force: bool = False) -> None:
    """Set the root level once; ``debug`` forces DEBUG. Existing handlers are kept."""
    global _configured
    if _configured and not force:
        return

    level_name = "DEBUG" if settings.debug else settings.logging.level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.logging.format))
        root.addHandler(handler)
    root.setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    _configured = True
