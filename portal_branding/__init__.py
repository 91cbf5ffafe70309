"""Runtime branding asset resolution for the portal."""

__version__ = "0.1.0"
