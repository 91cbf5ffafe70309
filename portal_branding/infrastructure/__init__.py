"""Infrastructure adapters shared by the branding modules."""
