"""Pizza catalog service."""
