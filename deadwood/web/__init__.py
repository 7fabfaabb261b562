"""HTTP API (requires the ``web`` extra)."""

from deadwood.web.app import create_app

__all__ = ["create_app"]
