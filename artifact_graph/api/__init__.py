"""HTTP API for artifact graph queries."""

from .main import create_app

__all__ = ["create_app"]
