"""Package registry clients."""

from .npm import NpmClient

__all__ = ["NpmClient"]
