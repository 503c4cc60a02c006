"""Release publishing workflow for multi-package npm repositories."""

__version__ = "0.1.0"
