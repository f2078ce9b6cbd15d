"""API routers for the cluster secret sync service."""

from . import health

__all__ = ["health"]
