"""API module - FastAPI surface for single and batch health checks."""

from health_prober.api.app import create_app, serve

__all__ = [
    "create_app",
    "serve",
]
