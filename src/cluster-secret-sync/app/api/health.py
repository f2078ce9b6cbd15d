"""Health check endpoints for Kubernetes liveness and readiness checks."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    description="Basic health check endpoint.",
)
async def health():
    """Basic health check."""
    return {"status": "healthy", "service": "cluster-secret-sync"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the secret watch is running.",
)
async def ready(request: Request):
    """Readiness check.

    Ready while the secret watcher is running.
    """
    watcher = getattr(request.app.state, "watcher", None)
    checks = {
        "watcher": watcher is not None and watcher.is_running,
    }

    all_ready = all(checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
    }
