"""Health check endpoint for api-errors.

Unauthenticated and mounted at root. Used by liveness probes.
"""

import importlib.metadata

from fastapi import APIRouter

router = APIRouter(tags=["health"])


def _package_version() -> str:
    try:
        return importlib.metadata.version("api-errors")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: returns 200 if the application process is running."""
    return {"status": "ok", "version": _package_version()}
