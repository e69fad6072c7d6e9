from datetime import UTC, datetime

from fastapi import APIRouter

from codeinsight.api.v1 import ai, auth, dashboard, github

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(github.router)
api_router.include_router(ai.router)
api_router.include_router(dashboard.router)


@api_router.get("/health", tags=["health"])
async def api_health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}
