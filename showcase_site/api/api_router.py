from datetime import datetime, timezone

from fastapi import APIRouter

from showcase_site.api.endpoints import contact

api_router = APIRouter(prefix="/api")

api_router.include_router(contact.router, tags=["Contact"])


@api_router.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe. Always OK while the process is serving requests."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "OK", "timestamp": timestamp}
