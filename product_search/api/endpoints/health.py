"""
Health checks - for load balancers, Kubernetes, and monitoring.
Liveness is process-only; readiness requires the products index.
"""

from fastapi import APIRouter, HTTPException, status

from product_search.core.dependencies import AppSettings, SearchClient
from product_search.search.index import index_exists

router = APIRouter()


@router.get("")
async def health(settings: AppSettings):
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(es: SearchClient, settings: AppSettings):
    """Readiness: the engine answers and the products index exists."""
    if not await index_exists(es, settings.products_index):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Products index unavailable")
    return {"status": "ready", "index": settings.products_index}
