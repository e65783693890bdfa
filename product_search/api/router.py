"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from product_search.api.endpoints import health, products, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
