"""
Top‑level API router.

This router aggregates the domain‑specific routers under a unified
prefix.  When new endpoints are added, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import form_data, health, queries

router = APIRouter()

router.include_router(form_data.router, prefix="/form-data", tags=["form-data"])
router.include_router(queries.router, prefix="/queries", tags=["queries"])
router.include_router(health.router, prefix="/health", tags=["health"])
