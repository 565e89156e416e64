"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from riskforecast.core.registry import CATEGORY_REGISTRY

router = APIRouter()

VERSION = "1.0.0"


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": VERSION,
        "engine": "deterministic-weighted",
        "categories": list(CATEGORY_REGISTRY),
    }
