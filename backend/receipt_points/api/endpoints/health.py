"""Health check endpoints for monitoring."""
from typing import Dict, Any
from fastapi import APIRouter, Depends

from receipt_points.core.config import settings
from receipt_points.services.receipt_store import ReceiptStore, get_receipt_store

router = APIRouter()


@router.api_route("/health", methods=["GET", "HEAD"])
async def health_check(store: ReceiptStore = Depends(get_receipt_store)) -> Dict[str, Any]:
    """Basic health check endpoint (supports GET & HEAD)."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": settings.VERSION,
        "receipts": len(store),
    }
