"""API routes for receipt submission and points lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from receipt_points.core.observability import sentry_breadcrumb
from receipt_points.models.schemas import (
    PointsBreakdownResponse,
    PointsResponse,
    Receipt,
    ReceiptCreate,
    ReceiptIdResponse,
)
from receipt_points.services.points_service import compute_points, score_breakdown
from receipt_points.services.receipt_store import (
    ReceiptNotFoundError,
    ReceiptStore,
    get_receipt_store,
)

router = APIRouter(prefix="/receipts", tags=["receipts"])

# Points lookups answer on every standard verb, not just GET.  Non-standard
# verbs still get 405.
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def _load_receipt(receipt_id: str, store: ReceiptStore) -> Receipt:
    try:
        return store.get(receipt_id)
    except ReceiptNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receipt not found") from None


@router.post("/process", response_model=ReceiptIdResponse)
async def process_receipt(
    receipt: ReceiptCreate,
    store: ReceiptStore = Depends(get_receipt_store),
) -> ReceiptIdResponse:
    """Store a submitted receipt and return its generated id."""
    receipt_id = store.put(receipt)
    sentry_breadcrumb("receipts", "receipt stored", data={"receipt_id": receipt_id})
    return ReceiptIdResponse(id=receipt_id)


@router.api_route("/{receipt_id}/points", methods=ANY_METHOD, response_model=PointsResponse)
async def get_points(
    receipt_id: str,
    store: ReceiptStore = Depends(get_receipt_store),
) -> PointsResponse:
    """Return the points awarded for a stored receipt."""
    receipt = _load_receipt(receipt_id, store)
    return PointsResponse(points=compute_points(receipt))


@router.get("/{receipt_id}/points/breakdown", response_model=PointsBreakdownResponse)
async def get_points_breakdown(
    receipt_id: str,
    store: ReceiptStore = Depends(get_receipt_store),
) -> PointsBreakdownResponse:
    """Return the points for a stored receipt along with each rule's share."""
    receipt = _load_receipt(receipt_id, store)
    rules = score_breakdown(receipt)
    return PointsBreakdownResponse(
        id=receipt.id,
        points=sum(r.points for r in rules),
        rules=rules,
    )
