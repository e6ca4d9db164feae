"""In-memory receipt store.

Receipts live for the lifetime of the process only.  Every submitted
receipt receives a freshly generated UUID4 and is never modified or
removed afterwards.  Both insertion and lookup take the same lock so the
store can be shared between the event loop and threadpool workers.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict

from receipt_points.models.schemas import Receipt, ReceiptBase

logger = logging.getLogger(__name__)


class ReceiptNotFoundError(KeyError):
    """Raised when no receipt is stored under the requested id."""

    def __init__(self, receipt_id: str) -> None:
        super().__init__(receipt_id)
        self.receipt_id = receipt_id

    def __str__(self) -> str:
        return f"Receipt {self.receipt_id!r} not found"


class ReceiptStore:
    """Thread-safe mapping of receipt id to :class:`Receipt`."""

    def __init__(self) -> None:
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def put(self, receipt: ReceiptBase) -> str:
        """Store ``receipt`` under a new id and return that id."""
        receipt_id = str(uuid.uuid4())
        fields = {name: value for name, value in receipt if name != "id"}
        stored = Receipt.model_construct(id=receipt_id, **fields)
        with self._lock:
            self._receipts[receipt_id] = stored
        logger.info("Stored receipt %s (%d items)", receipt_id, len(stored.items))
        return receipt_id

    def get(self, receipt_id: str) -> Receipt:
        """Return the receipt stored under ``receipt_id``.

        :raises ReceiptNotFoundError: if the id is unknown.
        """
        with self._lock:
            receipt = self._receipts.get(receipt_id)
        if receipt is None:
            logger.info("Receipt %s not found", receipt_id)
            raise ReceiptNotFoundError(receipt_id)
        return receipt

    def clear(self) -> None:
        with self._lock:
            self._receipts.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts


# Process-wide store used by the API
receipt_store = ReceiptStore()


def get_receipt_store() -> ReceiptStore:
    """FastAPI dependency returning the process-wide store."""
    return receipt_store
