from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add backend folder to sys.path so `import receipt_points...` works in tests when running from backend root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from receipt_points.api.main import app  # noqa: E402
from receipt_points.services.receipt_store import ReceiptStore, get_receipt_store  # noqa: E402


@pytest.fixture
def store():
    """A fresh store wired into the app in place of the process-wide one."""
    fresh = ReceiptStore()
    app.dependency_overrides[get_receipt_store] = lambda: fresh
    try:
        yield fresh
    finally:
        app.dependency_overrides.pop(get_receipt_store, None)


@pytest.fixture
def client(store):
    return TestClient(app)


@pytest.fixture
def target_receipt():
    return {
        "retailer": "Target",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [
            {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
            {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
            {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
            {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
            {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
        ],
        "total": "35.35",
    }


@pytest.fixture
def corner_market_receipt():
    return {
        "retailer": "M&M Corner Market",
        "purchaseDate": "2022-03-20",
        "purchaseTime": "14:33",
        "items": [
            {"shortDescription": "Gatorade", "price": "2.25"},
            {"shortDescription": "Gatorade", "price": "2.25"},
            {"shortDescription": "Gatorade", "price": "2.25"},
            {"shortDescription": "Gatorade", "price": "2.25"},
        ],
        "total": "9.00",
    }
