from __future__ import annotations

import time

import pytest

from receipt_points.core.config import settings
from receipt_points.models.schemas import ReceiptCreate
from receipt_points.services.points_service import RULES, compute_points, score_breakdown


def _receipt(**overrides) -> ReceiptCreate:
    data = {
        "retailer": "",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "10:00",
        "items": [],
        "total": "1.01",
    }
    data.update(overrides)
    return ReceiptCreate.model_validate(data)


def _rule(receipt: ReceiptCreate, name: str) -> int:
    return {s.rule: s.points for s in score_breakdown(receipt)}[name]


def test_target_receipt_scores_28(target_receipt):
    assert compute_points(ReceiptCreate.model_validate(target_receipt)) == 28


def test_corner_market_receipt_scores_109(corner_market_receipt):
    assert compute_points(ReceiptCreate.model_validate(corner_market_receipt)) == 109


def test_single_item_target_receipt_scores_14():
    receipt = _receipt(
        retailer="Target",
        purchaseDate="2022-01-01",
        purchaseTime="13:01",
        total="35.35",
        items=[{"shortDescription": "Mountain Dew 12-PK", "price": "6.49"}],
    )
    assert compute_points(receipt) == 6 + 6 + 0 + 0 + 0 + 2


def test_breakdown_lists_every_rule_in_order(target_receipt):
    breakdown = score_breakdown(ReceiptCreate.model_validate(target_receipt))
    assert [s.rule for s in breakdown] == [name for name, _ in RULES]
    assert {s.rule: s.points for s in breakdown} == {
        "retailer_name": 6,
        "round_dollar": 0,
        "quarter_multiple": 0,
        "item_pairs": 10,
        "description_length": 6,
        "odd_day": 6,
        "afternoon": 0,
    }


def test_compute_points_is_deterministic(target_receipt):
    receipt = ReceiptCreate.model_validate(target_receipt)
    assert compute_points(receipt) == compute_points(receipt)


@pytest.mark.parametrize(
    "retailer,expected",
    [
        ("Target", 6),
        ("M&M Corner Market", 14),
        ("  Walgreens - #123 ", 12),
        ("Café 7-Eleven!", 10),
        ("&&& ---", 0),
    ],
)
def test_retailer_name_counts_ascii_alphanumerics(retailer, expected):
    assert _rule(_receipt(retailer=retailer), "retailer_name") == expected


@pytest.mark.parametrize(
    "total,round_dollar,quarter",
    [
        ("100.00", 50, 25),
        ("9", 50, 25),
        ("35.35", 0, 0),
        ("9.75", 0, 25),
        ("0.50", 0, 25),
        ("1.01", 0, 0),
        ("0.00", 50, 25),
    ],
)
def test_total_rules(total, round_dollar, quarter):
    receipt = _receipt(total=total)
    assert _rule(receipt, "round_dollar") == round_dollar
    assert _rule(receipt, "quarter_multiple") == quarter


def test_quarter_multiple_is_exact_for_long_totals():
    receipt = _receipt(total="1234567890123456789012345678.25")
    assert _rule(receipt, "round_dollar") == 0
    assert _rule(receipt, "quarter_multiple") == 25

    receipt = _receipt(total="0.2500000000000000000000000000001")
    assert _rule(receipt, "quarter_multiple") == 0


@pytest.mark.parametrize("count,expected", [(0, 0), (1, 0), (2, 5), (3, 5), (4, 10), (5, 10)])
def test_item_pairs(count, expected):
    items = [{"shortDescription": "Gatorade", "price": "2.25"}] * count
    assert _rule(_receipt(items=items), "item_pairs") == expected


@pytest.mark.parametrize(
    "description,price,expected",
    [
        ("Gatorade", "100.00", 0),
        ("Mountain Dew 12PK", "6.49", 0),
        ("Mountain Dew 12-PK", "6.49", 2),
        ("Emils Cheese Pizza", "12.25", 3),
        ("   Klarbrunn 12-PK 12 FL OZ  ", "12.00", 3),
        ("abc", "15.00", 3),
        ("abc", "0.01", 1),
        ("   ", "5.00", 1),
    ],
)
def test_description_length(description, price, expected):
    items = [{"shortDescription": description, "price": price}]
    assert _rule(_receipt(items=items), "description_length") == expected


@pytest.mark.parametrize("purchase_date,expected", [("2022-01-01", 6), ("2022-01-31", 6), ("2022-01-02", 0), ("2022-03-20", 0)])
def test_odd_day(purchase_date, expected):
    assert _rule(_receipt(purchaseDate=purchase_date), "odd_day") == expected


@pytest.mark.parametrize(
    "purchase_time,expected",
    [("13:59", 0), ("14:00", 10), ("14:33", 10), ("15:59", 10), ("16:00", 0), ("02:30", 0)],
)
def test_afternoon(purchase_time, expected):
    assert _rule(_receipt(purchaseTime=purchase_time), "afternoon") == expected


def test_unparsable_fields_contribute_nothing(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_RECEIPT_VALIDATION", False)
    receipt = _receipt(
        retailer="Shop",
        purchaseDate="not-a-date",
        purchaseTime="half past two",
        total="lots",
        items=[
            {"shortDescription": "abc", "price": "free"},
            {"shortDescription": "def", "price": "3.00"},
        ],
    )
    assert {s.rule: s.points for s in score_breakdown(receipt)} == {
        "retailer_name": 4,
        "round_dollar": 0,
        "quarter_multiple": 0,
        "item_pairs": 5,
        "description_length": 1,
        "odd_day": 0,
        "afternoon": 0,
    }
    assert compute_points(receipt) == 10


def test_exponent_amounts_are_skipped_quickly(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_RECEIPT_VALIDATION", False)
    receipt = _receipt(
        total="1e2000000",
        items=[{"shortDescription": "abc", "price": "1e2000000"}],
    )
    started = time.monotonic()
    breakdown = {s.rule: s.points for s in score_breakdown(receipt)}
    assert time.monotonic() - started < 1.0
    assert breakdown["round_dollar"] == 0
    assert breakdown["quarter_multiple"] == 0
    assert breakdown["description_length"] == 0


def test_loosely_formatted_fields_score_nothing(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_RECEIPT_VALIDATION", False)
    receipt = _receipt(purchaseDate="2022-1-1", purchaseTime="14:5", total="1_000")
    breakdown = {s.rule: s.points for s in score_breakdown(receipt)}
    assert breakdown["round_dollar"] == 0
    assert breakdown["quarter_multiple"] == 0
    assert breakdown["odd_day"] == 0
    assert breakdown["afternoon"] == 0
