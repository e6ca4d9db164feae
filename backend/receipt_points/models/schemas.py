"""Pydantic schemas for request and response models.

Pydantic models are used for validating and serialising data that
crosses the boundary of the API. Field names on the wire follow the
receipt JSON format (``shortDescription``, ``purchaseDate``...) while
the Python attributes are snake_case; both spellings are accepted when
constructing a model.

Receipt models are frozen: once a receipt has been stored it cannot be
modified through the instance handed out by the store.
"""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from receipt_points.core.config import settings
from receipt_points.utils.helpers import (
    parse_amount,
    parse_purchase_date,
    parse_purchase_time,
)


def _check_amount(value: str) -> str:
    if settings.STRICT_RECEIPT_VALIDATION and parse_amount(value) is None:
        raise ValueError(f"'{value}' is not a decimal amount")
    return value


# ---------------------------------------------------------------------------
# Domain schemas


class Item(BaseModel):
    """Individual line item on a receipt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    short_description: str = Field(alias="shortDescription", description="Short product description")
    price: str = Field(description="Price as a decimal string, e.g. '6.49'")

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: str) -> str:
        return _check_amount(v)


class ReceiptBase(BaseModel):
    """Fields shared by submitted and stored receipts."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    retailer: str
    purchase_date: str = Field(alias="purchaseDate", description="Purchase date as YYYY-MM-DD")
    purchase_time: str = Field(alias="purchaseTime", description="Purchase time as 24-hour HH:MM")
    items: Tuple[Item, ...] = Field(default_factory=tuple)
    total: str = Field(description="Total amount as a decimal string, e.g. '35.35'")

    @field_validator("purchase_date")
    @classmethod
    def validate_purchase_date(cls, v: str) -> str:
        if settings.STRICT_RECEIPT_VALIDATION and parse_purchase_date(v) is None:
            raise ValueError(f"'{v}' is not a YYYY-MM-DD date")
        return v

    @field_validator("purchase_time")
    @classmethod
    def validate_purchase_time(cls, v: str) -> str:
        if settings.STRICT_RECEIPT_VALIDATION and parse_purchase_time(v) is None:
            raise ValueError(f"'{v}' is not an HH:MM time")
        return v

    @field_validator("total")
    @classmethod
    def validate_total(cls, v: str) -> str:
        return _check_amount(v)


class ReceiptCreate(ReceiptBase):
    """Body of ``POST /receipts/process``."""


class Receipt(ReceiptBase):
    """A stored receipt; ``id`` is assigned by the receipt store."""

    id: str


class RuleScore(BaseModel):
    """Points contributed by a single scoring rule."""

    rule: str
    points: int


# ---------------------------------------------------------------------------
# API response schemas

class ReceiptIdResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int


class PointsBreakdownResponse(BaseModel):
    id: str
    points: int
    rules: List[RuleScore]
