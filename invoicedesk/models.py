from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"

    @classmethod
    def coerce(cls, value: Any) -> "DiscountType":
        try:
            return cls(value)
        except ValueError:
            return cls.PERCENTAGE


class PaymentStatus(str, Enum):
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"

    @property
    def label(self) -> str:
        return {
            PaymentStatus.PAID: "Paid",
            PaymentStatus.PARTIAL: "Partially Paid",
            PaymentStatus.UNPAID: "Unpaid",
        }[self]


def _as_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip() or 0)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class ClientInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    address: str = ""
    email: str = ""
    phone: str = ""

    @field_validator("name", "address", "email", "phone", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class LineItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    description: str = ""
    amount: float = 0.0
    preset: Optional[str] = "custom"

    @field_validator("id", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return _as_float(value)


class Invoice(BaseModel):
    """A single invoice as stored and displayed.

    Field aliases follow the camelCase keys of the stored JSON blob so that
    collections written by earlier versions load unchanged. ``revision`` is
    replaced by the repository on every save.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    invoice_number: str = Field(default="", alias="invoiceNumber")
    date: str = ""
    pan_number: str = Field(default="", alias="panNumber")
    client: ClientInfo = Field(default_factory=ClientInfo)
    items: List[LineItem] = Field(default_factory=list)
    discount: float = 0.0
    discount_type: DiscountType = Field(default=DiscountType.PERCENTAGE, alias="discountType")
    paid_amount: float = Field(default=0.0, alias="paidAmount")
    confirmation_name: str = Field(default="", alias="confirmationName")
    confirmation_date: str = Field(default="", alias="confirmationDate")
    created_at: str = Field(default="", alias="createdAt")
    revision: str = ""

    @field_validator(
        "id",
        "invoice_number",
        "date",
        "pan_number",
        "confirmation_name",
        "confirmation_date",
        "created_at",
        "revision",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("client", mode="before")
    @classmethod
    def _coerce_client(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("discount_type", mode="before")
    @classmethod
    def _coerce_discount_type(cls, value: Any) -> DiscountType:
        return DiscountType.coerce(value)

    @field_validator("discount", "paid_amount", mode="before")
    @classmethod
    def _coerce_money(cls, value: Any) -> float:
        return _as_float(value)


_INVOICE_LIST = TypeAdapter(List[Invoice])


def dump_invoices(invoices: List[Invoice]) -> str:
    return _INVOICE_LIST.dump_json(list(invoices), by_alias=True).decode("utf-8")


def load_invoices(raw: str | bytes) -> Tuple[List[Invoice], List[int]]:
    """Parse the stored blob record by record.

    Returns the valid invoices and the positions of records that failed
    validation. Raises ``ValueError`` when the blob is not a JSON array.
    """
    records = json.loads(raw)
    if not isinstance(records, list):
        raise ValueError("Stored invoices are not a list")

    invoices: List[Invoice] = []
    skipped: List[int] = []
    for index, record in enumerate(records):
        try:
            invoices.append(Invoice.model_validate(record))
        except ValidationError:
            skipped.append(index)
    return invoices, skipped
