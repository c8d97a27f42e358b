import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from expense_tracker.utils.dates import parse_range_bound, to_naive_utc

CENT = Decimal("0.01")

class ExpenseCreate(BaseModel):
    """Create schema for an expense."""
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Expense amount (> 0)")
    category_id: uuid.UUID = Field(..., description="Category ID owned by the caller")
    date: datetime = Field(..., description="When the expense occurred")
    description: Optional[str] = Field(default=None, max_length=1000)
    receipt_url: Optional[str] = Field(default=None, max_length=2048)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "amount": "42.50",
                "categoryId": "6f1c1c7e-3c55-4d55-9d7f-8e0f1f3d2a10",
                "date": "2025-10-09",
                "description": "Groceries",
            }
        },
    )

    @field_validator("date")
    @classmethod
    def _naive_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("amount")
    @classmethod
    def _to_cents(cls, v: Decimal) -> Decimal:
        return v.quantize(CENT)


class ExpenseUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    category_id: Optional[uuid.UUID] = None
    date: Optional[datetime] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    receipt_url: Optional[str] = Field(default=None, max_length=2048)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("date")
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v is not None else None

    @field_validator("amount")
    @classmethod
    def _to_cents(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return v.quantize(CENT) if v is not None else None

    @model_validator(mode="after")
    def _required_not_null(self):
        for name in ("amount", "category_id", "date"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


@dataclass(frozen=True)
class ExpenseFilters:
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    category_ids: Tuple[uuid.UUID, ...] = ()
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    @classmethod
    def from_query(
        cls,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        category_ids: Optional[str] = None,
        min_amount: Optional[str] = None,
        max_amount: Optional[str] = None,
    ) -> "ExpenseFilters":
        """
        Build filters from raw query strings.

        Raises:
            ValueError: On malformed values or inverted ranges.
        """
        try:
            start = parse_range_bound(start_date)
            end = parse_range_bound(end_date, end=True)
        except ValueError:
            raise ValueError("startDate and endDate must be ISO dates")
        if start and end and start > end:
            raise ValueError("startDate must be before endDate")

        ids: list[uuid.UUID] = []
        for part in (category_ids or "").split(","):
            part = part.strip()
            if not part:
                continue
            try:
                ids.append(uuid.UUID(part))
            except ValueError:
                raise ValueError(f"invalid category id: {part}")

        lo = _parse_amount(min_amount, "minAmount")
        hi = _parse_amount(max_amount, "maxAmount")
        if lo is not None and hi is not None and lo > hi:
            raise ValueError("minAmount must not exceed maxAmount")

        return cls(start=start, end=end, category_ids=tuple(ids), min_amount=lo, max_amount=hi)


def _parse_amount(raw: Optional[str], name: str) -> Optional[Decimal]:
    if raw is None or not raw.strip():
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{name} must be a number")
    if not value.is_finite() or value < 0:
        raise ValueError(f"{name} must be a non-negative number")
    return value
