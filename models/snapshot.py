"""
Snapshot records: the line items captured at one advisor appointment.

Records are frozen: editing a snapshot means building a replacement with
model_copy(update=...), never mutating the stored one.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.schema import AssetType, IncomeType, PensionType


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored dates are naive UTC; aware input is converted, naive input is taken as UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Record(BaseModel):
    """Base for all stored records: immutable, finite amounts, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class IncomeEntry(Record):
    id: str
    type: IncomeType
    description: str = ""
    amount: float = 0.0


class AssetEntry(Record):
    id: str
    type: AssetType
    description: str = ""
    details: str = ""
    amount: float = 0.0
    mortgage: Optional[float] = None

    @property
    def net_amount(self) -> float:
        return self.amount - (self.mortgage or 0.0)


class PensionEntry(Record):
    id: str
    type: PensionType
    description: str = ""
    amount: float = 0.0


class FinancialData(Record):
    income: Tuple[IncomeEntry, ...] = ()
    assets: Tuple[AssetEntry, ...] = ()
    pensions: Tuple[PensionEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.income or self.assets or self.pensions)


class Snapshot(Record):
    """One appointment: a date plus the full set of financial line items."""

    id: str
    date: datetime
    financial_data: FinancialData = Field(default_factory=FinancialData)

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v: datetime) -> datetime:
        return as_naive_utc(v)

    @model_validator(mode="after")
    def _check_ids(self) -> "Snapshot":
        if not self.id:
            raise ValueError("Snapshot id must be non-empty.")
        return self

    def assets_of(self, *types: AssetType) -> Tuple[AssetEntry, ...]:
        return tuple(a for a in self.financial_data.assets if a.type in types)

    def income_of(self, *types: IncomeType) -> Tuple[IncomeEntry, ...]:
        return tuple(i for i in self.financial_data.income if i.type in types)
