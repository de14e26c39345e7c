from __future__ import annotations

from datetime import datetime
from typing import FrozenSet, Optional, Tuple

from pydantic import Field, field_validator

from .plan import PlanData
from .snapshot import Record, Snapshot, as_naive_utc


class Client(Record):
    id: str
    name: str
    dob: Optional[datetime] = None
    appointments: Tuple[Snapshot, ...] = ()
    plan_data: PlanData = Field(default_factory=PlanData)

    @field_validator("dob")
    @classmethod
    def _normalize_dob(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(v)

    def sorted_appointments(self) -> Tuple[Snapshot, ...]:
        return tuple(sorted(self.appointments, key=lambda s: s.date))

    def latest_appointment(self) -> Optional[Snapshot]:
        ordered = self.sorted_appointments()
        return ordered[-1] if ordered else None

    def historical_ids(self) -> FrozenSet[str]:
        return frozenset(s.id for s in self.appointments)
