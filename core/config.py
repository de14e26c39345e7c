"""
Projection configuration.
Return rates and minimum liquidity are per-client data and live in
models/plan.py (PlanAssumptions); this only holds the shape of the timeline.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectionConfig:
    # ten years of semesters
    horizon_periods: int = 20
    months_per_period: int = 6
    periods_per_year: int = 2

    # synthetic ids share the override namespace with snapshot ids
    future_id_prefix: str = "future-sem-"

    def __post_init__(self) -> None:
        if self.horizon_periods < 0:
            raise ValueError("horizon_periods must be >= 0.")
        if self.months_per_period <= 0 or self.periods_per_year <= 0:
            raise ValueError("months_per_period and periods_per_year must be positive.")

    def future_period_id(self, index: int) -> str:
        return f"{self.future_id_prefix}{index}"

    def is_future_period_id(self, period_id: str) -> bool:
        return period_id.startswith(self.future_id_prefix)
