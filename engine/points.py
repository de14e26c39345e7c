"""
Projection output records.

ProjectionPoint is pure derived data: rebuilt from snapshots + overrides +
assumptions on every run and never mutated afterwards. Totals are properties
so their identities (total = sum of buckets) hold by construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, Tuple

import pandas as pd

from core.schema import EXTERNAL_COLUMN_PREFIX, PROJECTION_COLUMNS


@dataclass(frozen=True)
class ProjectionPoint:
    period_id: str
    date: datetime
    label: str
    general_liquidity: float
    consultant_liquidity: float
    capitale_versato: float
    portfolio_value: float
    external_values: Dict[str, float] = field(default_factory=dict)
    is_projection: bool = False
    period_change: float = 0.0
    period_savings: float = 0.0
    withdrawal_shortfall: float = 0.0

    @property
    def total_liquidity(self) -> float:
        return self.general_liquidity + self.consultant_liquidity

    @property
    def rendimenti(self) -> float:
        return self.portfolio_value - self.capitale_versato

    @property
    def external_total(self) -> float:
        return float(sum(self.external_values.values()))

    @property
    def capitale_totale(self) -> float:
        return (
            self.general_liquidity
            + self.consultant_liquidity
            + self.portfolio_value
            + self.external_total
        )

    def as_row(self) -> Dict[str, object]:
        row: Dict[str, object] = {c: getattr(self, c) for c in PROJECTION_COLUMNS}
        for asset_id, value in self.external_values.items():
            row[f"{EXTERNAL_COLUMN_PREFIX}{asset_id}"] = value
        return row


@dataclass(frozen=True)
class Projection:
    """Historical points followed by future points, in time order."""

    points: Tuple[ProjectionPoint, ...] = ()
    projection_start_index: int = 0

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ProjectionPoint]:
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    def historical(self) -> Tuple[ProjectionPoint, ...]:
        return self.points[: self.projection_start_index]

    def future(self) -> Tuple[ProjectionPoint, ...]:
        return self.points[self.projection_start_index:]

    def to_frame(self) -> pd.DataFrame:
        """
        One row per period. External assets get one "ext:<id>" column each;
        periods where an asset is not tracked show 0.
        """
        if not self.points:
            return pd.DataFrame(columns=list(PROJECTION_COLUMNS))
        df = pd.DataFrame([p.as_row() for p in self.points])
        ext_cols = [c for c in df.columns if c.startswith(EXTERNAL_COLUMN_PREFIX)]
        if ext_cols:
            df[ext_cols] = df[ext_cols].fillna(0.0)
        return df[list(PROJECTION_COLUMNS) + ext_cols]
