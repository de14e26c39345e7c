"""
Snapshot reducer: collapse one snapshot's line items into the handful of
aggregate figures the projection engine consumes.

Pure and total: absent categories contribute zero, nothing raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from core.schema import (
    AssetType,
    CONSULTANT_LIQUIDITY_TYPES,
    EXTERNAL_SECURITY_TYPES,
    GENERAL_LIQUIDITY_TYPES,
    IncomeType,
    PORTFOLIO_TYPES,
)
from models.snapshot import Snapshot


@dataclass(frozen=True)
class SnapshotFigures:
    general_liquidity: float
    consultant_liquidity: float
    portfolio_value: float
    external_security_values: Dict[str, float] = field(default_factory=dict)
    annual_savings: float = 0.0

    @property
    def external_total(self) -> float:
        return sum(self.external_security_values.values())


@dataclass(frozen=True)
class SnapshotTotals:
    """Headline totals shown on the snapshot form."""
    total_assets: float
    total_assets_excluding_property: float
    total_pensions: float
    annual_savings: float


def _sum_assets(snapshot: Snapshot, types) -> float:
    return float(sum(a.amount for a in snapshot.financial_data.assets if a.type in types))


def annual_savings(snapshot: Snapshot) -> float:
    income = sum(i.amount for i in snapshot.income_of(IncomeType.NET_INCOME))
    expense = sum(i.amount for i in snapshot.income_of(IncomeType.AVERAGE_EXPENSE))
    return float(income - expense)


def reduce_snapshot(snapshot: Snapshot) -> SnapshotFigures:
    """
    Derive liquidity buckets, managed portfolio value, per-asset external
    security values (keyed by asset id) and annual savings.
    """
    external: Dict[str, float] = {}
    for asset in snapshot.financial_data.assets:
        if asset.type in EXTERNAL_SECURITY_TYPES:
            external[asset.id] = external.get(asset.id, 0.0) + float(asset.amount)

    return SnapshotFigures(
        general_liquidity=_sum_assets(snapshot, GENERAL_LIQUIDITY_TYPES),
        consultant_liquidity=_sum_assets(snapshot, CONSULTANT_LIQUIDITY_TYPES),
        portfolio_value=_sum_assets(snapshot, PORTFOLIO_TYPES),
        external_security_values=external,
        annual_savings=annual_savings(snapshot),
    )


def snapshot_totals(snapshot: Snapshot) -> SnapshotTotals:
    assets = snapshot.financial_data.assets
    return SnapshotTotals(
        total_assets=float(sum(a.net_amount for a in assets)),
        total_assets_excluding_property=float(
            sum(a.net_amount for a in assets if a.type is not AssetType.REAL_ESTATE)
        ),
        total_pensions=float(sum(p.amount for p in snapshot.financial_data.pensions)),
        annual_savings=annual_savings(snapshot),
    )
