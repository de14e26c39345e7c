from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Tuple


class AssetType(str, Enum):
    """Asset line-item categories as recorded on the snapshot form."""

    REAL_ESTATE = "Immobile"
    EXTERNAL_SECURITIES = "Capitale Mobiliare"
    MANAGED_PORTFOLIO = "Capitale in Consulenza"
    GENERAL_CASH = "Liquidità"
    MANAGED_CASH = "Liquidità in Consulenza"
    OTHER = "Altro"


class IncomeType(str, Enum):
    NET_INCOME = "Reddito Netto"
    AVERAGE_EXPENSE = "Spesa Media"
    OTHER = "Altro"


class PensionType(str, Enum):
    PENSION_FUND = "Fondo Pensione"
    SEVERANCE = "TFR"
    LIFE_INSURANCE = "Assicurazione Vita"
    OTHER = "Altro"


# Bucket classification consumed by the snapshot reducer.
GENERAL_LIQUIDITY_TYPES: FrozenSet[AssetType] = frozenset(
    {AssetType.GENERAL_CASH, AssetType.OTHER}
)
CONSULTANT_LIQUIDITY_TYPES: FrozenSet[AssetType] = frozenset({AssetType.MANAGED_CASH})
PORTFOLIO_TYPES: FrozenSet[AssetType] = frozenset({AssetType.MANAGED_PORTFOLIO})
EXTERNAL_SECURITY_TYPES: FrozenSet[AssetType] = frozenset({AssetType.EXTERNAL_SECURITIES})


# Canonical column order of the tabular projection export.
# Per-asset external values follow as "ext:<asset id>" columns.
PROJECTION_COLUMNS: Tuple[str, ...] = (
    "period_id",
    "date",
    "label",
    "is_projection",
    "period_savings",
    "period_change",
    "general_liquidity",
    "consultant_liquidity",
    "total_liquidity",
    "external_total",
    "capitale_versato",
    "rendimenti",
    "portfolio_value",
    "capitale_totale",
    "withdrawal_shortfall",
)

EXTERNAL_COLUMN_PREFIX = "ext:"
