import pathlib
import sys
from datetime import datetime
from typing import Dict, Optional

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.schema import AssetType, IncomeType  # noqa: E402
from models.snapshot import AssetEntry, FinancialData, IncomeEntry, Snapshot  # noqa: E402


def build_snapshot(
    snapshot_id: str,
    when: datetime,
    *,
    general: float = 0.0,
    consultant: float = 0.0,
    portfolio: float = 0.0,
    external: Optional[Dict[str, float]] = None,
    income: float = 0.0,
    expense: float = 0.0,
) -> Snapshot:
    assets = []
    if general:
        assets.append(AssetEntry(id="cash", type=AssetType.GENERAL_CASH, amount=general))
    if consultant:
        assets.append(AssetEntry(id="mcash", type=AssetType.MANAGED_CASH, amount=consultant))
    if portfolio:
        assets.append(AssetEntry(id="pf", type=AssetType.MANAGED_PORTFOLIO, amount=portfolio))
    for asset_id, amount in (external or {}).items():
        assets.append(AssetEntry(id=asset_id, type=AssetType.EXTERNAL_SECURITIES, amount=amount))

    lines = []
    if income:
        lines.append(IncomeEntry(id="inc", type=IncomeType.NET_INCOME, amount=income))
    if expense:
        lines.append(IncomeEntry(id="exp", type=IncomeType.AVERAGE_EXPENSE, amount=expense))

    return Snapshot(
        id=snapshot_id,
        date=when,
        financial_data=FinancialData(income=tuple(lines), assets=tuple(assets)),
    )


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def two_snapshots():
    """Six months apart, portfolio 120k -> 135k, 10k annual savings."""
    return [
        build_snapshot("appt-1", datetime(2024, 1, 15), general=20000, portfolio=120000,
                       income=10000),
        build_snapshot("appt-2", datetime(2024, 7, 15), general=20000, portfolio=135000,
                       income=10000),
    ]
