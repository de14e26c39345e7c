from __future__ import annotations

from datetime import datetime

from core.schema import AssetType, IncomeType, PensionType
from data_prep.reducer import reduce_snapshot, snapshot_totals
from models.snapshot import AssetEntry, FinancialData, IncomeEntry, PensionEntry, Snapshot


def build_full_snapshot() -> Snapshot:
    return Snapshot(
        id="appt-1",
        date=datetime(2023, 10, 26),
        financial_data=FinancialData(
            income=(
                IncomeEntry(id="i1", type=IncomeType.NET_INCOME, amount=85000),
                IncomeEntry(id="i2", type=IncomeType.AVERAGE_EXPENSE, amount=55000),
                IncomeEntry(id="i3", type=IncomeType.OTHER, amount=9999),
            ),
            assets=(
                AssetEntry(id="a1", type=AssetType.REAL_ESTATE, amount=450000, mortgage=150000),
                AssetEntry(id="a2", type=AssetType.EXTERNAL_SECURITIES, amount=75000),
                AssetEntry(id="a3", type=AssetType.MANAGED_PORTFOLIO, amount=120000),
                AssetEntry(id="a4", type=AssetType.MANAGED_CASH, amount=80000),
                AssetEntry(id="a5", type=AssetType.GENERAL_CASH, amount=30000),
                AssetEntry(id="a6", type=AssetType.GENERAL_CASH, amount=20000),
                AssetEntry(id="a7", type=AssetType.OTHER, amount=5000),
                AssetEntry(id="a8", type=AssetType.EXTERNAL_SECURITIES, amount=192000),
            ),
            pensions=(
                PensionEntry(id="p1", type=PensionType.PENSION_FUND, amount=60000),
                PensionEntry(id="p2", type=PensionType.SEVERANCE, amount=45000),
            ),
        ),
    )


def test_reduce_snapshot_buckets():
    figures = reduce_snapshot(build_full_snapshot())
    assert figures.general_liquidity == 30000 + 20000 + 5000
    assert figures.consultant_liquidity == 80000
    assert figures.portfolio_value == 120000
    assert figures.external_security_values == {"a2": 75000, "a8": 192000}
    assert figures.external_total == 267000
    assert figures.annual_savings == 30000


def test_reduce_empty_snapshot_is_all_zero():
    figures = reduce_snapshot(Snapshot(id="empty", date=datetime(2024, 1, 1)))
    assert figures.general_liquidity == 0
    assert figures.consultant_liquidity == 0
    assert figures.portfolio_value == 0
    assert figures.external_security_values == {}
    assert figures.annual_savings == 0


def test_negative_savings_when_expenses_exceed_income(make_snapshot):
    snap = make_snapshot("s", datetime(2024, 1, 1), income=30000, expense=42000)
    assert reduce_snapshot(snap).annual_savings == -12000


def test_snapshot_totals_net_of_mortgage():
    totals = snapshot_totals(build_full_snapshot())
    all_assets = 450000 + 75000 + 120000 + 80000 + 30000 + 20000 + 5000 + 192000
    assert totals.total_assets == all_assets - 150000
    assert totals.total_assets_excluding_property == all_assets - 450000
    assert totals.total_pensions == 105000
    assert totals.annual_savings == 30000
