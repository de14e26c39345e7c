from __future__ import annotations

from datetime import datetime

from core.config import ProjectionConfig
from core.schema import AssetType
from data_prep.validators import validate_plan, validate_snapshots
from models.plan import PeriodOverride, PlanData
from models.snapshot import AssetEntry, FinancialData, Snapshot


def test_clean_history_passes(two_snapshots):
    result = validate_snapshots(two_snapshots)
    assert result.is_valid
    assert result.warnings == []
    assert "All checks passed" in result.summary()


def test_empty_history_is_valid():
    assert validate_snapshots([]).is_valid


def test_duplicate_ids_and_dates_are_errors(make_snapshot):
    snaps = [
        make_snapshot("a", datetime(2024, 1, 1), general=1),
        make_snapshot("a", datetime(2024, 1, 1), general=2),
    ]
    result = validate_snapshots(snaps)
    assert not result.is_valid
    assert len(result.errors) == 2


def test_mortgage_outside_property_warns():
    snap = Snapshot(
        id="s",
        date=datetime(2024, 1, 1),
        financial_data=FinancialData(assets=(
            AssetEntry(id="h", type=AssetType.REAL_ESTATE, amount=300000, mortgage=100000),
            AssetEntry(id="c", type=AssetType.GENERAL_CASH, amount=5000, mortgage=100),
        )),
    )
    result = validate_snapshots([snap])
    assert result.is_valid
    assert any("mortgage" in w for w in result.warnings)


def test_empty_snapshot_warns(make_snapshot):
    result = validate_snapshots([make_snapshot("s", datetime(2024, 1, 1))])
    assert result.is_valid
    assert any("no line items" in w for w in result.warnings)


def test_plan_warnings(two_snapshots):
    plan = PlanData(overrides={
        "appt-1": PeriodOverride(change=100),
        "appt-2": PeriodOverride(change=-50, savings=10),
        "future-sem-25": PeriodOverride(change=1),
        "typo": PeriodOverride(change=1),
        "future-sem-3": PeriodOverride(portfolio_override=5),
    })
    warnings = validate_plan(plan, two_snapshots).warnings

    assert any("'appt-1'" in w and "first snapshot" in w for w in warnings)
    assert any("'appt-2'" in w and "savings" in w for w in warnings)
    assert any("'future-sem-25'" in w and "horizon" in w for w in warnings)
    assert any("'typo'" in w for w in warnings)
    assert not any("'future-sem-3'" in w for w in warnings)


def test_plan_horizon_follows_config(two_snapshots):
    plan = PlanData(overrides={"future-sem-5": PeriodOverride(change=1)})
    assert validate_plan(plan, two_snapshots).warnings == []
    short = validate_plan(plan, two_snapshots, config=ProjectionConfig(horizon_periods=4))
    assert len(short.warnings) == 1


def test_rates_for_untracked_external_assets_warn(make_snapshot):
    snaps = [make_snapshot("s", datetime(2024, 1, 1), external={"x": 10.0})]
    plan = PlanData(external_asset_returns={"x": 3, "gone": 4})
    warnings = validate_plan(plan, snaps).warnings
    assert warnings == ["Return rates set for untracked external assets: ['gone']"]
