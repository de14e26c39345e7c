from __future__ import annotations

from datetime import datetime

from engine.runner import run_projection
from models.plan import PeriodOverride, PlanAssumptions
from plan.liquidity import LiquidityStatus, classify_liquidity, liquidity_alerts


def test_classify_thresholds(make_snapshot):
    snaps = [
        make_snapshot("low", datetime(2024, 1, 1), general=5000),
        make_snapshot("ok", datetime(2024, 7, 1), general=25000),
        make_snapshot("neg", datetime(2025, 1, 1), general=-10),
    ]
    points = run_projection(snaps, {}, PlanAssumptions()).historical()
    assert [classify_liquidity(p, 20000) for p in points] == [
        LiquidityStatus.BELOW_MINIMUM,
        LiquidityStatus.OK,
        LiquidityStatus.NEGATIVE,
    ]


def test_alerts_flag_low_cash_and_shortfall(make_snapshot):
    snaps = [make_snapshot("a", datetime(2024, 1, 1), general=50000, consultant=1000, portfolio=2000)]
    overrides = {"future-sem-0": PeriodOverride(change=-10000)}
    projection = run_projection(snaps, overrides, PlanAssumptions(annual_return=0))

    alerts = liquidity_alerts(projection, min_liquidity=20000)
    assert list(alerts["period_id"]) == ["future-sem-0"]
    row = alerts.iloc[0]
    assert row["status"] == LiquidityStatus.OK.value
    assert row["withdrawal_shortfall"] == 7000


def test_no_alerts_gives_empty_frame(two_snapshots):
    projection = run_projection(two_snapshots, {}, PlanAssumptions())
    alerts = liquidity_alerts(projection, min_liquidity=0)
    assert alerts.empty
    assert "status" in alerts.columns
