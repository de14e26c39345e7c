"""
Future simulation: fixed-horizon semesters rolled forward from the last
historical point.

Per period, in order:
  1. resolve savings (override or half the latest annual savings) and the
     net change (override or "invest all savings")
  2. accrue the portfolio return on the opening balance
  3. credit savings to general liquidity
  4. move each external security: forced value if overridden, else grow it
     at its own compounded rate
  5. push the change through the waterfall, moving versato with it
  6. consultant-liquidity override: reclassify the difference into the
     portfolio (and versato), grand total unchanged
  7. portfolio override: force the value, versato untouched
  8. emit the point; its closing balances open the next period
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, List, Mapping

from core.config import ProjectionConfig
from core.utils import annual_to_period_rate, period_dates, period_label
from models.plan import PeriodOverride, PlanAssumptions

from .points import ProjectionPoint
from .waterfall import apply_waterfall

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationState:
    """Closing balances of one period, used as the opening state of the next."""
    general_liquidity: float
    consultant_liquidity: float
    portfolio_value: float
    capitale_versato: float
    external_values: Dict[str, float]

    @classmethod
    def from_point(cls, point: ProjectionPoint) -> "SimulationState":
        return cls(
            general_liquidity=point.general_liquidity,
            consultant_liquidity=point.consultant_liquidity,
            portfolio_value=point.portfolio_value,
            capitale_versato=point.capitale_versato,
            external_values=dict(point.external_values),
        )


def _grow_external(
    values: Mapping[str, float],
    override: PeriodOverride | None,
    assumptions: PlanAssumptions,
    periods_per_year: int,
) -> Dict[str, float]:
    forced = override.external_capital_overrides if override is not None else {}
    out: Dict[str, float] = {}
    for asset_id, value in values.items():
        if asset_id in forced:
            out[asset_id] = float(forced[asset_id])
        else:
            rate = annual_to_period_rate(assumptions.external_return(asset_id), periods_per_year)
            out[asset_id] = value + value * rate
    return out


def simulate_future(
    opening: SimulationState,
    anchor_date: datetime,
    annual_savings: float,
    overrides: Mapping[str, PeriodOverride],
    assumptions: PlanAssumptions,
    config: ProjectionConfig = ProjectionConfig(),
) -> List[ProjectionPoint]:
    period_return = annual_to_period_rate(assumptions.annual_return, config.periods_per_year)
    default_savings = annual_savings / config.periods_per_year
    dates = period_dates(anchor_date, config.horizon_periods, config.months_per_period)

    state = opening
    points: List[ProjectionPoint] = []

    for i, when in enumerate(dates):
        period_id = config.future_period_id(i)
        override = overrides.get(period_id)

        savings = default_savings
        if override is not None and override.savings is not None:
            savings = override.savings
        change = savings
        if override is not None and override.change is not None:
            change = override.change

        portfolio = state.portfolio_value + state.portfolio_value * period_return
        general = state.general_liquidity + savings
        external = _grow_external(state.external_values, override, assumptions, config.periods_per_year)

        flow = apply_waterfall(change, general, state.consultant_liquidity, portfolio)
        if flow.shortfall > 0:
            logger.warning(
                "Period %s: withdrawal of %.2f exceeds available funds by %.2f; shortfall dropped.",
                period_id, abs(change), flow.shortfall,
            )
        general = flow.general_liquidity
        consultant = flow.consultant_liquidity
        portfolio = flow.portfolio_value
        versato = state.capitale_versato + flow.capital_change

        if override is not None and override.consultant_liquidity_override is not None:
            shift = consultant - override.consultant_liquidity_override
            consultant = override.consultant_liquidity_override
            portfolio += shift
            versato += shift

        if override is not None and override.portfolio_override is not None:
            portfolio = override.portfolio_override

        point = ProjectionPoint(
            period_id=period_id,
            date=when,
            label=period_label(when),
            general_liquidity=general,
            consultant_liquidity=consultant,
            capitale_versato=versato,
            portfolio_value=portfolio,
            external_values=external,
            is_projection=True,
            period_change=change,
            period_savings=savings,
            withdrawal_shortfall=flow.shortfall,
        )
        points.append(point)

        state = replace(
            state,
            general_liquidity=general,
            consultant_liquidity=consultant,
            portfolio_value=portfolio,
            capitale_versato=versato,
            external_values=dict(external),
        )

    return points
