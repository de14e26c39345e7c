"""
Cash-flow waterfall: the fixed draw order applied to any net investment or
withdrawal, shared by historical reconstruction and future simulation.

Managed cash is always spent before the portfolio is touched, both ways:
  Investment (change > 0): consultant liquidity first, then general
      liquidity (which may go negative). The full change lands in the portfolio.
  Withdrawal (change < 0): consultant liquidity first, then the portfolio.
      Whatever was actually drawn is credited to general liquidity.

Only money drawn from the portfolio counts against the invested-capital basis.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WaterfallResult:
    general_liquidity: float
    consultant_liquidity: float
    portfolio_value: float
    capital_change: float  # signed movement of the invested-capital basis
    shortfall: float = 0.0  # unmet part of a withdrawal; credited nowhere

    @property
    def bucket_total(self) -> float:
        return self.general_liquidity + self.consultant_liquidity + self.portfolio_value


def apply_waterfall(
    change: float,
    general_liquidity: float,
    consultant_liquidity: float,
    portfolio_value: float,
) -> WaterfallResult:
    general = float(general_liquidity)
    consultant = float(consultant_liquidity)
    portfolio = float(portfolio_value)

    if change > 0:
        from_consultant = min(change, consultant)
        consultant -= from_consultant
        remainder = change - from_consultant
        if remainder > 0:
            general -= remainder
        portfolio += change
        return WaterfallResult(general, consultant, portfolio, capital_change=float(change))

    if change < 0:
        need = abs(change)

        from_consultant = min(need, consultant)
        consultant -= from_consultant
        need -= from_consultant

        from_portfolio = min(need, portfolio)
        portfolio -= from_portfolio
        need -= from_portfolio

        general += from_consultant + from_portfolio
        return WaterfallResult(
            general,
            consultant,
            portfolio,
            capital_change=-from_portfolio,
            shortfall=max(need, 0.0),
        )

    return WaterfallResult(general, consultant, portfolio, capital_change=0.0)
