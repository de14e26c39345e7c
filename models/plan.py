"""
Plan records: assumption parameters and the sparse per-period override table.

The override table is a single insertion-ordered mapping from period id to
PeriodOverride. Historical snapshot ids and synthetic "future-sem-<i>" ids
share that namespace. An override with no populated field is never retained:
PlanData drops such entries on construction, and every helper in
plan/overrides.py prunes after mutating.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from .snapshot import Record

SCALAR_OVERRIDE_FIELDS: Tuple[str, ...] = (
    "change",
    "savings",
    "consultant_liquidity_override",
    "portfolio_override",
)

# Fields that only mean something on a future period.
FUTURE_ONLY_FIELDS: Tuple[str, ...] = (
    "savings",
    "consultant_liquidity_override",
    "portfolio_override",
    "external_capital_overrides",
)


class PeriodOverride(Record):
    """User-supplied correction for one period. Every field is optional."""

    change: Optional[float] = None
    savings: Optional[float] = None
    consultant_liquidity_override: Optional[float] = None
    portfolio_override: Optional[float] = None
    external_capital_overrides: Dict[str, float] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f) is None for f in SCALAR_OVERRIDE_FIELDS) and not (
            self.external_capital_overrides
        )

    def populated_fields(self) -> Tuple[str, ...]:
        names = [f for f in SCALAR_OVERRIDE_FIELDS if getattr(self, f) is not None]
        if self.external_capital_overrides:
            names.append("external_capital_overrides")
        return tuple(names)


class PlanAssumptions(Record):
    """Annual return rates (percent) and the advisory minimum-liquidity threshold."""

    annual_return: float = Field(5.0, ge=-100.0)
    min_liquidity: float = 20000.0
    external_asset_returns: Dict[str, float] = Field(default_factory=dict)

    @field_validator("external_asset_returns")
    @classmethod
    def _rates_in_domain(cls, v: Dict[str, float]) -> Dict[str, float]:
        bad = {k: r for k, r in v.items() if r < -100.0}
        if bad:
            raise ValueError(f"External asset returns below -100%: {bad}")
        return v

    def external_return(self, asset_id: str) -> float:
        return self.external_asset_returns.get(asset_id, 0.0)

    def assumptions(self) -> "PlanAssumptions":
        return PlanAssumptions(
            annual_return=self.annual_return,
            min_liquidity=self.min_liquidity,
            external_asset_returns=dict(self.external_asset_returns),
        )


class PlanData(PlanAssumptions):
    """Assumptions plus the override table for one client."""

    overrides: Dict[str, PeriodOverride] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _rename_semesters(cls, data: Any) -> Any:
        # records saved by the browser app keep the table under "semesters"
        if isinstance(data, dict) and "semesters" in data and "overrides" not in data:
            data = dict(data)
            data["overrides"] = data.pop("semesters")
        return data

    @field_validator("overrides", mode="before")
    @classmethod
    def _accept_list_form(cls, v: Any) -> Any:
        # older stores keep overrides as a list of {"id": ..., ...} rows
        if isinstance(v, (list, tuple)):
            out: Dict[str, Any] = {}
            for row in v:
                row = dict(row)
                period_id = row.pop("id", None)
                if period_id is None:
                    raise ValueError("Override row without an id.")
                out[str(period_id)] = row
            return out
        return v

    @field_validator("overrides")
    @classmethod
    def _drop_empty(cls, v: Dict[str, PeriodOverride]) -> Dict[str, PeriodOverride]:
        return {k: o for k, o in v.items() if not o.is_empty}
