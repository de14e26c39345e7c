"""
Override table maintenance.

Tables are treated as immutable: every helper returns a new dict and leaves
its input alone. Each helper enforces the sparse-table invariant at its own
mutation site: an override left with no populated field is removed, never
stored as an empty record.
"""

from __future__ import annotations

import math
from typing import Collection, Dict, Mapping, Optional, Union

from core.config import ProjectionConfig
from models.plan import PeriodOverride, SCALAR_OVERRIDE_FIELDS

OverrideTable = Dict[str, PeriodOverride]


def parse_amount(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Normalize user input to a finite float, or None for "field absent".
    Blank, non-numeric, NaN and infinite input all count as absent.

    Text with a comma is read in Italian form ("1.500,50" is 1500.5: dots
    group thousands, the comma is the decimal mark). Text without a comma is
    a plain decimal, so "1.500" is 1.5.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if "," in value:
            value = value.replace(".", "").replace(",", ".")
        if not value:
            return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(out):
        return None
    return out


def prune_overrides(overrides: Mapping[str, PeriodOverride]) -> OverrideTable:
    return {k: o for k, o in overrides.items() if not o.is_empty}


def _store(overrides: Mapping[str, PeriodOverride], period_id: str, updated: PeriodOverride) -> OverrideTable:
    out = dict(overrides)
    if updated.is_empty:
        out.pop(period_id, None)
    else:
        out[period_id] = updated
    return out


def set_override_field(
    overrides: Mapping[str, PeriodOverride],
    period_id: str,
    field: str,
    value: Union[str, float, int, None],
) -> OverrideTable:
    """
    Set (or clear, when value parses as absent) one scalar field of the
    override for period_id. Unknown field names raise KeyError.
    """
    if field not in SCALAR_OVERRIDE_FIELDS:
        raise KeyError(f"Unknown override field '{field}'. Expected one of {SCALAR_OVERRIDE_FIELDS}.")

    parsed = parse_amount(value)
    current = overrides.get(period_id)
    if current is None:
        if parsed is None:
            return dict(overrides)
        current = PeriodOverride()

    return _store(overrides, period_id, current.model_copy(update={field: parsed}))


def set_external_override(
    overrides: Mapping[str, PeriodOverride],
    period_id: str,
    asset_id: str,
    value: Union[str, float, int, None],
) -> OverrideTable:
    """Set or clear the forced value of one external asset for period_id."""
    parsed = parse_amount(value)
    current = overrides.get(period_id)
    if current is None:
        if parsed is None:
            return dict(overrides)
        current = PeriodOverride()

    forced = dict(current.external_capital_overrides)
    if parsed is None:
        forced.pop(asset_id, None)
    else:
        forced[asset_id] = parsed

    return _store(overrides, period_id, current.model_copy(update={"external_capital_overrides": forced}))


def reset_future_plan(
    overrides: Mapping[str, PeriodOverride],
    historical_ids: Collection[str],
) -> OverrideTable:
    """Drop every override that is not keyed by an existing snapshot id."""
    keep = set(historical_ids)
    return {k: o for k, o in overrides.items() if k in keep}


def future_overrides(
    overrides: Mapping[str, PeriodOverride],
    config: ProjectionConfig = ProjectionConfig(),
) -> OverrideTable:
    return {k: o for k, o in overrides.items() if config.is_future_period_id(k)}
