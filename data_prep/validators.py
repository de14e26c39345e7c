"""
Data quality validation for snapshots and plans before they enter the engine.

Catches problems early:
- Duplicate snapshot ids or dates (the timeline would be ambiguous)
- Negative amounts, mortgages on non-property assets
- Overrides keyed by ids that no period will ever look up
- Fields set on periods that ignore them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import pandas as pd

from core.config import ProjectionConfig
from core.schema import AssetType
from models.plan import FUTURE_ONLY_FIELDS, PlanData
from models.snapshot import Snapshot


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a client's inputs."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def asset_frame(snapshots: Iterable[Snapshot]) -> pd.DataFrame:
    """One row per asset line item, tagged with its snapshot id."""
    rows = [
        {
            "snapshot_id": s.id,
            "asset_id": a.id,
            "type": a.type,
            "amount": a.amount,
            "mortgage": a.mortgage,
        }
        for s in snapshots
        for a in s.financial_data.assets
    ]
    return pd.DataFrame(rows, columns=["snapshot_id", "asset_id", "type", "amount", "mortgage"])


def validate_snapshots(snapshots: Sequence[Snapshot]) -> ValidationResult:
    """
    Run all checks on a client's snapshot history.
    Errors are blocking, warnings informational. An empty history is valid.
    """
    result = ValidationResult()
    if len(snapshots) == 0:
        return result

    meta = pd.DataFrame({"id": [s.id for s in snapshots], "date": [s.date for s in snapshots]})

    n_dup = int(meta["id"].duplicated().sum())
    if n_dup > 0:
        result.errors.append(f"{n_dup} duplicate snapshot ids found.")

    n_dup_dates = int(meta["date"].duplicated().sum())
    if n_dup_dates > 0:
        result.errors.append(f"{n_dup_dates} snapshots share a date with another snapshot.")

    n_empty = sum(1 for s in snapshots if s.financial_data.is_empty)
    if n_empty > 0:
        result.warnings.append(f"{n_empty} snapshots have no line items.")

    assets = asset_frame(snapshots)
    if len(assets) > 0:
        n_neg = int((assets["amount"] < 0).sum())
        if n_neg > 0:
            result.warnings.append(f"{n_neg} asset rows have a negative amount.")

        has_mortgage = assets["mortgage"].notna() & (assets["mortgage"] != 0)
        misplaced = has_mortgage & (assets["type"] != AssetType.REAL_ESTATE)
        n_misplaced = int(misplaced.sum())
        if n_misplaced > 0:
            result.warnings.append(
                f"{n_misplaced} non-property assets carry a mortgage; it only counts in totals."
            )

    return result


def validate_plan(
    plan: PlanData,
    snapshots: Sequence[Snapshot],
    *,
    config: ProjectionConfig = ProjectionConfig(),
) -> ValidationResult:
    """Check the override table against the periods that will actually exist."""
    result = ValidationResult()
    ordered = sorted(snapshots, key=lambda s: s.date)
    historical_ids = {s.id for s in ordered}
    future_ids = {config.future_period_id(i) for i in range(config.horizon_periods)}

    for period_id, override in plan.overrides.items():
        if period_id in historical_ids:
            if ordered and period_id == ordered[0].id and override.change is not None:
                result.warnings.append(
                    f"Override '{period_id}' sets a change on the first snapshot; it is ignored."
                )
            ignored = [f for f in override.populated_fields() if f in FUTURE_ONLY_FIELDS]
            if ignored:
                result.warnings.append(
                    f"Override '{period_id}' is historical; fields {ignored} are ignored."
                )
        elif config.is_future_period_id(period_id):
            if period_id not in future_ids:
                result.warnings.append(
                    f"Override '{period_id}' is beyond the {config.horizon_periods}-period horizon."
                )
        else:
            result.warnings.append(f"Override '{period_id}' matches no snapshot or future period.")

    rated = set(plan.external_asset_returns)
    if ordered:
        latest_external = {
            a.id for a in ordered[-1].assets_of(AssetType.EXTERNAL_SECURITIES)
        }
        stale = sorted(rated - latest_external)
        if stale:
            result.warnings.append(f"Return rates set for untracked external assets: {stale}")

    return result
