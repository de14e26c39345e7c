"""
Historical reconstruction: one point per recorded snapshot, oldest first.

Balances come from each snapshot as observed; the only thing layered on top is
the per-period net investment/withdrawal override, pushed through the waterfall
so the invested-capital basis (versato) can be carried across snapshots.
The first snapshot has no predecessor: its change is always 0 and its whole
portfolio counts as principal.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from core.utils import period_label
from data_prep.reducer import reduce_snapshot
from models.plan import PeriodOverride
from models.snapshot import Snapshot

from .points import ProjectionPoint
from .waterfall import apply_waterfall

logger = logging.getLogger(__name__)


def reconstruct_history(
    snapshots: Sequence[Snapshot],
    overrides: Mapping[str, PeriodOverride],
) -> List[ProjectionPoint]:
    """snapshots must already be in ascending date order."""
    points: List[ProjectionPoint] = []
    versato = 0.0

    for index, snapshot in enumerate(snapshots):
        figures = reduce_snapshot(snapshot)
        override = overrides.get(snapshot.id)

        if index == 0:
            change = 0.0
        else:
            change = override.change if override is not None and override.change is not None else 0.0

        flow = apply_waterfall(
            change,
            figures.general_liquidity,
            figures.consultant_liquidity,
            figures.portfolio_value,
        )
        if flow.shortfall > 0:
            logger.warning(
                "Snapshot %s: withdrawal of %.2f exceeds available funds by %.2f; shortfall dropped.",
                snapshot.id, abs(change), flow.shortfall,
            )

        if index == 0:
            versato = flow.portfolio_value
        else:
            versato = versato + flow.capital_change

        points.append(
            ProjectionPoint(
                period_id=snapshot.id,
                date=snapshot.date,
                label=period_label(snapshot.date),
                general_liquidity=flow.general_liquidity,
                consultant_liquidity=flow.consultant_liquidity,
                capitale_versato=versato,
                portfolio_value=flow.portfolio_value,
                external_values=dict(figures.external_security_values),
                is_projection=False,
                period_change=change,
                period_savings=0.0,
                withdrawal_shortfall=flow.shortfall,
            )
        )

    return points
