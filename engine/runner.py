"""
Projection runner: historical reconstruction followed by future simulation.

run_projection is a pure function of (snapshots, overrides, assumptions,
config): no I/O, no global state, identical inputs give identical output.
Snapshots may arrive in any order; they are sorted by date (stable) first.

The result is positionally aligned: the first len(snapshots) points are
historical, the remaining config.horizon_periods are simulated, and
Projection.projection_start_index marks the boundary ("today").
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from core.config import ProjectionConfig
from data_prep.reducer import reduce_snapshot
from models.plan import PeriodOverride, PlanAssumptions
from models.snapshot import Snapshot

from .future import SimulationState, simulate_future
from .historical import reconstruct_history
from .points import Projection

logger = logging.getLogger(__name__)


def sort_snapshots(snapshots: Iterable[Snapshot]) -> tuple:
    return tuple(sorted(snapshots, key=lambda s: s.date))


def run_projection(
    snapshots: Iterable[Snapshot],
    overrides: Optional[Mapping[str, PeriodOverride]] = None,
    assumptions: Optional[PlanAssumptions] = None,
    config: ProjectionConfig = ProjectionConfig(),
) -> Projection:
    """
    Build the full time series for one client.

    Parameters
    ----------
    snapshots : iterable of Snapshot
        Appointment history, any order. Empty history gives an empty Projection.
    overrides : mapping of period id -> PeriodOverride
        Sparse override table; historical ids and "future-sem-<i>" ids.
    assumptions : PlanAssumptions
        Annual return rates. A PlanData works too.
    config : ProjectionConfig
        Horizon and period length.
    """
    ordered = sort_snapshots(snapshots)
    overrides = overrides or {}
    assumptions = assumptions if assumptions is not None else PlanAssumptions()

    if not ordered:
        return Projection(points=(), projection_start_index=0)

    history = reconstruct_history(ordered, overrides)

    latest = ordered[-1]
    future = simulate_future(
        SimulationState.from_point(history[-1]),
        anchor_date=latest.date,
        annual_savings=reduce_snapshot(latest).annual_savings,
        overrides=overrides,
        assumptions=assumptions,
        config=config,
    )

    logger.debug("Projection built: %d historical + %d future points.", len(history), len(future))
    return Projection(points=tuple(history) + tuple(future), projection_start_index=len(history))
