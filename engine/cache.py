"""
Memo for run_projection, keyed by the content of its inputs.

The projection is cheap but callers re-derive it on every observation of their
inputs; this keeps the last result and returns it while the fingerprint of
(sorted snapshots, overrides, assumptions, config) stays the same. Any change
to any of the four produces a new fingerprint, which invalidates the entry.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Iterable, Mapping, Optional

from core.config import ProjectionConfig
from core.utils import content_fingerprint
from models.plan import PeriodOverride, PlanAssumptions
from models.snapshot import Snapshot

from .points import Projection
from .runner import run_projection, sort_snapshots

logger = logging.getLogger(__name__)


def projection_key(
    snapshots: Iterable[Snapshot],
    overrides: Mapping[str, PeriodOverride],
    assumptions: PlanAssumptions,
    config: ProjectionConfig,
) -> str:
    return content_fingerprint(
        [s.model_dump(mode="json") for s in sort_snapshots(snapshots)],
        {k: o.model_dump(mode="json") for k, o in overrides.items()},
        assumptions.assumptions().model_dump(mode="json"),
        asdict(config),
    )


class ProjectionCache:
    """Single-entry memo; owned by its caller, not shared globally."""

    def __init__(self, config: ProjectionConfig = ProjectionConfig()) -> None:
        self.config = config
        self._key: Optional[str] = None
        self._value: Optional[Projection] = None
        self.hits = 0
        self.misses = 0

    def get(
        self,
        snapshots: Iterable[Snapshot],
        overrides: Optional[Mapping[str, PeriodOverride]] = None,
        assumptions: Optional[PlanAssumptions] = None,
    ) -> Projection:
        snapshots = tuple(snapshots)
        overrides = overrides or {}
        assumptions = assumptions if assumptions is not None else PlanAssumptions()

        key = projection_key(snapshots, overrides, assumptions, self.config)
        if key == self._key and self._value is not None:
            self.hits += 1
            logger.debug("Projection cache hit (%s).", key[:12])
            return self._value

        self.misses += 1
        logger.debug("Projection cache miss (%s).", key[:12])
        self._value = run_projection(snapshots, overrides, assumptions, self.config)
        self._key = key
        return self._value

    def clear(self) -> None:
        self._key = None
        self._value = None
