"""
Projection engine: cash-flow waterfall, historical reconstruction, future simulation.
"""

from .runner import run_projection
from .points import Projection, ProjectionPoint
from .waterfall import WaterfallResult, apply_waterfall
from .cache import ProjectionCache

__all__ = [
    "run_projection",
    "Projection",
    "ProjectionPoint",
    "WaterfallResult",
    "apply_waterfall",
    "ProjectionCache",
]
