"""
Core package: enumerations, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import AssetType, IncomeType, PensionType, PROJECTION_COLUMNS
from .config import ProjectionConfig
from .utils import annual_to_period_rate, period_dates, period_label, content_fingerprint

__all__ = [
    "AssetType",
    "IncomeType",
    "PensionType",
    "PROJECTION_COLUMNS",
    "ProjectionConfig",
    "annual_to_period_rate",
    "period_dates",
    "period_label",
    "content_fingerprint",
]
