"""
Domain records: snapshots, plan assumptions, overrides, clients.
"""

from .snapshot import AssetEntry, FinancialData, IncomeEntry, PensionEntry, Snapshot
from .plan import PeriodOverride, PlanAssumptions, PlanData, SCALAR_OVERRIDE_FIELDS
from .client import Client

__all__ = [
    "AssetEntry",
    "FinancialData",
    "IncomeEntry",
    "PensionEntry",
    "Snapshot",
    "PeriodOverride",
    "PlanAssumptions",
    "PlanData",
    "SCALAR_OVERRIDE_FIELDS",
    "Client",
]
