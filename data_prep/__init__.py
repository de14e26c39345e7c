"""
Data preparation: snapshot reduction, validation, client record serialization.
"""

from .reducer import SnapshotFigures, SnapshotTotals, reduce_snapshot, snapshot_totals
from .validators import ValidationResult, validate_plan, validate_snapshots
from .loader import clients_from_json, clients_to_json, dump_clients, load_clients

__all__ = [
    "SnapshotFigures",
    "SnapshotTotals",
    "reduce_snapshot",
    "snapshot_totals",
    "ValidationResult",
    "validate_plan",
    "validate_snapshots",
    "clients_from_json",
    "clients_to_json",
    "dump_clients",
    "load_clients",
]
