"""
Plan maintenance: override table edits and liquidity alerts.
"""

from .overrides import (
    parse_amount,
    prune_overrides,
    reset_future_plan,
    set_external_override,
    set_override_field,
)
from .liquidity import LiquidityStatus, classify_liquidity, liquidity_alerts

__all__ = [
    "parse_amount",
    "prune_overrides",
    "reset_future_plan",
    "set_external_override",
    "set_override_field",
    "LiquidityStatus",
    "classify_liquidity",
    "liquidity_alerts",
]
