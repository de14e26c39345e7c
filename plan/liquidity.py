"""
Liquidity alerts: flag periods whose general liquidity drops below the
client's advisory minimum or goes negative, plus any period where a
withdrawal could not be covered in full.

Purely informational; the engine never acts on the threshold.
"""

from __future__ import annotations

from enum import Enum

import pandas as pd

from engine.points import Projection, ProjectionPoint


class LiquidityStatus(str, Enum):
    OK = "ok"
    BELOW_MINIMUM = "below_minimum"
    NEGATIVE = "negative"


def classify_liquidity(point: ProjectionPoint, min_liquidity: float) -> LiquidityStatus:
    if point.general_liquidity < 0:
        return LiquidityStatus.NEGATIVE
    if point.general_liquidity < min_liquidity:
        return LiquidityStatus.BELOW_MINIMUM
    return LiquidityStatus.OK


def liquidity_alerts(projection: Projection, min_liquidity: float) -> pd.DataFrame:
    """
    Returns one row per flagged period:
        period_id, label, is_projection, general_liquidity, status, withdrawal_shortfall
    """
    rows = []
    for point in projection:
        status = classify_liquidity(point, min_liquidity)
        if status is LiquidityStatus.OK and point.withdrawal_shortfall <= 0:
            continue
        rows.append({
            "period_id": point.period_id,
            "label": point.label,
            "is_projection": point.is_projection,
            "general_liquidity": point.general_liquidity,
            "status": status.value,
            "withdrawal_shortfall": point.withdrawal_shortfall,
        })
    return pd.DataFrame(
        rows,
        columns=[
            "period_id",
            "label",
            "is_projection",
            "general_liquidity",
            "status",
            "withdrawal_shortfall",
        ],
    )
