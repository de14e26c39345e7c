from __future__ import annotations

import hashlib
import json
import math
from datetime import datetime
from typing import Any

from dateutil.relativedelta import relativedelta

_IT_MONTHS = ("gen", "feb", "mar", "apr", "mag", "giu", "lug", "ago", "set", "ott", "nov", "dic")


def annual_to_period_rate(annual_pct: float, periods_per_year: int = 2) -> float:
    """
    Convert an annual percentage return into the compounded per-period rate
    via (1+r)^(1/k) - 1, so k periods reproduce the annual nominal rate exactly.
    """
    if annual_pct < -100.0:
        raise ValueError(f"Annual return {annual_pct}% is below -100%.")
    return math.pow(1.0 + annual_pct / 100.0, 1.0 / periods_per_year) - 1.0


def period_dates(anchor: datetime, n_periods: int, months_per_period: int = 6) -> list:
    """Dates of the n periods following anchor, each offset from anchor itself."""
    return [anchor + relativedelta(months=months_per_period * (k + 1)) for k in range(n_periods)]


def period_label(dt: datetime) -> str:
    """Short Italian month + year, e.g. 'ott 2023'."""
    return f"{_IT_MONTHS[dt.month - 1]} {dt.year}"


def content_fingerprint(*parts: Any) -> str:
    """Stable sha256 over JSON-able parts; used as a memo key."""
    payload = json.dumps(parts, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
