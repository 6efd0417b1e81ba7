"""
Trend forecasting logic for daily case counts, fitting an ordinary least squares line over index-vs-cases and extrapolating a fixed number of days past the last observation, clamped at zero.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from config import settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastRecord:
    date: date
    cases: int
    is_forecast: bool = True


@dataclass(frozen=True)
class TimelinePoint:
    date: date
    cases: int
    is_forecast: bool = False


def _linear_fit(vals: Sequence[float]) -> Optional[Tuple[float, float]]:
    n = len(vals)
    x = np.arange(n, dtype=float)
    try:
        y = np.asarray(vals, dtype=float)
    except OverflowError:
        # counts beyond float range cannot be fitted
        return None

    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))

    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    if not (math.isfinite(slope) and math.isfinite(intercept)):
        return None
    return slope, intercept


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def forecast(history: Sequence[Any], horizon: Optional[int] = None) -> List[ForecastRecord]:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    if horizon <= 0 or len(history) < settings.forecast_min_history:
        return []

    fit = _linear_fit([point.cases for point in history])
    if fit is None:
        log.warning("forecast: degenerate fit over %d points, no forecast", len(history))
        return []
    slope, intercept = fit

    n = len(history)
    last_date = history[-1].date
    out: List[ForecastRecord] = []
    for k in range(1, horizon + 1):
        raw = slope * (n + k - 1) + intercept
        out.append(ForecastRecord(
            date=last_date + timedelta(days=k),
            cases=_round_half_up(max(0.0, raw)),
        ))
    return out


def combine(history: Sequence[Any], forecasts: Sequence[ForecastRecord]) -> List[TimelinePoint]:
    timeline = [TimelinePoint(date=point.date, cases=point.cases) for point in history]
    timeline.extend(
        TimelinePoint(date=f.date, cases=f.cases, is_forecast=True) for f in forecasts
    )
    return timeline
