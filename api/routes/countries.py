"""
Country routes: provider country list, global totals, the per-country aligned/forecast report, and two-country comparison.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query

from api.responses import CountryReportOut, GlobalTotals
from api.routes.common import get_connector, get_scheduler, safe_call
from api.routes.exception import handle_exceptions
from engine.pipeline import CountryReport, refresh_country
from engine.series import merge_comparison

router = APIRouter(tags=["Countries"])


def _coerce_query_value(value: Any, cast: Any) -> Any:
    # Allow direct unit-test invocation without FastAPI Query parsing.
    raw = value.default if hasattr(value, "default") else value
    return cast(raw) if raw is not None else None


async def _report(country: str, horizon: Optional[int], lastdays: Optional[int], cached: bool) -> CountryReport:
    scheduler = get_scheduler()
    if cached and scheduler is not None and horizon is None and lastdays is None:
        snapshot = scheduler.latest(country)
        if snapshot is not None:
            return snapshot
    return await safe_call(refresh_country(get_connector(), country, lastdays=lastdays, horizon=horizon))


@router.get("/countries", summary="Countries known to the statistics provider")
@handle_exceptions
async def list_countries() -> Dict[str, List[str]]:
    return {"countries": await safe_call(get_connector().countries())}


@router.get("/global", response_model=GlobalTotals, summary="Worldwide totals")
@handle_exceptions
async def global_totals() -> GlobalTotals:
    return GlobalTotals(**await safe_call(get_connector().global_totals()))


@router.get("/countries/{country}/report", response_model=CountryReportOut, summary="Aligned history, trend forecast and counters")
@handle_exceptions
async def country_report(
    country: str,
    horizon: Optional[int] = Query(default=None, ge=0, le=365),
    lastdays: Optional[int] = Query(default=None, ge=1, le=3650),
    cached: bool = Query(default=False),
) -> CountryReportOut:
    horizon = _coerce_query_value(horizon, int)
    lastdays = _coerce_query_value(lastdays, int)
    cached = _coerce_query_value(cached, bool)
    report = await _report(country, horizon, lastdays, cached)
    return CountryReportOut.model_validate(report)


@router.get("/countries/{country}/compare/{other}", summary="Side-by-side aligned series for two countries")
@handle_exceptions
async def compare_countries(
    country: str,
    other: str,
    lastdays: Optional[int] = Query(default=None, ge=1, le=3650),
) -> Dict[str, Any]:
    lastdays = _coerce_query_value(lastdays, int)
    if other.casefold() == country.casefold():
        primary = await _report(country, None, lastdays, cached=False)
        return {"rows": merge_comparison(country, primary.aligned, other, [])}

    primary, secondary = await asyncio.gather(
        _report(country, None, lastdays, cached=False),
        _report(other, None, lastdays, cached=False),
    )
    return {"rows": merge_comparison(country, primary.aligned, other, secondary.aligned)}
