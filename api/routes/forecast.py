"""
Forecast routes for projecting a linear case trend over caller-supplied history.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.requests import ForecastRequest
from api.responses import ForecastRecordOut, ForecastResponse, TimelinePointOut
from api.routes.exception import handle_exceptions
from engine.forecast import combine, forecast

router = APIRouter(tags=["Forecast"])


@router.post("/forecast/trend", response_model=ForecastResponse, summary="Linear trend forecast of daily cases")
@handle_exceptions
async def case_trend(req: ForecastRequest) -> ForecastResponse:
    # input order is the regression index, so sort by date first
    history = sorted(req.history, key=lambda p: p.date)
    projected = forecast(history, req.horizon)
    return ForecastResponse(
        forecast=[ForecastRecordOut.model_validate(f) for f in projected],
        timeline=[TimelinePointOut.model_validate(p) for p in combine(history, projected)],
    )
