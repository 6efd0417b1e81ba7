"""
Series routes for aligning caller-supplied cases, recovered and vaccine coverage date maps.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from api.requests import AlignRequest
from api.responses import AlignResponse, AlignedRecordOut
from api.routes.exception import handle_exceptions
from engine.enums import DateKeyPolicy
from engine.series import MalformedSeriesEntry, align

router = APIRouter(tags=["Series"])


@router.post("/series/align", response_model=AlignResponse, summary="Align three metric date maps onto one date axis")
@handle_exceptions
async def align_series(req: AlignRequest) -> AlignResponse:
    policy = DateKeyPolicy.strict if req.strict else None
    try:
        records = align(req.cases, req.recovered, req.vaccines, policy=policy)
    except MalformedSeriesEntry as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return AlignResponse(records=[AlignedRecordOut.model_validate(r) for r in records])
