"""
Health check route reporting service liveness and refresh scheduler state.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.routes.common import get_scheduler
from api.routes.exception import handle_exceptions

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> Dict[str, Any]:
    scheduler = get_scheduler()
    return {
        "status": "ok",
        "scheduler": "running" if scheduler is not None and scheduler.running else "stopped",
        "countries": scheduler.countries if scheduler is not None else [],
    }
